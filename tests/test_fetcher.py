"""Unit tests for the page fetcher."""

from unittest.mock import Mock, patch

import pytest
import requests

from internscan.config.models import FetchConfig
from internscan.fetching import (
    FetchHTTPError,
    FetchTimeoutError,
    PageFetcher,
    candidate_urls,
)


def make_response(status_code=200, text="<html></html>", reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    return response


@pytest.fixture
def session():
    mock_session = Mock()
    mock_session.headers = {}
    return mock_session


class TestCandidateUrls:
    def test_careers_url_gets_fallbacks(self):
        assert candidate_urls("https://acme.com/careers") == [
            "https://acme.com/careers",
            "https://acme.com/jobs",
            "https://acme.com/careers/en-us",
        ]

    def test_only_first_occurrence_replaced(self):
        urls = candidate_urls("https://acme.com/careers/search?from=careers")

        assert urls[1] == "https://acme.com/jobs/search?from=careers"

    def test_url_without_careers_segment(self):
        assert candidate_urls("https://boards.greenhouse.io/acme") == [
            "https://boards.greenhouse.io/acme"
        ]


class TestPageFetcher:
    """Tests for PageFetcher.fetch and fetch_once."""

    def test_sets_browser_headers(self, session):
        config = FetchConfig(user_agent="TestAgent/1.0")

        PageFetcher(config, session=session)

        assert session.headers["User-Agent"] == "TestAgent/1.0"
        assert "text/html" in session.headers["Accept"]

    def test_first_url_succeeds(self, session):
        session.get.return_value = make_response(text="<h1>Jobs</h1>")

        result = PageFetcher(session=session).fetch("https://acme.com/careers")

        assert result.ok
        page = result.value
        assert page.url == "https://acme.com/careers"
        assert page.html == "<h1>Jobs</h1>"
        assert page.attempts == ["https://acme.com/careers"]
        session.get.assert_called_once()
        _, kwargs = session.get.call_args
        assert kwargs["timeout"] == 15.0

    def test_falls_back_to_jobs_variant(self, session):
        session.get.side_effect = [
            make_response(status_code=404, reason="Not Found"),
            make_response(text="<h1>Jobs</h1>"),
        ]

        result = PageFetcher(session=session).fetch("https://acme.com/careers")

        assert result.ok
        assert result.value.url == "https://acme.com/jobs"
        assert result.value.requested_url == "https://acme.com/careers"
        assert result.value.attempts == ["https://acme.com/careers", "https://acme.com/jobs"]

    def test_all_variants_fail(self, session):
        session.get.side_effect = [
            make_response(status_code=404, reason="Not Found"),
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.ReadTimeout("slow"),
        ]

        result = PageFetcher(session=session).fetch("https://acme.com/careers")

        assert result.is_failure
        assert "timed out" in result.reason
        assert session.get.call_count == 3

    def test_url_without_fallbacks_fails_after_one_attempt(self, session):
        session.get.return_value = make_response(status_code=500, reason="Server Error")

        result = PageFetcher(session=session).fetch("https://boards.greenhouse.io/acme")

        assert result.is_failure
        assert "HTTP 500" in result.reason
        session.get.assert_called_once()

    def test_latency_budget_stops_fallbacks(self, session):
        session.get.return_value = make_response(status_code=503, reason="Unavailable")
        config = FetchConfig(timeout_seconds=10, total_timeout_seconds=20)

        with patch("internscan.fetching.fetcher.time") as mock_time:
            # deadline at 0 + 20; first attempt at 0; second check at 25
            mock_time.monotonic.side_effect = [0.0, 0.0, 25.0]
            result = PageFetcher(config, session=session).fetch("https://acme.com/careers")

        assert result.is_failure
        assert "budget" in result.reason
        session.get.assert_called_once()

    def test_timeout_capped_by_remaining_budget(self, session):
        session.get.return_value = make_response()
        config = FetchConfig(timeout_seconds=10, total_timeout_seconds=20)

        with patch("internscan.fetching.fetcher.time") as mock_time:
            mock_time.monotonic.side_effect = [0.0, 16.0]
            PageFetcher(config, session=session).fetch("https://acme.com/careers")

        _, kwargs = session.get.call_args
        assert kwargs["timeout"] == pytest.approx(4.0)

    def test_fetch_once_raises_http_error(self, session):
        session.get.return_value = make_response(status_code=403, reason="Forbidden")

        with pytest.raises(FetchHTTPError) as exc_info:
            PageFetcher(session=session).fetch_once("https://www.linkedin.com/jobs/view/1")

        assert exc_info.value.status_code == 403
        assert exc_info.value.url == "https://www.linkedin.com/jobs/view/1"

    def test_fetch_once_timeout(self, session):
        session.get.side_effect = requests.exceptions.ConnectTimeout("slow")

        with pytest.raises(FetchTimeoutError):
            PageFetcher(session=session).fetch_once("https://example.com", timeout=2)

        _, kwargs = session.get.call_args
        assert kwargs["timeout"] == 2

    def test_network_error_maps_to_status_zero(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError("dns")

        with pytest.raises(FetchHTTPError) as exc_info:
            PageFetcher(session=session).fetch_once("https://example.com")

        assert exc_info.value.status_code == 0

    def test_close_closes_session(self, session):
        PageFetcher(session=session).close()

        session.close.assert_called_once()


def raw_response(body: bytes, content_type: str) -> requests.Response:
    response = requests.Response()
    response.status_code = 200
    response.reason = "OK"
    response.headers["Content-Type"] = content_type
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    response._content = body
    return response


class TestResponseDecoding:
    """Pages served without a charset are decoded by content, not as Latin-1."""

    PAGE = (
        "<html><body><h1>Ingénieur stagiaire Intern – Montréal</h1>"
        "<p>Équipe données, été 2026. Rémunération compétitive, télétravail possible.</p>"
        "</body></html>"
    )

    def test_utf8_page_without_charset(self, session):
        session.get.return_value = raw_response(self.PAGE.encode("utf-8"), "text/html")

        result = PageFetcher(session=session).fetch("https://example.fr/careers")

        assert result.ok
        assert "Ingénieur stagiaire Intern – Montréal" in result.value.html

    def test_declared_charset_is_kept(self, session):
        body = "<h1>Stagiaire Montréal</h1>".encode("cp1252")
        session.get.return_value = raw_response(body, "text/html; charset=windows-1252")

        page = PageFetcher(session=session).fetch_once("https://example.fr/careers")

        assert page.html == "<h1>Stagiaire Montréal</h1>"

    def test_latin1_default_replaced_by_apparent_encoding(self, session):
        response = make_response(text="<h1>ok</h1>")
        response.encoding = "ISO-8859-1"
        response.apparent_encoding = "utf-8"
        session.get.return_value = response

        PageFetcher(session=session).fetch_once("https://example.com/careers")

        assert response.encoding == "utf-8"
