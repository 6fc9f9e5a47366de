"""Unit tests for the pipeline runner.

Tests the ScanPipeline orchestration including:
- Target processing with a stubbed fetcher
- Error isolation (one target failure doesn't stop others)
- Enrichment wiring
- Result aggregation and the response envelope
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

from internscan.domain.results import StepResult
from internscan.enrichment import AcceptanceRateEnricher, RateSource
from internscan.fetching import FetchedPage
from internscan.persistence import JobListingRepository, PersistenceError, get_session
from internscan.pipeline import NOTHING_TO_SCAN, ScanPipeline, ScanResult, TargetRunStats

PAGES_DIR = Path(__file__).parent / "fixtures" / "pages"


def page_result(url: str, fixture: str) -> StepResult:
    html = (PAGES_DIR / fixture).read_text(encoding="utf-8")
    return StepResult.success(FetchedPage(requested_url=url, url=url, html=html, attempts=[url]))


def stub_fetcher(pages):
    """Fetcher answering from a {url: fixture} map; other URLs fail."""
    fetcher = Mock()

    def fetch(url):
        if url in pages:
            return page_result(url, pages[url])
        return StepResult.failed(f"HTTP 404: Not Found ({url})")

    fetcher.fetch.side_effect = fetch
    return fetcher


def stored_titles(company_id):
    with get_session() as session:
        return [r.title for r in JobListingRepository(session).list_for_company(company_id)]


class FixedRateSource(RateSource):
    name = "fixed"

    def applies_to(self, url):
        return True

    def lookup(self, url):
        return 4.2


class TestScanPipeline:
    """Test suite for ScanPipeline.run_scan."""

    def test_basic_flow(self, app_config, seed_company):
        seed_company("c1", "Example", career_pages=["https://example.com/careers"])
        fetcher = stub_fetcher({"https://example.com/careers": "jsonld_posting.html"})

        result = ScanPipeline(app_config, fetcher=fetcher).run_scan()

        assert result.total_inserted == 1
        assert result.companies_processed == 1
        stats = result.target_stats[0]
        assert stats.extraction_method == "linked-data"
        assert stats.extracted_count == 1
        assert stats.normalized_count == 1
        assert stats.inserted_count == 1
        assert not stats.had_errors
        assert stored_titles("c1") == ["Platform Engineering Intern"]

    def test_rescan_inserts_nothing(self, app_config, seed_company):
        seed_company("c1", "Example", career_pages=["https://example.com/careers"])
        fetcher = stub_fetcher({"https://example.com/careers": "jsonld_posting.html"})
        pipeline = ScanPipeline(app_config, fetcher=fetcher)

        pipeline.run_scan()
        second = pipeline.run_scan()

        assert second.total_inserted == 0
        assert second.target_stats[0].skipped_count == 1
        assert stored_titles("c1") == ["Platform Engineering Intern"]

    def test_fetch_failure_does_not_stop_other_targets(self, app_config, seed_company):
        seed_company("a", "Alpha", career_pages=["https://alpha.example/careers"])
        seed_company("b", "Beta", career_pages=["https://boards.greenhouse.io/beta"])
        fetcher = stub_fetcher({"https://boards.greenhouse.io/beta": "greenhouse_board.html"})

        result = ScanPipeline(app_config, fetcher=fetcher).run_scan()

        assert result.companies_processed == 2
        assert result.total_inserted == 1
        failed, ok = result.target_stats
        assert failed.fetched_url is None
        assert "HTTP 404" in failed.error_message
        assert ok.extraction_method == "greenhouse"
        assert result.had_errors

    def test_unexpected_error_is_isolated(self, app_config, seed_company):
        seed_company("a", "Alpha", career_pages=["https://alpha.example/careers"])
        seed_company("b", "Beta", career_pages=["https://beta.example/careers"])
        fetcher = stub_fetcher(
            {
                "https://alpha.example/careers": "jsonld_posting.html",
                "https://beta.example/careers": "heuristic_listing.html",
            }
        )
        extractor = Mock()
        real = ScanPipeline(app_config, fetcher=fetcher).extractor

        def extract(page):
            if "alpha" in page.url:
                raise RuntimeError("parser exploded")
            return real.extract(page)

        extractor.extract.side_effect = extract

        result = ScanPipeline(app_config, fetcher=fetcher, extractor=extractor).run_scan()

        assert result.target_stats[0].error_message == "parser exploded"
        assert result.target_stats[1].inserted_count == 1
        assert result.total_inserted == 1

    def test_page_without_postings(self, app_config, seed_company):
        seed_company("c1", "Example", career_pages=["https://example.com/careers"])
        fetcher = stub_fetcher({"https://example.com/careers": "no_postings.html"})

        result = ScanPipeline(app_config, fetcher=fetcher).run_scan()

        assert result.total_inserted == 0
        assert result.companies_processed == 1
        assert result.target_stats[0].extraction_method is None
        assert not result.had_errors

    def test_nothing_to_scan(self, app_config, test_database):
        fetcher = Mock()

        result = ScanPipeline(app_config, fetcher=fetcher).run_scan()

        assert result.message == NOTHING_TO_SCAN
        assert result.companies_processed == 0
        assert result.total_inserted == 0
        fetcher.fetch.assert_not_called()

    def test_company_filter(self, app_config, seed_company):
        seed_company("a", "Alpha", career_pages=["https://alpha.example/careers"])
        seed_company("b", "Beta", career_pages=["https://beta.example/careers"])
        fetcher = stub_fetcher({"https://beta.example/careers": "jsonld_posting.html"})

        result = ScanPipeline(app_config, fetcher=fetcher).run_scan(company_ids=["b"])

        assert result.companies_processed == 1
        fetcher.fetch.assert_called_once_with("https://beta.example/careers")

    def test_geographies_override_config(self, app_config, seed_company):
        seed_company("c1", "Labs", career_pages=["https://labs.example.org/careers"])
        fetcher = stub_fetcher({"https://labs.example.org/careers": "links_only.html"})

        ScanPipeline(app_config, fetcher=fetcher).run_scan(geographies=["Berlin"])

        with get_session() as session:
            rows = JobListingRepository(session).list_for_company("c1")
        assert {r.location for r in rows} == {"Berlin"}

    def test_configured_geographies_used_by_default(self, app_config, seed_company):
        seed_company("c1", "Labs", career_pages=["https://labs.example.org/careers"])
        fetcher = stub_fetcher({"https://labs.example.org/careers": "links_only.html"})

        ScanPipeline(app_config, fetcher=fetcher).run_scan()

        with get_session() as session:
            rows = JobListingRepository(session).list_for_company("c1")
        assert {r.location for r in rows} == {"Toronto"}

    def test_enrichment_attaches_rate(self, app_config, seed_company):
        seed_company("c1", "Example", career_pages=["https://example.com/careers"])
        fetcher = stub_fetcher({"https://example.com/careers": "jsonld_posting.html"})
        enricher = AcceptanceRateEnricher(sources=[FixedRateSource()])

        result = ScanPipeline(app_config, fetcher=fetcher, enricher=enricher).run_scan()

        assert result.target_stats[0].enriched_count == 1
        with get_session() as session:
            row = JobListingRepository(session).list_for_company("c1")[0]
        assert row.acceptance_rate == 4.2

    def test_directory_failure_propagates(self, app_config):
        resolver = Mock()
        resolver.resolve.side_effect = PersistenceError("database locked")

        with pytest.raises(PersistenceError):
            ScanPipeline(app_config, resolver=resolver, fetcher=Mock()).run_scan()


class TestScanResult:
    """Tests for result aggregation."""

    def test_auto_aggregation_on_init(self):
        now = datetime.now(timezone.utc)
        stats = [
            TargetRunStats(company_id="a", url="https://a.example/careers", inserted_count=2),
            TargetRunStats(company_id="a", url="https://a.example/jobs", inserted_count=1),
            TargetRunStats(company_id="b", url="https://b.example/careers", error_message="HTTP 404"),
        ]

        result = ScanResult(run_started_at=now, run_finished_at=now + timedelta(seconds=3), target_stats=stats)

        assert result.companies_processed == 3
        assert result.total_inserted == 3
        assert result.total_duration_seconds == 3
        assert result.had_errors

    def test_to_response(self):
        now = datetime.now(timezone.utc)
        result = ScanResult(
            run_started_at=now,
            run_finished_at=now,
            target_stats=[TargetRunStats(company_id="a", url="u", inserted_count=2)],
        )

        assert result.to_response() == {"ok": True, "totalInserted": 2, "companiesProcessed": 1}

    def test_to_response_with_message(self):
        now = datetime.now(timezone.utc)
        result = ScanResult(run_started_at=now, run_finished_at=now, message=NOTHING_TO_SCAN)

        assert result.to_response() == {
            "ok": True,
            "totalInserted": 0,
            "companiesProcessed": 0,
            "message": NOTHING_TO_SCAN,
        }

    def test_target_stats_defaults(self):
        stats = TargetRunStats(company_id="a", url="u")

        assert stats.inserted_count == 0
        assert not stats.had_errors
