"""Tests for field extraction and posting normalization."""

from datetime import date
from pathlib import Path

import pytest

from internscan.config.models import ExtractionConfig
from internscan.domain.models import LOCATION_NOT_SPECIFIED, RawPosting
from internscan.normalization import (
    JobNormalizer,
    extract_location,
    extract_skills,
    extract_term,
    extract_visa_sponsorship,
    parse_posting_date,
    truncate_description,
)
from internscan.utils.html import ParsedPage

PAGES_DIR = Path(__file__).parent / "fixtures" / "pages"

SCAN_DATE = date(2025, 3, 14)


def load_page(name: str, url: str = "https://example.com/careers") -> ParsedPage:
    return ParsedPage(url=url, html=(PAGES_DIR / name).read_text(encoding="utf-8"))


class TestExtractLocation:
    """Tests for the location fallback chain."""

    def test_structured_value_wins(self):
        assert extract_location("Location: Paris", structured="Toronto") == "Toronto"

    def test_overlong_structured_value_ignored(self):
        assert extract_location("Location: Paris", structured="x" * 120) == "Paris"

    def test_labelled_location_stops_at_comma(self):
        assert extract_location("Location: Waterloo, ON\nGreat team") == "Waterloo"

    def test_label_on_its_own_line(self):
        assert extract_location("Location:\nMontreal") == "Montreal"

    def test_label_like_value_skipped(self):
        text = "Location: Location TBD"

        assert extract_location(text, default_geographies=["Remote"]) == "Remote"

    def test_page_linked_data_location(self):
        assert extract_location("", page=load_page("jsonld_posting.html")) == "Toronto"

    def test_page_label(self):
        page = ParsedPage(
            url="https://acme.example/careers",
            html="<div><span>Location:</span><span>Berlin</span></div>",
        )

        assert extract_location("", page=page) == "Berlin"

    def test_location_classed_element(self):
        page = ParsedPage(
            url="https://acme.example/careers",
            html='<div><span class="job-location">Lisbon</span></div>',
        )

        assert extract_location("", page=page) == "Lisbon"

    def test_data_location_attribute(self):
        page = ParsedPage(url="https://acme.example/careers", html='<div data-location="Oslo"></div>')

        assert extract_location("", page=page) == "Oslo"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Join our team based in Toronto this summer", "Toronto"),
            ("Interns work in San Francisco, California", "San Francisco, California"),
            ("Our lab located in Zurich is hiring", "Zurich"),
        ],
    )
    def test_location_phrase(self, text, expected):
        assert extract_location(text) == expected

    def test_first_default_geography(self):
        assert extract_location("no place here", default_geographies=["Vancouver", "Remote"]) == "Vancouver"

    def test_sentinel_when_nothing_found(self):
        assert extract_location("") == LOCATION_NOT_SPECIFIED
        assert extract_location("", default_geographies=[]) == LOCATION_NOT_SPECIFIED


class TestExtractVisaSponsorship:
    @pytest.mark.parametrize(
        "text",
        [
            "Visa sponsorship available for this role.",
            "We sponsor visas for interns.",
            "H1B sponsorship offered.",
        ],
    )
    def test_offers(self, text):
        assert extract_visa_sponsorship(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "We offer visa sponsorship. Must be authorized to work in Canada.",
            "We are unable to sponsor visas.",
            "Applicants must be a U.S. citizen.",
        ],
    )
    def test_refusal_wins(self, text):
        assert extract_visa_sponsorship(text) is False

    def test_refusal_on_page_overrides_posting(self):
        assert extract_visa_sponsorship("Visa sponsorship available", "We do not sponsor visas") is False

    def test_no_mention(self):
        assert extract_visa_sponsorship("Build tools in Python") is False


class TestExtractTerm:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Software Engineering Intern, Summer 2026", "Summer 2026"),
            ("Runs Jan 2026 - Aug 2026 in Toronto", "Jan 2026 - Aug 2026"),
            ("Internship September 2025 – December 2025", "September 2025 – December 2025"),
            ("Co-op for the 2025-2026 academic year", "2025-2026"),
            ("fall 2025 cohort", "fall 2025"),
        ],
    )
    def test_terms(self, text, expected):
        assert extract_term(text) == expected

    def test_no_term(self):
        assert extract_term("Data Intern") is None
        assert extract_term("") is None


class TestExtractSkills:
    def test_vocabulary_order(self):
        assert extract_skills("We use SQL, React and Python daily") == ["Python", "React", "SQL"]

    def test_javascript_also_counts_as_java(self):
        assert extract_skills("Strong JavaScript skills") == ["JavaScript", "Java"]

    def test_limit(self):
        text = "JavaScript TypeScript Python C++ React Node.js SQL AWS"

        assert extract_skills(text) == ["JavaScript", "TypeScript", "Python", "Java", "C++"]
        assert extract_skills(text, limit=2) == ["JavaScript", "TypeScript"]

    def test_no_skills(self):
        assert extract_skills("Great communication") == []


class TestSmallFields:
    def test_truncate_description(self):
        assert truncate_description("  " + "a" * 1200, limit=1000) == "a" * 1000
        assert truncate_description(None) == ""

    def test_parse_posting_date(self):
        assert parse_posting_date("2025-03-01") == date(2025, 3, 1)
        assert parse_posting_date("ASAP") is None


class TestJobNormalizer:
    """Tests for RawPosting -> NormalizedJob."""

    def test_linked_data_posting(self):
        page = load_page("jsonld_posting.html")
        raw = RawPosting(
            title="Platform Engineering Intern",
            description_text=(
                "Build internal tooling with Python, Docker and Kubernetes. "
                "Summer 2026 cohort. Visa sponsorship available."
            ),
            posted_at="2025-03-01",
            raw_location_text="Toronto",
            source_url="https://example.com/careers/platform-engineering-intern",
        )

        job = JobNormalizer(scan_date=SCAN_DATE).normalize(raw, page)

        assert job.title == "Platform Engineering Intern"
        assert job.post_date == date(2025, 3, 1)
        assert job.due_date is None
        assert job.is_rolling is True
        assert job.key_skills == ["Python", "Docker", "Kubernetes"]
        assert job.visa_sponsorship is True
        assert job.location == "Toronto"
        assert job.term == "Summer 2026"
        assert job.acceptance_rate is None
        assert job.url == "https://example.com/careers/platform-engineering-intern"

    def test_missing_post_date_uses_scan_date(self):
        raw = RawPosting(title="Data Intern", source_url="https://example.com/jobs/1")

        job = JobNormalizer(scan_date=SCAN_DATE).normalize(raw)

        assert job.post_date == SCAN_DATE

    def test_deadline_makes_posting_non_rolling(self):
        raw = RawPosting(
            title="Hardware Engineering Intern",
            valid_through="2025-05-15",
            source_url="https://example.com/jobs/2",
        )

        job = JobNormalizer(scan_date=SCAN_DATE).normalize(raw)

        assert job.due_date == date(2025, 5, 15)
        assert job.is_rolling is False

    def test_unreadable_deadline_is_rolling(self):
        raw = RawPosting(title="Data Intern", valid_through="ASAP", source_url="https://example.com/jobs/3")

        job = JobNormalizer(scan_date=SCAN_DATE).normalize(raw)

        assert job.due_date is None
        assert job.is_rolling is True

    def test_context_text_feeds_location_and_skills(self):
        raw = RawPosting(
            title="Backend Developer Intern (Fall 2025)",
            description_text="Build services in Java and SQL alongside the payments team.",
            context_text="Backend Developer Intern (Fall 2025)\nLocation:\nWaterloo, ON",
            source_url="https://acme.example/careers/jobs/backend-intern",
        )

        job = JobNormalizer(scan_date=SCAN_DATE, geographies=["Toronto"]).normalize(raw)

        assert job.location == "Waterloo"
        assert job.key_skills == ["Java", "SQL"]
        assert job.term == "Fall 2025"

    def test_geography_fallback(self):
        raw = RawPosting(title="Research Intern", source_url="https://example.com/jobs/4")

        job = JobNormalizer(scan_date=SCAN_DATE, geographies=["Toronto", "Remote"]).normalize(raw)

        assert job.location == "Toronto"

    def test_description_truncated(self):
        raw = RawPosting(title="Data Intern", description_text="a" * 2000, source_url="https://example.com/jobs/5")

        job = JobNormalizer(
            scan_date=SCAN_DATE, config=ExtractionConfig(max_description_length=100)
        ).normalize(raw)

        assert job.description == "a" * 100

    def test_normalize_all_drops_invalid_postings(self):
        postings = [
            RawPosting(title="Data Intern", source_url="https://example.com/jobs/1"),
            RawPosting(title="Senior Engineer", source_url="https://example.com/jobs/2"),
        ]

        jobs = JobNormalizer(scan_date=SCAN_DATE).normalize_all(postings)

        assert [j.title for j in jobs] == ["Data Intern"]
