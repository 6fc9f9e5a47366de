"""Convert extracted RawPostings into validated NormalizedJobs."""

from datetime import date
from typing import List, Optional, Sequence

from pydantic import ValidationError

from internscan.config.models import ExtractionConfig
from internscan.domain.models import NormalizedJob, RawPosting
from internscan.logging import get_logger
from internscan.utils.html import ParsedPage
from internscan.utils.timestamps import utc_today

from .fields import (
    extract_location,
    extract_skills,
    extract_term,
    extract_visa_sponsorship,
    parse_posting_date,
    truncate_description,
)

logger = get_logger(__name__, component="normalization")


class JobNormalizer:
    """Builds NormalizedJobs for one scan.

    Attributes:
        scan_date: post_date used when a posting publishes none
        geographies: Caller-supplied location defaults, most preferred first
        config: Description and skill limits
    """

    def __init__(
        self,
        scan_date: Optional[date] = None,
        geographies: Optional[Sequence[str]] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.scan_date = scan_date or utc_today()
        self.geographies = list(geographies or [])
        self.config = config or ExtractionConfig()

    def normalize(self, raw: RawPosting, page: Optional[ParsedPage] = None) -> NormalizedJob:
        """Normalize one posting.

        Args:
            raw: Posting from the extractors
            page: The page the posting came from (location and sponsorship
                wording elsewhere on the page is taken into account)

        Returns:
            NormalizedJob; due_date is None (and is_rolling True) when the
            posting has no readable deadline

        Raises:
            ValidationError: If the posting violates NormalizedJob invariants
        """
        posting_text = "\n".join(part for part in (raw.description_text, raw.context_text) if part)

        return NormalizedJob(
            title=raw.title,
            description=truncate_description(raw.description_text, self.config.max_description_length),
            post_date=parse_posting_date(raw.posted_at) or self.scan_date,
            due_date=parse_posting_date(raw.valid_through),
            key_skills=extract_skills(posting_text, self.config.max_skills),
            visa_sponsorship=extract_visa_sponsorship(posting_text, page.text if page else ""),
            location=extract_location(
                posting_text,
                page,
                self.geographies,
                structured=raw.raw_location_text,
            ),
            term=extract_term(f"{raw.title}\n{raw.description_text}"),
            url=raw.source_url,
        )

    def normalize_all(self, postings: List[RawPosting], page: Optional[ParsedPage] = None) -> List[NormalizedJob]:
        """Normalize a batch, logging and dropping postings that fail validation."""
        jobs = []
        for raw in postings:
            try:
                jobs.append(self.normalize(raw, page))
            except ValidationError as e:
                logger.warning(
                    f"Dropping posting {raw.title!r}: {e.error_count()} validation errors",
                    extra={
                        "event": "normalize.posting.invalid",
                        "title": raw.title,
                        "url": raw.source_url,
                        "errors": [err["msg"] for err in e.errors()],
                    },
                )
        return jobs
