"""Data models for scan execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class TargetRunStats:
    """
    Statistics for one target within a scan.

    Attributes:
        company_id: Owning company
        url: Target URL as resolved
        fetched_url: URL that actually answered (None if the fetch failed)
        extraction_method: Tier that produced postings, if any
        extracted_count: Postings that passed the title filter
        normalized_count: Postings that passed normalization
        enriched_count: Postings that received an acceptance rate
        inserted_count: New rows stored
        skipped_count: Blocked or already-stored postings
        failed_count: Rows that failed to store
        duration_seconds: Time spent on this target
        error_message: Why the target produced nothing, when it failed
    """

    company_id: str
    url: str
    fetched_url: Optional[str] = None
    extraction_method: Optional[str] = None
    extracted_count: int = 0
    normalized_count: int = 0
    enriched_count: int = 0
    inserted_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    duration_seconds: float = 0.0
    error_message: Optional[str] = None

    @property
    def had_errors(self) -> bool:
        return self.error_message is not None or self.failed_count > 0


@dataclass
class ScanResult:
    """
    Aggregate results of one scan invocation.

    Attributes:
        run_started_at: UTC timestamp when the scan began
        run_finished_at: UTC timestamp when the scan completed
        companies_processed: Number of targets processed
        total_inserted: Rows actually inserted across all targets
        target_stats: Per-target statistics
        message: Explanation when there was nothing to scan
    """

    run_started_at: datetime
    run_finished_at: datetime
    companies_processed: int = 0
    total_inserted: int = 0
    target_stats: List[TargetRunStats] = field(default_factory=list)
    message: Optional[str] = None

    def __post_init__(self):
        if self.target_stats:
            self.companies_processed = len(self.target_stats)
            self.total_inserted = sum(s.inserted_count for s in self.target_stats)

    @property
    def total_duration_seconds(self) -> float:
        return (self.run_finished_at - self.run_started_at).total_seconds()

    @property
    def total_extracted(self) -> int:
        return sum(s.extracted_count for s in self.target_stats)

    @property
    def total_skipped(self) -> int:
        return sum(s.skipped_count for s in self.target_stats)

    @property
    def had_errors(self) -> bool:
        return any(s.had_errors for s in self.target_stats)

    def to_response(self) -> Dict[str, Any]:
        """Success envelope for callers of the scan entry point."""
        response: Dict[str, Any] = {
            "ok": True,
            "totalInserted": self.total_inserted,
            "companiesProcessed": self.companies_processed,
        }
        if self.message:
            response["message"] = self.message
        return response
