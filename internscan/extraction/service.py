"""Posting extraction for one fetched page.

Linked data wins over vendor board payloads, which win over markup
heuristics; a later tier only runs when every earlier tier produced nothing.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from internscan.boards import get_board_parser
from internscan.config.models import ExtractionConfig
from internscan.domain.models import RawPosting, has_internship_marker
from internscan.domain.results import StepStatus
from internscan.logging import get_logger
from internscan.utils.html import ParsedPage

from .heuristic import HeuristicExtractor
from .structured import extract_linked_data, extract_vendor_board
from .titles import PostingCollector

logger = get_logger(__name__, component="extractor")

LINKED_DATA = "linked-data"


@dataclass
class ExtractionResult:
    """
    Postings found on a page and how they were found.

    Attributes:
        method: "linked-data", a board name, "heuristic:<strategy>", or None
        postings: Filtered, de-duplicated postings in page order
        rejected: Candidates dropped by the title filter
        duplicates: Candidates dropped as repeats
    """

    method: Optional[str] = None
    postings: List[RawPosting] = field(default_factory=list)
    rejected: int = 0
    duplicates: int = 0

    @property
    def status(self) -> StepStatus:
        return StepStatus.SUCCESS if self.postings else StepStatus.EMPTY


class PostingExtractor:
    """Runs the extraction tiers against a page."""

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()
        self._heuristic = HeuristicExtractor(self.config)

    def extract(self, page: ParsedPage) -> ExtractionResult:
        collector = PostingCollector()
        method = self._run_tiers(page, collector)

        result = ExtractionResult(
            method=method,
            postings=collector.postings,
            rejected=collector.rejected,
            duplicates=collector.duplicates,
        )
        logger.info(
            f"Extracted {len(result.postings)} postings from {page.url}",
            extra={
                "event": "extract.completed",
                "url": page.url,
                "method": method,
                "posting_count": len(result.postings),
                "rejected_count": result.rejected,
                "duplicate_count": result.duplicates,
            },
        )
        return result

    def _run_tiers(self, page: ParsedPage, collector: PostingCollector) -> Optional[str]:
        if _collect(collector, extract_linked_data(page)):
            return LINKED_DATA

        parser = get_board_parser(page.url)
        if parser is not None and _collect(collector, extract_vendor_board(page)):
            return parser.BOARD_NAME

        strategy = self._heuristic.extract(page, collector)
        return f"heuristic:{strategy}" if strategy else None


def _collect(collector: PostingCollector, postings: List[RawPosting]) -> bool:
    """Feed structured postings through the collector; True if any survived."""
    before = len(collector)
    for posting in postings:
        collector.add(posting, title_check=has_internship_marker)
    return len(collector) > before
