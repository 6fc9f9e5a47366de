"""Posting title validation and per-page de-duplication."""

import re
from typing import Callable, Dict, List, Optional, Tuple

from internscan.domain.models import RawPosting, has_internship_marker
from internscan.logging import get_logger

logger = get_logger(__name__, component="extractor")

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 100

_NAVIGATION_PREFIX = re.compile(
    r"^(?:career|job|search|view|apply|internal|site|page|home|about|contact)s?\b",
    re.IGNORECASE,
)
_BOILERPLATE = [
    re.compile(r"career\s*site", re.IGNORECASE),
    re.compile(r"job\s*board", re.IGNORECASE),
    re.compile(r"apply\s*now", re.IGNORECASE),
    re.compile(r"view\s*details", re.IGNORECASE),
    re.compile(r"learn\s*more", re.IGNORECASE),
]


def is_valid_posting_title(title: Optional[str]) -> bool:
    """Whether text looks like a real internship posting title.

    The title must carry the internship marker, be between 6 and 99
    characters long, and not look like navigation ("Apply now",
    "Careers home", "Internal career site").

    Example:
        >>> is_valid_posting_title("Software Engineering Intern")
        True
        >>> is_valid_posting_title("Internal Career Site")
        False
    """
    if not title:
        return False
    text = " ".join(title.split())
    if not has_internship_marker(text):
        return False
    if not MIN_TITLE_LENGTH < len(text) < MAX_TITLE_LENGTH:
        return False
    if _NAVIGATION_PREFIX.match(text):
        return False
    return not any(pattern.search(text) for pattern in _BOILERPLATE)


class PostingCollector:
    """Accumulates postings for one page.

    Applies a title check once per posting and keeps the first posting for
    each (url, lower-cased title) pair. Markup-derived postings get the full
    navigation filter; structured sources only need the internship marker.
    """

    def __init__(self) -> None:
        self._postings: Dict[Tuple[str, str], RawPosting] = {}
        self.rejected = 0
        self.duplicates = 0

    def add(
        self,
        posting: RawPosting,
        title_check: Callable[[Optional[str]], bool] = is_valid_posting_title,
    ) -> bool:
        """Keep a posting; returns False when it was filtered or a duplicate."""
        if not title_check(posting.title):
            self.rejected += 1
            logger.debug(
                f"Rejected title {posting.title!r}",
                extra={"event": "extract.title.rejected", "title": posting.title},
            )
            return False

        key = (posting.source_url, posting.title.lower())
        if key in self._postings:
            self.duplicates += 1
            return False

        self._postings[key] = posting
        return True

    @property
    def postings(self) -> List[RawPosting]:
        return list(self._postings.values())

    def __len__(self) -> int:
        return len(self._postings)
