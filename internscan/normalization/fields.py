"""Field extraction from posting and page text.

Every function here is stateless: plain text (and optionally the parsed page)
in, one typed field out.
"""

import re
from datetime import date
from typing import Any, List, Optional, Sequence

from internscan.domain.models import LOCATION_NOT_SPECIFIED
from internscan.extraction.strategies import class_matches
from internscan.extraction.structured import linked_data_location
from internscan.utils.html import ParsedPage, collapse_whitespace
from internscan.utils.timestamps import parse_date

MAX_LOCATION_LENGTH = 100

SKILL_VOCABULARY = (
    "JavaScript",
    "TypeScript",
    "Python",
    "Java",
    "C++",
    "React",
    "Node.js",
    "SQL",
    "AWS",
    "Docker",
    "Kubernetes",
    "Git",
)

NO_SPONSORSHIP_PATTERNS = [
    re.compile(r"no\s+visa\s+sponsorship", re.IGNORECASE),
    re.compile(r"do\s+not\s+sponsor", re.IGNORECASE),
    re.compile(r"cannot\s+sponsor", re.IGNORECASE),
    re.compile(r"unable\s+to\s+sponsor", re.IGNORECASE),
    re.compile(r"must\s+have\s+authorization", re.IGNORECASE),
    re.compile(r"must\s+be\s+authorized", re.IGNORECASE),
    re.compile(r"u\.?s\.?\s+citizen", re.IGNORECASE),
    re.compile(r"permanent\s+resident", re.IGNORECASE),
]

SPONSORSHIP_PATTERNS = [
    re.compile(r"visa\s+sponsorship", re.IGNORECASE),
    re.compile(r"sponsor\s+visa", re.IGNORECASE),
    re.compile(r"work\s+authorization\s+sponsorship", re.IGNORECASE),
    re.compile(r"eligible\s+for\s+visa", re.IGNORECASE),
    re.compile(r"we\s+sponsor\s+visas", re.IGNORECASE),
    re.compile(r"will\s+sponsor", re.IGNORECASE),
    re.compile(r"sponsorship\s+available", re.IGNORECASE),
    re.compile(r"h1b\s+sponsorship", re.IGNORECASE),
    re.compile(r"tn\s+visa", re.IGNORECASE),
    re.compile(r"eligible\s+for\s+work\s+authorization", re.IGNORECASE),
]

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*"
TERM_PATTERNS = [
    re.compile(rf"\b{_MONTH}\s+\d{{4}}\s*[-–]\s*{_MONTH}\s+\d{{4}}", re.IGNORECASE),
    re.compile(r"\b(?:summer|fall|winter|spring)\s+\d{4}\b", re.IGNORECASE),
    re.compile(r"\b\d{4}\s*[-–]\s*\d{4}\b"),
]

_LOCATION_LABEL = re.compile(r"\blocation[ \t]*:[ \t]*\n?[ \t]*([^,;|\n]+)", re.IGNORECASE)
_LOCATION_CLASS = re.compile(r"location", re.IGNORECASE)
_LOCATION_PHRASE = re.compile(
    r"\b(?i:located\s+in|based\s+in|in|at)\s+"
    r"([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?(?:\s*,\s*[A-Z][a-z]+)?)"
)


def _usable_location(value: Optional[str]) -> Optional[str]:
    """A cleaned location value, or None for empty, overlong or label-like text."""
    text = collapse_whitespace(value).strip(" \"'")
    if not text or len(text) >= MAX_LOCATION_LENGTH:
        return None
    if "location" in text.lower():
        return None
    return text


def _labelled_location(text: str) -> Optional[str]:
    for match in _LOCATION_LABEL.finditer(text or ""):
        location = _usable_location(match.group(1))
        if location:
            return location
    return None


def _element_location(page: ParsedPage) -> Optional[str]:
    """Location from data-location attributes or location-classed elements."""
    for tag in page.soup.find_all(attrs={"data-location": True}):
        location = _usable_location(tag.get("data-location"))
        if location:
            return location
    for tag in page.soup.find_all(lambda t: t.name in ("span", "div", "p") and class_matches(t, _LOCATION_CLASS)):
        location = _usable_location(tag.get_text(" "))
        if location:
            return location
    return None


def extract_location(
    text: str,
    page: Optional[ParsedPage] = None,
    default_geographies: Optional[Sequence[str]] = None,
    structured: Optional[str] = None,
) -> str:
    """Best location for a posting; never empty.

    Tried in order: the structured value, the page's linked-data location, a
    "Location:" label in the posting text and then the page text, a
    location-classed or data-location element on the page, an
    "in / at / located in / based in City" phrase in the posting text, the
    first default geography, and finally "Location not specified".

    Example:
        >>> extract_location("Join our team based in Toronto this summer")
        'Toronto'
        >>> extract_location("", default_geographies=[])
        'Location not specified'
    """
    location = _usable_location(structured)
    if location:
        return location

    if page is not None:
        location = _usable_location(linked_data_location(page))
        if location:
            return location

    location = _labelled_location(text)
    if location:
        return location

    if page is not None:
        location = _labelled_location(page.lines) or _element_location(page)
        if location:
            return location

    match = _LOCATION_PHRASE.search(text or "")
    if match:
        return match.group(1).strip()

    for geography in default_geographies or ():
        if geography and geography.strip():
            return geography.strip()
        break

    return LOCATION_NOT_SPECIFIED


def extract_visa_sponsorship(text: str, page_text: str = "") -> bool:
    """Whether the posting offers visa sponsorship.

    Explicit refusals anywhere in the posting or page win over offers.

    Example:
        >>> extract_visa_sponsorship("We offer visa sponsorship. Must be authorized to work.")
        False
    """
    combined = f"{text or ''} {page_text or ''}"
    if any(pattern.search(combined) for pattern in NO_SPONSORSHIP_PATTERNS):
        return False
    return any(pattern.search(combined) for pattern in SPONSORSHIP_PATTERNS)


def extract_term(text: str) -> Optional[str]:
    """Internship term as written ("Summer 2026", "Jan 2026 - Aug 2026", "2025-2026")."""
    for pattern in TERM_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return collapse_whitespace(match.group(0))
    return None


def extract_skills(text: str, limit: int = 5) -> List[str]:
    """Vocabulary skills mentioned in text, in vocabulary order, at most limit.

    Matching is a case-insensitive substring test, so "JavaScript" also
    counts as "Java".
    """
    lowered = (text or "").lower()
    found = [skill for skill in SKILL_VOCABULARY if skill.lower() in lowered]
    return found[:limit]


def truncate_description(text: Optional[str], limit: int = 1000) -> str:
    return (text or "").strip()[:limit]


def parse_posting_date(value: Any) -> Optional[date]:
    """Calendar date from a page date value, or None when it cannot be read."""
    return parse_date(value)
