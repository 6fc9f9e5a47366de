"""Workday hosted career sites."""

from typing import Any, Dict, List, Optional

from internscan.domain.models import RawPosting
from internscan.utils.html import ParsedPage, clean_html, resolve_url

from .base import BoardParser, text_field


class WorkdayBoardParser(BoardParser):
    """Parser for Workday career sites.

    Payload Details:
        Location: ``window.__INITIAL_STATE__ = {...};`` in an inline script
        Entries: ``jobPostings`` array
        Fields: title, description, postedOn, endDate, location, externalUrl
    """

    BOARD_NAME = "workday"
    URL_SIGNATURES = ("workday.com", "myworkdayjobs.com")

    def _extract_payload(self, page: ParsedPage) -> Optional[Dict[str, Any]]:
        return self._assigned_object(page.html, "window.__INITIAL_STATE__", page.url)

    def _entries(self, payload: Dict[str, Any], page_url: str) -> List[Any]:
        return self._list_field(payload, "jobPostings", page_url)

    def _to_posting(self, entry: Dict[str, Any], page_url: str) -> Optional[RawPosting]:
        title = text_field(entry, "title")
        if not title:
            return None

        location = entry.get("location")
        if isinstance(location, dict):
            location = text_field(location, "name", "descriptor")

        return RawPosting(
            title=title,
            description_text=clean_html(text_field(entry, "description")),
            posted_at=text_field(entry, "postedOn"),
            valid_through=text_field(entry, "endDate"),
            raw_location_text=location if isinstance(location, str) else None,
            source_url=resolve_url(text_field(entry, "externalUrl", "externalPath"), page_url),
        )
