"""Greenhouse hosted job boards."""

from typing import Any, Dict, List, Optional

from internscan.domain.models import RawPosting
from internscan.utils.html import ParsedPage, clean_html, resolve_url

from .base import BoardParser, text_field


class GreenhouseBoardParser(BoardParser):
    """Parser for boards.greenhouse.io pages.

    Greenhouse does not publish application deadlines, so every posting it
    yields is treated as rolling.

    Payload Details:
        Location: ``<script id="initial-state">`` holding a JSON object
        Entries: ``jobs`` array
        Fields: title, content (escaped HTML), updated_at, location.name,
            absolute_url
    """

    BOARD_NAME = "greenhouse"
    URL_SIGNATURES = ("greenhouse.io",)

    def _extract_payload(self, page: ParsedPage) -> Optional[Dict[str, Any]]:
        script = page.soup.find("script", id="initial-state")
        if script is None:
            return None
        body = script.string or script.get_text()
        if not body or not body.strip():
            return None
        return self._decode(body, page.url)

    def _entries(self, payload: Dict[str, Any], page_url: str) -> List[Any]:
        return self._list_field(payload, "jobs", page_url)

    def _to_posting(self, entry: Dict[str, Any], page_url: str) -> Optional[RawPosting]:
        title = text_field(entry, "title")
        if not title:
            return None

        location = entry.get("location")
        location_name = text_field(location, "name") if isinstance(location, dict) else None

        return RawPosting(
            title=title,
            description_text=clean_html(text_field(entry, "content")),
            posted_at=text_field(entry, "updated_at"),
            raw_location_text=location_name,
            source_url=resolve_url(text_field(entry, "absolute_url"), page_url),
        )
