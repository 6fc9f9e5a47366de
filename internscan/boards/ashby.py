"""Ashby hosted job boards (jobs.ashbyhq.com)."""

from typing import Any, Dict, List, Optional

from internscan.domain.models import RawPosting
from internscan.utils.html import ParsedPage, clean_html

from .base import BoardParser, text_field


class AshbyBoardParser(BoardParser):
    """Parser for Ashby job board pages.

    Listing entries carry no absolute URL; each posting lives at
    ``{board_url}/{id}``.

    Payload Details:
        Location: ``window.__appData = {...};`` in an inline script
        Entries: ``jobBoard.jobPostings`` array
        Fields: id, title, locationName, publishedDate,
            descriptionPlainText / descriptionHtml (when present)
    """

    BOARD_NAME = "ashby"
    URL_SIGNATURES = ("ashbyhq.com",)

    def _extract_payload(self, page: ParsedPage) -> Optional[Dict[str, Any]]:
        return self._assigned_object(page.html, "window.__appData", page.url)

    def _entries(self, payload: Dict[str, Any], page_url: str) -> List[Any]:
        return self._list_field(payload.get("jobBoard"), "jobPostings", page_url)

    def _to_posting(self, entry: Dict[str, Any], page_url: str) -> Optional[RawPosting]:
        title = text_field(entry, "title")
        if not title:
            return None

        description = text_field(entry, "descriptionPlainText") or clean_html(
            text_field(entry, "descriptionHtml")
        )
        posting_id = text_field(entry, "id")
        url = f"{page_url.split('?')[0].rstrip('/')}/{posting_id}" if posting_id else page_url

        return RawPosting(
            title=title,
            description_text=description,
            posted_at=text_field(entry, "publishedDate", "publishedAt"),
            raw_location_text=text_field(entry, "locationName"),
            source_url=url,
        )
