"""Structured extraction: schema.org JobPosting linked data and vendor boards."""

import json
from typing import Any, Dict, Iterator, List, Optional

from pydantic import ValidationError

from internscan.boards import BoardPayloadError, get_board_parser
from internscan.domain.models import RawPosting
from internscan.logging import get_logger
from internscan.utils.html import ParsedPage, clean_html, resolve_url

logger = get_logger(__name__, component="extractor")

JOB_POSTING_TYPE = "JobPosting"


def _linked_data_blocks(page: ParsedPage) -> Iterator[Any]:
    """Decoded ld+json blocks; malformed blocks are logged and skipped."""
    for index, script in enumerate(page.soup.find_all("script", type="application/ld+json")):
        body = script.string or script.get_text()
        if not body or not body.strip():
            continue
        try:
            yield json.loads(body)
        except json.JSONDecodeError as e:
            logger.debug(
                f"Skipping malformed linked-data block {index}: {e}",
                extra={"event": "extract.linked_data.malformed", "block_index": index, "url": page.url},
            )


def _flatten(data: Any) -> Iterator[Dict[str, Any]]:
    """Every object in a block: top level, arrays, @graph and item lists."""
    if isinstance(data, list):
        for item in data:
            yield from _flatten(item)
    elif isinstance(data, dict):
        yield data
        if isinstance(data.get("@graph"), list):
            yield from _flatten(data["@graph"])
        if isinstance(data.get("itemListElement"), list):
            for element in data["itemListElement"]:
                if isinstance(element, dict) and "item" in element:
                    yield from _flatten(element["item"])


def is_job_posting(item: Dict[str, Any]) -> bool:
    item_type = item.get("@type", "")
    if isinstance(item_type, str):
        return JOB_POSTING_TYPE in item_type
    if isinstance(item_type, list):
        return any(JOB_POSTING_TYPE in str(t) for t in item_type)
    return False


def job_location_text(item: Dict[str, Any]) -> Optional[str]:
    """Locality, else region, else country of a JobPosting's jobLocation."""
    location = item.get("jobLocation")
    if isinstance(location, list):
        location = location[0] if location else None
    if isinstance(location, str):
        return location.strip() or None
    if not isinstance(location, dict):
        return None

    address = location.get("address")
    if isinstance(address, str):
        return address.strip() or None
    if isinstance(address, dict):
        for key in ("addressLocality", "addressRegion", "addressCountry"):
            value = address.get(key)
            if isinstance(value, dict):
                value = value.get("name")
            if isinstance(value, str) and value.strip():
                return value.strip()

    name = location.get("name")
    return name.strip() if isinstance(name, str) and name.strip() else None


def linked_data_location(page: ParsedPage) -> Optional[str]:
    """First jobLocation published anywhere in the page's linked data."""
    for block in _linked_data_blocks(page):
        for item in _flatten(block):
            location = job_location_text(item)
            if location:
                return location
    return None


def _string(value: Any) -> Optional[str]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_linked_data(page: ParsedPage) -> List[RawPosting]:
    """RawPostings for every JobPosting object in the page's linked data."""
    postings = []
    for block in _linked_data_blocks(page):
        for item in _flatten(block):
            if not is_job_posting(item):
                continue
            title = _string(item.get("title")) or _string(item.get("name"))
            if not title:
                continue
            try:
                postings.append(
                    RawPosting(
                        title=title,
                        description_text=clean_html(_string(item.get("description"))),
                        posted_at=_string(item.get("datePosted")),
                        valid_through=_string(item.get("validThrough")),
                        raw_location_text=job_location_text(item),
                        source_url=resolve_url(_string(item.get("url")), page.url),
                    )
                )
            except ValidationError as e:
                logger.debug(
                    f"Skipping linked-data posting {title!r}: {e.error_count()} validation errors",
                    extra={"event": "extract.linked_data.invalid", "title": title},
                )
    return postings


def extract_vendor_board(page: ParsedPage) -> List[RawPosting]:
    """RawPostings from the embedded vendor board payload, if the URL has one.

    A malformed payload is logged and yields nothing.
    """
    parser = get_board_parser(page.url)
    if parser is None:
        return []

    try:
        return parser.parse(page)
    except BoardPayloadError as e:
        logger.warning(
            f"Skipping malformed {e.board} payload on {page.url}: {e}",
            extra={"event": "extract.board.malformed", "board": e.board, "url": page.url},
        )
        return []
