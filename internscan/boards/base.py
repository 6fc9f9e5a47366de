"""Base class for parsers of job boards embedded in vendor-hosted pages.

Vendor boards render their listings from a JSON blob shipped inside the page.
Each parser knows which URLs belong to its vendor, where the blob lives, and
how its entries map onto RawPosting.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from internscan.domain.models import RawPosting
from internscan.logging import get_logger
from internscan.utils.html import ParsedPage

from .exceptions import BoardPayloadError

logger = get_logger(__name__, component="boards")


class BoardParser(ABC):
    """Base class for all vendor board parsers.

    Subclasses set BOARD_NAME and URL_SIGNATURES and implement
    _extract_payload() and _entries().
    """

    BOARD_NAME: str = ""
    URL_SIGNATURES: Tuple[str, ...] = ()

    @classmethod
    def matches(cls, url: str) -> bool:
        """Whether a page URL belongs to this vendor."""
        lowered = (url or "").lower()
        return any(signature in lowered for signature in cls.URL_SIGNATURES)

    def parse(self, page: ParsedPage) -> List[RawPosting]:
        """Postings from the page's embedded board payload.

        Entries without a usable title are dropped. Internship filtering is
        left to the caller.

        Returns:
            Postings in payload order; empty when the page has no payload

        Raises:
            BoardPayloadError: If the payload exists but is malformed
        """
        payload = self._extract_payload(page)
        if payload is None:
            logger.debug(
                f"No {self.BOARD_NAME} payload on {page.url}",
                extra={"event": "boards.payload.missing", "board": self.BOARD_NAME, "url": page.url},
            )
            return []

        postings = []
        for entry in self._entries(payload, page.url):
            if not isinstance(entry, dict):
                continue
            try:
                posting = self._to_posting(entry, page.url)
            except ValidationError as e:
                logger.debug(
                    f"Skipping {self.BOARD_NAME} entry: {e.error_count()} validation errors",
                    extra={"event": "boards.entry.skipped", "board": self.BOARD_NAME},
                )
                continue
            if posting is not None:
                postings.append(posting)

        logger.info(
            f"Parsed {len(postings)} {self.BOARD_NAME} entries",
            extra={
                "event": "boards.payload.parsed",
                "board": self.BOARD_NAME,
                "url": page.url,
                "entry_count": len(postings),
            },
        )
        return postings

    @abstractmethod
    def _extract_payload(self, page: ParsedPage) -> Optional[Dict[str, Any]]:
        """Locate and decode the board JSON; None when absent."""
        pass

    @abstractmethod
    def _entries(self, payload: Dict[str, Any], page_url: str) -> List[Any]:
        """Job entries inside a decoded payload.

        Raises:
            BoardPayloadError: If the entries container has the wrong type
        """
        pass

    @abstractmethod
    def _to_posting(self, entry: Dict[str, Any], page_url: str) -> Optional[RawPosting]:
        pass

    def _decode(self, text: str, url: str) -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise BoardPayloadError(
                f"Invalid {self.BOARD_NAME} JSON: {e}", board=self.BOARD_NAME, url=url
            ) from e
        if not isinstance(data, dict):
            raise BoardPayloadError(
                f"Expected a JSON object, got {type(data).__name__}",
                board=self.BOARD_NAME,
                url=url,
            )
        return data

    def _assigned_object(self, html: str, variable: str, url: str) -> Optional[Dict[str, Any]]:
        """Decode the object literal assigned to a script variable.

        Finds ``<variable> = {`` in the markup and decodes exactly one JSON
        value from the opening brace, so nested objects and trailing script
        code are handled.
        """
        match = re.search(re.escape(variable) + r"\s*=\s*(?=\{)", html)
        if not match:
            return None

        try:
            data, _ = json.JSONDecoder().raw_decode(html, match.end())
        except json.JSONDecodeError as e:
            raise BoardPayloadError(
                f"Invalid {self.BOARD_NAME} JSON after {variable}: {e}",
                board=self.BOARD_NAME,
                url=url,
            ) from e
        if not isinstance(data, dict):
            raise BoardPayloadError(
                f"{variable} is not a JSON object", board=self.BOARD_NAME, url=url
            )
        return data

    def _list_field(self, container: Any, key: str, url: str) -> List[Any]:
        if not isinstance(container, dict):
            return []
        value = container.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise BoardPayloadError(
                f"Expected {key} to be a list, got {type(value).__name__}",
                board=self.BOARD_NAME,
                url=url,
            )
        return value


def text_field(entry: Dict[str, Any], *keys: str) -> Optional[str]:
    """First non-blank string (or number) among keys, stripped."""
    for key in keys:
        value = entry.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
