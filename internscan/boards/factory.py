"""Select a vendor board parser by page URL."""

from typing import List, Optional, Type

from internscan.logging import get_logger

from .ashby import AshbyBoardParser
from .base import BoardParser
from .greenhouse import GreenhouseBoardParser
from .workday import WorkdayBoardParser

logger = get_logger(__name__, component="boards")

BOARD_PARSERS: List[Type[BoardParser]] = [
    WorkdayBoardParser,
    GreenhouseBoardParser,
    AshbyBoardParser,
]


def get_board_parser(url: str) -> Optional[BoardParser]:
    """Parser for the vendor hosting url, or None for non-vendor pages.

    Example:
        >>> type(get_board_parser("https://boards.greenhouse.io/acme")).__name__
        'GreenhouseBoardParser'
        >>> get_board_parser("https://acme.com/careers") is None
        True
    """
    for parser_class in BOARD_PARSERS:
        if parser_class.matches(url):
            logger.debug(
                f"Using {parser_class.BOARD_NAME} parser for {url}",
                extra={"event": "boards.parser.selected", "board": parser_class.BOARD_NAME, "url": url},
            )
            return parser_class()
    return None
