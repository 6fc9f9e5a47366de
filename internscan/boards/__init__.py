"""Parsers for job boards embedded in vendor-hosted career pages."""

from .ashby import AshbyBoardParser
from .base import BoardParser
from .exceptions import BoardError, BoardPayloadError
from .factory import BOARD_PARSERS, get_board_parser
from .greenhouse import GreenhouseBoardParser
from .workday import WorkdayBoardParser

__all__ = [
    "BoardParser",
    "WorkdayBoardParser",
    "GreenhouseBoardParser",
    "AshbyBoardParser",
    "BOARD_PARSERS",
    "get_board_parser",
    "BoardError",
    "BoardPayloadError",
]
