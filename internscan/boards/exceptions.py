"""Custom exceptions for vendor job board parsers."""


class BoardError(Exception):
    """Base exception for all board parser errors."""

    pass


class BoardPayloadError(BoardError):
    """The embedded board payload was found but could not be decoded.

    Raised for invalid JSON or a payload of the wrong shape. The structured
    extractor logs it and moves on; a bad payload never aborts a scan.
    """

    def __init__(self, message: str, board: str, url: str) -> None:
        super().__init__(message)
        self.board = board
        self.url = url
