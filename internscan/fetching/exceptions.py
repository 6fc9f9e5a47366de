"""Custom exceptions for page retrieval."""


class FetchError(Exception):
    """Base exception for all fetch errors.

    Carries the URL that failed. The fetcher turns these into an empty result
    for the target; they never abort a scan.
    """

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class FetchHTTPError(FetchError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """The request did not complete within its timeout."""

    pass


class FetchBudgetExceededError(FetchError):
    """No latency budget left for another fallback attempt."""

    pass
