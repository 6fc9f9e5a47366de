"""Page retrieval for careers pages.

Use the fetcher directly:
    from internscan.fetching import PageFetcher
    result = PageFetcher(app_config.fetch).fetch("https://acme.com/careers")
    if result.ok:
        html = result.value.html
"""

from .exceptions import FetchBudgetExceededError, FetchError, FetchHTTPError, FetchTimeoutError
from .fetcher import FetchedPage, PageFetcher, candidate_urls

__all__ = [
    "PageFetcher",
    "FetchedPage",
    "candidate_urls",
    "FetchError",
    "FetchHTTPError",
    "FetchTimeoutError",
    "FetchBudgetExceededError",
]
