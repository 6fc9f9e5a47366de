"""Static page retrieval with deterministic fallback URLs."""

import time
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from internscan.config.models import FetchConfig
from internscan.domain.results import StepResult
from internscan.logging import get_logger

from .exceptions import (
    FetchBudgetExceededError,
    FetchError,
    FetchHTTPError,
    FetchTimeoutError,
)

logger = get_logger(__name__, component="fetcher")

CAREERS_SEGMENT = "/careers"
FALLBACK_SEGMENTS = ("/jobs", "/careers/en-us")


@dataclass
class FetchedPage:
    """
    Raw page text plus where it actually came from.

    Attributes:
        requested_url: URL the caller asked for
        url: URL that answered (may be a fallback variant)
        html: Response body as text
        status_code: HTTP status of the successful response
        attempts: Every URL tried, in order
    """

    requested_url: str
    url: str
    html: str
    status_code: int = 200
    attempts: List[str] = field(default_factory=list)


def candidate_urls(url: str) -> List[str]:
    """URLs to try for a page, in order.

    The URL itself always comes first. Only URLs containing ``/careers`` get
    fallbacks: the first occurrence replaced by ``/jobs``, then by
    ``/careers/en-us``.

    Example:
        >>> candidate_urls("https://acme.com/careers")
        ['https://acme.com/careers', 'https://acme.com/jobs', 'https://acme.com/careers/en-us']
    """
    candidates = [url]
    if CAREERS_SEGMENT in url:
        for replacement in FALLBACK_SEGMENTS:
            variant = url.replace(CAREERS_SEGMENT, replacement, 1)
            if variant not in candidates:
                candidates.append(variant)
    return candidates


class PageFetcher:
    """Fetches careers pages as static markup.

    One ``requests.Session`` carries the browser-like User-Agent and HTML
    Accept header for every request. Nothing is cached; each scan re-fetches.

    Attributes:
        config: Timeouts and headers
    """

    def __init__(self, config: Optional[FetchConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or FetchConfig()
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": self.config.accept,
            }
        )

    def fetch(self, url: str) -> StepResult[FetchedPage]:
        """Fetch a page, walking the fallback URL variants on failure.

        Args:
            url: Careers page URL

        Returns:
            success with the FetchedPage, or failed with the last error as
            reason once every candidate failed or the latency budget ran out
        """
        deadline = time.monotonic() + self.config.total_timeout_seconds
        attempts: List[str] = []
        last_error: Optional[FetchError] = None

        for candidate in candidate_urls(url):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                last_error = FetchBudgetExceededError(
                    f"Latency budget of {self.config.total_timeout_seconds}s exhausted",
                    url=candidate,
                )
                break

            attempts.append(candidate)
            try:
                response = self._request(candidate, timeout=min(self.config.timeout_seconds, remaining))
            except FetchError as e:
                last_error = e
                logger.info(
                    f"Fetch attempt failed for {candidate}: {e}",
                    extra={
                        "event": "fetch.attempt.failed",
                        "url": candidate,
                        "error_type": type(e).__name__,
                        "status_code": getattr(e, "status_code", None),
                    },
                )
                continue

            page = FetchedPage(
                requested_url=url,
                url=candidate,
                html=response.text,
                status_code=response.status_code,
                attempts=attempts,
            )
            logger.info(
                f"Fetched {candidate} ({len(page.html)} chars)",
                extra={
                    "event": "fetch.succeeded",
                    "url": candidate,
                    "requested_url": url,
                    "attempt_count": len(attempts),
                    "content_length": len(page.html),
                },
            )
            return StepResult.success(page)

        reason = str(last_error) if last_error else "no candidate URL could be fetched"
        logger.warning(
            f"Could not fetch any variant of {url}",
            extra={
                "event": "fetch.exhausted",
                "url": url,
                "attempts": attempts,
                "reason": reason,
            },
        )
        return StepResult.failed(reason)

    def fetch_once(self, url: str, timeout: Optional[float] = None) -> FetchedPage:
        """Single bounded GET without fallback variants.

        Raises:
            FetchError: On any failure (status, timeout, network)
        """
        response = self._request(url, timeout=timeout or self.config.timeout_seconds)
        return FetchedPage(
            requested_url=url,
            url=url,
            html=response.text,
            status_code=response.status_code,
            attempts=[url],
        )

    def close(self) -> None:
        self._session.close()

    def _request(self, url: str, timeout: float) -> requests.Response:
        """GET a URL, mapping requests failures onto the FetchError family.

        Raises:
            FetchHTTPError: On a non-2xx status or a network error (status 0)
            FetchTimeoutError: On connect or read timeout
        """
        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "fetch.request", "url": url, "timeout": timeout},
        )

        try:
            response = self._session.get(url, timeout=timeout, allow_redirects=True)
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(f"Request to {url} timed out after {timeout:.1f}s", url=url) from e
        except requests.exceptions.RequestException as e:
            raise FetchHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if not 200 <= response.status_code < 300:
            raise FetchHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        # text/html without a charset defaults to ISO-8859-1 in requests
        if response.encoding is None or response.encoding == "ISO-8859-1":
            response.encoding = response.apparent_encoding

        return response
