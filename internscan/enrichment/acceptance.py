"""Acceptance-rate estimation from posting text and secondary pages."""

import re
from abc import ABC, abstractmethod
from typing import List, Optional

from internscan.config.models import EnrichmentConfig
from internscan.domain.results import StepResult
from internscan.fetching import FetchError, PageFetcher
from internscan.logging import get_logger
from internscan.utils.html import html_to_text

logger = get_logger(__name__, component="enrichment")

RATE_PATTERNS = [
    re.compile(r"acceptance\s*rate[:\s]*(\d+\.?\d*)%", re.IGNORECASE),
    re.compile(r"(\d+\.?\d*)%\s*acceptance", re.IGNORECASE),
    re.compile(r"(\d+)\s*out\s*of\s*(\d+)\s*applicants", re.IGNORECASE),
    re.compile(r"(\d+)\s*selected\s*from\s*(\d+)", re.IGNORECASE),
]


def parse_acceptance_rate(text: Optional[str]) -> Optional[float]:
    """Acceptance rate (percent) stated in text, or None.

    Patterns are tried in order and the first valid match wins. Ratios
    ("N out of M applicants", "N selected from M") become
    round(N / M * 100, 2) when 0 < N <= M; stated percentages are accepted
    when in (0, 100].

    Example:
        >>> parse_acceptance_rate("Last year 120 out of 4000 applicants were selected")
        3.0
    """
    if not text:
        return None

    for pattern in RATE_PATTERNS:
        for match in pattern.finditer(text):
            if match.lastindex == 2:
                selected, applicants = float(match.group(1)), float(match.group(2))
                if 0 < selected <= applicants:
                    return round(selected / applicants * 100, 2)
            else:
                rate = float(match.group(1))
                if 0 < rate <= 100:
                    return rate
    return None


class RateSource(ABC):
    """A secondary place to look up an acceptance rate for a posting URL."""

    name: str = ""

    @abstractmethod
    def applies_to(self, url: str) -> bool:
        pass

    @abstractmethod
    def lookup(self, url: str) -> Optional[float]:
        """Rate for url, or None.

        Raises:
            FetchError: If the source page cannot be retrieved
        """
        pass


class ProfessionalNetworkRateSource(RateSource):
    """Job pages on linkedin.com, fetched once with a short timeout."""

    name = "linkedin"
    URL_SIGNATURE = "linkedin.com/jobs"

    def __init__(self, fetcher: PageFetcher, timeout_seconds: float = 8.0):
        self.fetcher = fetcher
        self.timeout_seconds = timeout_seconds

    def applies_to(self, url: str) -> bool:
        return self.URL_SIGNATURE in (url or "").lower()

    def lookup(self, url: str) -> Optional[float]:
        page = self.fetcher.fetch_once(url, timeout=self.timeout_seconds)
        return parse_acceptance_rate(html_to_text(page.html))


RATE_SOURCES = {
    ProfessionalNetworkRateSource.name: ProfessionalNetworkRateSource,
}


class AcceptanceRateEnricher:
    """Attaches an acceptance rate to postings when one can be found.

    The posting description is checked first, then each secondary source that
    applies to the posting URL. Lookups never raise.
    """

    def __init__(self, sources: Optional[List[RateSource]] = None, enabled: bool = True):
        self.sources = list(sources or [])
        self.enabled = enabled

    @classmethod
    def from_config(cls, config: EnrichmentConfig, fetcher: PageFetcher) -> "AcceptanceRateEnricher":
        """Build the enricher with the secondary sources named in config."""
        sources: List[RateSource] = []
        for name in config.secondary_sources:
            source_class = RATE_SOURCES.get(name)
            if source_class is None:
                logger.warning(
                    f"Unknown acceptance-rate source {name!r} ignored",
                    extra={"event": "enrich.source.unknown", "source": name},
                )
                continue
            sources.append(source_class(fetcher, timeout_seconds=config.timeout_seconds))
        return cls(sources=sources, enabled=config.enabled)

    def lookup(self, description: Optional[str], url: Optional[str]) -> StepResult[float]:
        """Find a rate for one posting.

        Returns:
            success with the rate, empty when nothing was found, failed when
            every applicable source errored
        """
        if not self.enabled:
            return StepResult.empty("enrichment disabled")

        rate = parse_acceptance_rate(description)
        if rate is not None:
            return StepResult.success(rate)

        errors = []
        applicable = [source for source in self.sources if url and source.applies_to(url)]
        for source in applicable:
            try:
                rate = source.lookup(url)
            except FetchError as e:
                errors.append(f"{source.name}: {e}")
                logger.info(
                    f"Acceptance-rate lookup via {source.name} failed for {url}: {e}",
                    extra={
                        "event": "enrich.source.failed",
                        "source": source.name,
                        "url": url,
                        "error_type": type(e).__name__,
                    },
                )
                continue
            if rate is not None:
                logger.debug(
                    f"Acceptance rate {rate} from {source.name}",
                    extra={"event": "enrich.rate.found", "source": source.name, "url": url},
                )
                return StepResult.success(rate)

        if applicable and len(errors) == len(applicable):
            return StepResult.failed("; ".join(errors))
        return StepResult.empty("no acceptance rate published")

    def estimate(self, description: Optional[str], url: Optional[str]) -> Optional[float]:
        """Rate for one posting, or None."""
        return self.lookup(description, url).value
