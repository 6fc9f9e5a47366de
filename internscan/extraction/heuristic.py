"""Markup heuristics for pages without structured job data."""

from typing import List, Optional, Tuple

from bs4 import Tag
from pydantic import ValidationError

from internscan.config.models import ExtractionConfig
from internscan.domain.models import RawPosting, has_internship_marker
from internscan.logging import get_logger
from internscan.utils.html import ParsedPage, collapse_whitespace, html_to_text, resolve_url

from .strategies import (
    CONTAINER_STRATEGIES,
    DESCRIPTION_STRATEGIES,
    FALLBACK_CONTAINER_STRATEGY,
    TITLE_STRATEGIES,
    URL_STRATEGIES,
    FieldStrategy,
)
from .titles import PostingCollector, is_valid_posting_title

logger = get_logger(__name__, component="extractor")


class HeuristicExtractor:
    """Finds postings in job-like markup fragments, then in plain links.

    Attributes:
        config: Fragment and link caps
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()

    def extract(self, page: ParsedPage, collector: PostingCollector) -> Optional[str]:
        """Add heuristic postings for page to collector.

        Returns:
            Name of the strategy that produced the postings ("marker-links"
            for the last-resort link scan), or None when nothing was found
        """
        strategy_name, fragments = self.find_containers(page)
        before = len(collector)

        for fragment in fragments:
            posting = self.posting_from_fragment(fragment, page.url)
            if posting is not None:
                collector.add(posting)

        if len(collector) > before:
            logger.debug(
                f"Fragment pass found {len(collector) - before} postings via {strategy_name}",
                extra={
                    "event": "extract.heuristic.fragments",
                    "strategy": strategy_name,
                    "fragment_count": len(fragments),
                },
            )
            return strategy_name

        for posting in self.marker_links(page):
            collector.add(posting)
        if len(collector) > before:
            return "marker-links"
        return None

    def find_containers(self, page: ParsedPage) -> Tuple[str, List[Tag]]:
        """Fragments from the first container strategy with any match."""
        for strategy in CONTAINER_STRATEGIES:
            found = strategy.find(page.soup)
            if found:
                return strategy.name, found[: self.config.max_containers]
        fallback = FALLBACK_CONTAINER_STRATEGY
        return fallback.name, fallback.find(page.soup)[: self.config.max_containers]

    def posting_from_fragment(self, fragment: Tag, page_url: str) -> Optional[RawPosting]:
        """Posting for one fragment, or None when it has no valid title."""
        title = _first_candidate(TITLE_STRATEGIES, fragment, is_valid_posting_title)
        if not title:
            return None

        description = _first_candidate(DESCRIPTION_STRATEGIES, fragment) or ""
        href = _first_candidate(URL_STRATEGIES, fragment)

        try:
            return RawPosting(
                title=title,
                description_text=description,
                source_url=resolve_url(href, page_url),
                context_text=html_to_text(fragment, separator="\n"),
            )
        except ValidationError:
            return None

    def marker_links(self, page: ParsedPage) -> List[RawPosting]:
        """Last resort: links whose visible text mentions an internship."""
        postings = []
        for anchor in page.soup.find_all("a", href=True):
            text = collapse_whitespace(anchor.get_text(" "))
            if not has_internship_marker(text):
                continue
            postings.append(
                RawPosting(title=text, source_url=resolve_url(anchor["href"], page.url))
            )
            if len(postings) >= self.config.max_fallback_links:
                break
        return postings


def _first_candidate(strategies: List[FieldStrategy], fragment: Tag, accept=None) -> Optional[str]:
    for strategy in strategies:
        for candidate in strategy.candidates(fragment):
            if accept is None or accept(candidate):
                return candidate
    return None
