"""Named matcher strategies for the heuristic extractor.

Each tier is an ordered list. Container strategies return the job fragments
they find; title, description and URL strategies return candidates for one
fragment. The extractor takes the first strategy that produces a usable
result.
"""

import re
from typing import Callable, List, NamedTuple, Optional

from bs4 import BeautifulSoup, Tag

from internscan.domain.models import INTERNSHIP_MARKER
from internscan.utils.html import collapse_whitespace

HEADINGS = ("h1", "h2", "h3")

_JOB = re.compile(r"job", re.IGNORECASE)
_JOB_LISTING = re.compile(r"job.*listing", re.IGNORECASE)
_JOB_ITEM = re.compile(r"job.*item", re.IGNORECASE)
_POSITION = re.compile(r"position", re.IGNORECASE)
_TITLE_CLASS = re.compile(r"job|position|title", re.IGNORECASE)
_DESCRIPTION = re.compile(r"description", re.IGNORECASE)


class ContainerStrategy(NamedTuple):
    name: str
    find: Callable[[BeautifulSoup], List[Tag]]


class FieldStrategy(NamedTuple):
    name: str
    candidates: Callable[[Tag], List[str]]


def class_matches(tag: Tag, pattern: re.Pattern) -> bool:
    """Whether the tag's class attribute, as one string, matches pattern."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return bool(classes) and bool(pattern.search(" ".join(classes)))


def _classed(name: str, pattern: re.Pattern) -> Callable[[BeautifulSoup], List[Tag]]:
    def find(soup: BeautifulSoup) -> List[Tag]:
        return soup.find_all(lambda tag: tag.name == name and class_matches(tag, pattern))

    return find


def _data_job_id(soup: BeautifulSoup) -> List[Tag]:
    return soup.find_all("div", attrs={"data-job-id": True})


CONTAINER_STRATEGIES: List[ContainerStrategy] = [
    ContainerStrategy("data-job-id", _data_job_id),
    ContainerStrategy("job-listing-class", _classed("div", _JOB_LISTING)),
    ContainerStrategy("job-item-class", _classed("div", _JOB_ITEM)),
    ContainerStrategy("position-class", _classed("div", _POSITION)),
    ContainerStrategy("job-article", _classed("article", _JOB)),
    ContainerStrategy("job-list-item", _classed("li", _JOB)),
]

FALLBACK_CONTAINER_STRATEGY = ContainerStrategy("job-div", _classed("div", _JOB))


def _self_and_descendants(fragment: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
    found = [fragment] if predicate(fragment) else []
    return found + fragment.find_all(predicate)


def _mentions_marker(text: Optional[str]) -> bool:
    return bool(text) and INTERNSHIP_MARKER in text.lower()


def _attribute_values(attribute: str, require_marker: bool = False) -> Callable[[Tag], List[str]]:
    def candidates(fragment: Tag) -> List[str]:
        values = [
            collapse_whitespace(tag.get(attribute))
            for tag in _self_and_descendants(fragment, lambda t: t.has_attr(attribute))
        ]
        return [v for v in values if v and (_mentions_marker(v) or not require_marker)]

    return candidates


def _element_texts(predicate: Callable[[Tag], bool]) -> Callable[[Tag], List[str]]:
    def candidates(fragment: Tag) -> List[str]:
        texts = [collapse_whitespace(tag.get_text(" ")) for tag in fragment.find_all(predicate)]
        return [t for t in texts if _mentions_marker(t)]

    return candidates


def _href_mentions_job(tag: Tag) -> bool:
    return bool(_JOB.search(tag.get("href") or ""))


TITLE_STRATEGIES: List[FieldStrategy] = [
    FieldStrategy("data-job-title", _attribute_values("data-job-title")),
    FieldStrategy("data-title", _attribute_values("data-title", require_marker=True)),
    FieldStrategy(
        "job-classed-heading",
        _element_texts(lambda t: t.name in HEADINGS and class_matches(t, _TITLE_CLASS)),
    ),
    FieldStrategy("heading", _element_texts(lambda t: t.name in HEADINGS)),
    FieldStrategy(
        "job-classed-link",
        _element_texts(lambda t: t.name == "a" and class_matches(t, _TITLE_CLASS) and _href_mentions_job(t)),
    ),
    FieldStrategy("job-link", _element_texts(lambda t: t.name == "a" and _href_mentions_job(t))),
    FieldStrategy(
        "job-classed-span",
        _element_texts(lambda t: t.name == "span" and class_matches(t, _TITLE_CLASS)),
    ),
    FieldStrategy("title-attribute", _attribute_values("title", require_marker=True)),
]


def _first_text(predicate: Callable[[Tag], bool], min_length: int = 1, max_length: Optional[int] = None):
    def candidates(fragment: Tag) -> List[str]:
        for tag in fragment.find_all(predicate):
            text = collapse_whitespace(tag.get_text(" "))
            if len(text) >= min_length and (max_length is None or len(text) <= max_length):
                return [text]
        return []

    return candidates


DESCRIPTION_STRATEGIES: List[FieldStrategy] = [
    FieldStrategy("description-paragraph", _first_text(lambda t: t.name == "p" and class_matches(t, _DESCRIPTION))),
    FieldStrategy("description-div", _first_text(lambda t: t.name == "div" and class_matches(t, _DESCRIPTION))),
    FieldStrategy("short-paragraph", _first_text(lambda t: t.name == "p", min_length=20, max_length=200)),
]


def _marker_link_hrefs(fragment: Tag) -> List[str]:
    links = _self_and_descendants(fragment, lambda t: t.name == "a" and t.has_attr("href"))
    return [a["href"] for a in links if _mentions_marker(a.get_text(" "))]


def _job_intern_hrefs(fragment: Tag) -> List[str]:
    links = _self_and_descendants(fragment, lambda t: t.name == "a" and t.has_attr("href"))
    return [
        a["href"]
        for a in links
        if _href_mentions_job(a) and INTERNSHIP_MARKER in a["href"].lower()
    ]


URL_STRATEGIES: List[FieldStrategy] = [
    FieldStrategy("marker-link", _marker_link_hrefs),
    FieldStrategy("job-intern-href", _job_intern_hrefs),
]
