"""HTML helpers shared by the extractors and the normalizer."""

import html as html_lib
import re
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

NON_CONTENT_TAGS = ("script", "style", "noscript", "template")

_WHITESPACE = re.compile(r"\s+")


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup or "", "html.parser")


def collapse_whitespace(text: Optional[str]) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def html_to_text(markup: Union[str, Tag, None], separator: str = " ") -> str:
    """Visible text of a document or fragment.

    With the default separator all whitespace is collapsed. With
    ``separator="\\n"`` each text node becomes its own line, which keeps
    "Label:" / value pairs apart. Script, style and template contents are
    dropped. The input is never modified.
    """
    if markup is None:
        return ""
    soup = parse_html(str(markup))
    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()
    if separator == " ":
        return collapse_whitespace(soup.get_text(" "))
    lines = (collapse_whitespace(line) for line in soup.get_text(separator).split(separator))
    return separator.join(line for line in lines if line)


def clean_html(html_text: Optional[str]) -> str:
    """Plain text from an HTML description that may be entity-escaped.

    Vendor payloads often ship descriptions as escaped markup
    ("&lt;p&gt;Build tools&lt;/p&gt;"), so entities are decoded before the
    tags are stripped.

    Example:
        >>> clean_html("&lt;p&gt;Build&amp;nbsp;tools&lt;/p&gt;")
        'Build tools'
    """
    if not html_text:
        return ""
    return html_to_text(html_lib.unescape(html_text))


def resolve_url(href: Optional[str], base_url: str) -> str:
    """Absolute URL for an href found on base_url; base_url when href is empty."""
    href = (href or "").strip()
    if not href:
        return base_url
    if href.lower().startswith(("http://", "https://")):
        return href
    return urljoin(base_url, href)


@dataclass
class ParsedPage:
    """
    A fetched page, parsed once and shared by every extraction step.

    Attributes:
        url: URL the page was fetched from (base for relative links)
        html: Raw markup
        soup: Parsed document
    """

    url: str
    html: str
    soup: BeautifulSoup = field(init=False, repr=False)
    _text: Optional[str] = field(default=None, init=False, repr=False)
    _lines: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.soup = parse_html(self.html)

    @property
    def text(self) -> str:
        """Visible page text, computed on first use."""
        if self._text is None:
            self._text = html_to_text(self.html)
        return self._text

    @property
    def lines(self) -> str:
        """Visible page text, one text node per line."""
        if self._lines is None:
            self._lines = html_to_text(self.html, separator="\n")
        return self._lines
