"""Utility functions for date handling and HTML text processing."""

from .html import ParsedPage, clean_html, collapse_whitespace, html_to_text, parse_html, resolve_url
from .timestamps import ensure_utc, format_date, parse_date, utc_now, utc_today

__all__ = [
    "utc_now",
    "utc_today",
    "ensure_utc",
    "parse_date",
    "format_date",
    "ParsedPage",
    "parse_html",
    "html_to_text",
    "clean_html",
    "collapse_whitespace",
    "resolve_url",
]
