"""Scan target resolution from the company directory."""

from .overrides import CAREER_SITE_OVERRIDES
from .service import TargetResolver, compact_name, synthesize_careers_url, website_origin

__all__ = [
    "TargetResolver",
    "synthesize_careers_url",
    "compact_name",
    "website_origin",
    "CAREER_SITE_OVERRIDES",
]
