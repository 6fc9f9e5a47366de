"""Normalization of extracted postings into typed internship records.

This module provides:
- Field extractors (location, visa sponsorship, term, skills, dates)
- JobNormalizer: RawPosting -> NormalizedJob for one scan
"""

from .fields import (
    SKILL_VOCABULARY,
    extract_location,
    extract_skills,
    extract_term,
    extract_visa_sponsorship,
    parse_posting_date,
    truncate_description,
)
from .service import JobNormalizer

__all__ = [
    "JobNormalizer",
    "extract_location",
    "extract_visa_sponsorship",
    "extract_term",
    "extract_skills",
    "parse_posting_date",
    "truncate_description",
    "SKILL_VOCABULARY",
]
