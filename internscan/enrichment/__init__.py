"""Acceptance-rate enrichment for normalized postings."""

from .acceptance import (
    RATE_PATTERNS,
    RATE_SOURCES,
    AcceptanceRateEnricher,
    ProfessionalNetworkRateSource,
    RateSource,
    parse_acceptance_rate,
)

__all__ = [
    "AcceptanceRateEnricher",
    "RateSource",
    "ProfessionalNetworkRateSource",
    "RATE_SOURCES",
    "RATE_PATTERNS",
    "parse_acceptance_rate",
]
