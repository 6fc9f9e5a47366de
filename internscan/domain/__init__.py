"""Domain models for internscan."""

from .models import (
    INTERNSHIP_MARKER,
    LOCATION_NOT_SPECIFIED,
    CareerPage,
    Company,
    NormalizedJob,
    RawPosting,
    StoredJobRecord,
    Target,
    has_internship_marker,
)
from .results import StepResult, StepStatus

__all__ = [
    "Company",
    "CareerPage",
    "Target",
    "RawPosting",
    "NormalizedJob",
    "StoredJobRecord",
    "StepResult",
    "StepStatus",
    "INTERNSHIP_MARKER",
    "LOCATION_NOT_SPECIFIED",
    "has_internship_marker",
]
