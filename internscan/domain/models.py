"""Core domain models for companies, scan targets, and internship postings.

This module defines the data structures that flow through a scan:
- Company / CareerPage: directory records the target resolver reads
- Target: one (company, URL) pair scheduled for a scan
- RawPosting: extractor output before normalization
- NormalizedJob: normalized posting, ready for persistence
- StoredJobRecord: a NormalizedJob bound to its company, as stored
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

INTERNSHIP_MARKER = "intern"
LOCATION_NOT_SPECIFIED = "Location not specified"


def has_internship_marker(text: Optional[str]) -> bool:
    """Whether text contains the internship marker (case-insensitive)."""
    return bool(text) and INTERNSHIP_MARKER in text.lower()


class Company(BaseModel):
    """Directory entry for a company whose careers page can be scanned."""

    id: str = Field(..., description="Company identifier")
    name: str = Field(..., description="Company display name")
    website: Optional[str] = Field(None, description="Company home page, if known")

    @field_validator("id", "name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()


class CareerPage(BaseModel):
    """Explicitly configured careers URL for a company."""

    company_id: str = Field(..., description="Company identifier")
    url: str = Field(..., description="Careers page URL, used verbatim")


class Target(BaseModel):
    """Unit of work for one scan pass. Not persisted."""

    company_id: str
    company_name: str
    url: str

    model_config = {"frozen": True}


class RawPosting(BaseModel):
    """Posting as found on a page, before field normalization.

    ``context_text`` carries the text surrounding the posting (the job
    container for heuristic matches) so the normalizer can look for location,
    skills, and sponsorship wording next to the title.
    """

    title: str = Field(..., description="Posting title as published")
    description_text: str = Field("", description="Plain-text description")
    posted_at: Optional[str] = Field(None, description="Raw publication date value")
    valid_through: Optional[str] = Field(None, description="Raw application deadline value")
    raw_location_text: Optional[str] = Field(None, description="Location from structured data")
    source_url: str = Field(..., description="Posting URL (page URL when none found)")
    context_text: str = Field("", description="Text around the posting on the page")

    @field_validator("title")
    @classmethod
    def collapse_title(cls, v: str) -> str:
        """Collapse internal whitespace; titles cannot be blank."""
        collapsed = " ".join((v or "").split())
        if not collapsed:
            raise ValueError("Posting title cannot be empty")
        return collapsed

    @field_validator("raw_location_text")
    @classmethod
    def blank_location_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = " ".join(v.split())
        return stripped or None


class NormalizedJob(BaseModel):
    """Normalized internship posting.

    Invariants:
    - title contains the internship marker
    - is_rolling is True exactly when due_date is None
    - acceptance_rate, when present, lies in (0, 100]
    - location is never empty
    """

    title: str
    description: str = ""
    post_date: date
    due_date: Optional[date] = None
    is_rolling: bool
    acceptance_rate: Optional[float] = None
    key_skills: List[str] = Field(default_factory=list)
    visa_sponsorship: bool = False
    location: str = LOCATION_NOT_SPECIFIED
    term: Optional[str] = None
    url: str

    @model_validator(mode="before")
    @classmethod
    def derive_is_rolling(cls, data):
        """Fill is_rolling from due_date when the caller leaves it out."""
        if isinstance(data, dict) and data.get("is_rolling") is None:
            data = {**data, "is_rolling": data.get("due_date") is None}
        return data

    @field_validator("title")
    @classmethod
    def require_internship_title(cls, v: str) -> str:
        stripped = " ".join(v.split())
        if not has_internship_marker(stripped):
            raise ValueError(f"Title is not an internship posting: {v!r}")
        return stripped

    @field_validator("acceptance_rate")
    @classmethod
    def rate_in_range(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return None
        if not 0 < v <= 100:
            raise ValueError(f"acceptance_rate must be in (0, 100], got {v}")
        return v

    @field_validator("key_skills")
    @classmethod
    def dedupe_skills(cls, v: List[str]) -> List[str]:
        """Keep first occurrence order, drop repeats."""
        return list(dict.fromkeys(s for s in v if s))

    @field_validator("location", mode="before")
    @classmethod
    def location_never_empty(cls, v: Optional[str]) -> str:
        stripped = str(v or "").strip()
        return stripped or LOCATION_NOT_SPECIFIED

    @model_validator(mode="after")
    def rolling_matches_due_date(self):
        if self.is_rolling != (self.due_date is None):
            raise ValueError("is_rolling must be True exactly when due_date is None")
        return self

    def with_acceptance_rate(self, rate: Optional[float]) -> "NormalizedJob":
        """Return a validated copy carrying the given acceptance rate."""
        return NormalizedJob.model_validate({**self.model_dump(), "acceptance_rate": rate})

    model_config = {"json_schema_extra": {"example": {
        "title": "Software Engineering Intern",
        "description": "Join our platform team for the summer...",
        "post_date": "2026-01-15",
        "due_date": None,
        "is_rolling": True,
        "acceptance_rate": None,
        "key_skills": ["Python", "SQL"],
        "visa_sponsorship": False,
        "location": "Toronto",
        "term": "Summer 2026",
        "url": "https://example.com/careers/123",
    }}}


class StoredJobRecord(NormalizedJob):
    """NormalizedJob bound to its company; unique on (company_id, title, url)."""

    company_id: str

    @property
    def dedupe_key(self) -> tuple:
        return (self.company_id, self.title, self.url or "")

    @classmethod
    def from_job(cls, company_id: str, job: NormalizedJob) -> "StoredJobRecord":
        return cls.model_validate({**job.model_dump(), "company_id": company_id})
