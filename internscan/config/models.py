"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class CompanyConfig(BaseModel):
    """A company to seed into the directory, with optional explicit career pages."""

    id: str = Field(..., min_length=1, description="Stable company identifier")
    name: str = Field(..., min_length=1, description="Company display name")
    website: Optional[str] = Field(None, description="Company home page")
    career_pages: List[str] = Field(
        default_factory=list, description="Explicit career page URLs (used verbatim)"
    )

    @field_validator("id", "name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("website")
    @classmethod
    def blank_website_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("career_pages")
    @classmethod
    def require_absolute_urls(cls, v: List[str]) -> List[str]:
        cleaned = []
        for url in v:
            url = url.strip()
            if not url:
                continue
            if not url.lower().startswith(("http://", "https://")):
                raise ValueError(f"Career page URL must be absolute (http/https): {url}")
            cleaned.append(url)
        return cleaned


class FetchConfig(BaseModel):
    """HTTP settings for page retrieval."""

    timeout_seconds: float = Field(
        15.0, gt=0, le=120, description="Per-request timeout (seconds)"
    )
    total_timeout_seconds: float = Field(
        45.0, gt=0, le=600, description="Latency budget for all fallback attempts on one URL"
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1)
    accept: str = Field(DEFAULT_ACCEPT, min_length=1)

    @model_validator(mode="after")
    def budget_covers_one_request(self):
        if self.total_timeout_seconds < self.timeout_seconds:
            raise ValueError("total_timeout_seconds must be >= timeout_seconds")
        return self


class ExtractionConfig(BaseModel):
    """Limits applied while turning pages into postings."""

    max_containers: int = Field(50, ge=1, le=500, description="Job containers scanned per page")
    max_fallback_links: int = Field(
        30, ge=1, le=500, description="Links considered by the last-resort link scan"
    )
    max_description_length: int = Field(1000, ge=50, le=20000)
    max_skills: int = Field(5, ge=1, le=20)


class EnrichmentConfig(BaseModel):
    """Acceptance-rate enrichment settings."""

    enabled: bool = Field(True, description="Look up acceptance rates for postings")
    timeout_seconds: float = Field(8.0, gt=0, le=60, description="Secondary fetch timeout")
    secondary_sources: List[str] = Field(
        default_factory=lambda: ["linkedin"],
        description="Names of secondary rate sources to consult",
    )

    @field_validator("secondary_sources")
    @classmethod
    def normalize_names(cls, v: List[str]) -> List[str]:
        return [name.strip().lower() for name in v if name and name.strip()]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for internscan."""

    companies: List[CompanyConfig] = Field(
        default_factory=list, description="Companies to seed into the directory"
    )
    geographies: List[str] = Field(
        default_factory=list,
        description="Default geographies; the first is the location fallback",
    )
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("geographies")
    @classmethod
    def drop_blank_geographies(cls, v: List[str]) -> List[str]:
        return [g.strip() for g in v if g and g.strip()]

    @model_validator(mode="after")
    def reject_duplicate_companies(self):
        seen = set()
        for company in self.companies:
            if company.id in seen:
                raise ValueError(f"Duplicate company id: {company.id} appears multiple times")
            seen.add(company.id)
        return self
