"""Database schema definition and ORM models.

Defines the company directory tables and the job listings table, plus
conversions between ORM rows and domain models. Dates are stored as ISO 8601
strings, skills as a JSON array.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from internscan.domain.models import CareerPage, Company, StoredJobRecord
from internscan.utils.timestamps import format_date, parse_date, utc_now

logger = logging.getLogger(__name__)

Base = declarative_base()


class CompanyModel(Base):
    """ORM model for the companies table (the company directory)."""

    __tablename__ = "companies"

    id = Column(String(255), primary_key=True, nullable=False)
    name = Column(String(255), nullable=False)
    website = Column(Text, nullable=True)

    def to_domain(self) -> Company:
        return Company(id=self.id, name=self.name, website=self.website)

    @classmethod
    def from_domain(cls, company: Company) -> "CompanyModel":
        return cls(id=company.id, name=company.name, website=company.website)


class CareerPageModel(Base):
    """ORM model for career_pages: explicit careers URLs per company."""

    __tablename__ = "career_pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "url", name="uq_career_pages_company_url"),
        Index("idx_career_pages_company", "company_id"),
    )

    def to_domain(self) -> CareerPage:
        return CareerPage(company_id=self.company_id, url=self.url)


class JobListingModel(Base):
    """ORM model for job_listings.

    Rows are insert-only. The (company_id, title, url) triple is the
    de-duplication key; url is stored as "" when a posting has none.
    """

    __tablename__ = "job_listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(String(255), nullable=False)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    url = Column(Text, nullable=False, default="")
    location = Column(String(255), nullable=False)
    term = Column(String(100), nullable=True)

    # Dates (stored as ISO 8601 YYYY-MM-DD strings)
    post_date = Column(String(10), nullable=False)
    due_date = Column(String(10), nullable=True)
    is_rolling = Column(Boolean, nullable=False)

    acceptance_rate = Column(Float, nullable=True)
    key_skills = Column(JSON, nullable=False, default=list)
    visa_sponsorship = Column(Boolean, nullable=False, default=False)

    created_at = Column(String(50), nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "title", "url", name="uq_job_listings_identity"),
        Index("idx_job_listings_company", "company_id"),
        Index("idx_job_listings_post_date", "post_date"),
    )

    def to_domain(self) -> StoredJobRecord:
        """Convert ORM row to domain model."""
        return StoredJobRecord(
            company_id=self.company_id,
            title=self.title,
            description=self.description or "",
            url=self.url or "",
            location=self.location,
            term=self.term,
            post_date=parse_date(self.post_date),
            due_date=parse_date(self.due_date),
            is_rolling=self.is_rolling,
            acceptance_rate=self.acceptance_rate,
            key_skills=list(self.key_skills or []),
            visa_sponsorship=self.visa_sponsorship,
        )

    @classmethod
    def from_domain(cls, record: StoredJobRecord, created_at: Optional[datetime] = None) -> "JobListingModel":
        """Create ORM row from domain model."""
        created = created_at or utc_now()
        return cls(
            company_id=record.company_id,
            title=record.title,
            description=record.description,
            url=record.url or "",
            location=record.location,
            term=record.term,
            post_date=format_date(record.post_date),
            due_date=format_date(record.due_date),
            is_rolling=record.is_rolling,
            acceptance_rate=record.acceptance_rate,
            key_skills=list(record.key_skills),
            visa_sponsorship=record.visa_sponsorship,
            created_at=created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
