"""Data access layer (repositories) for persistence operations.

Repositories wrap a SQLAlchemy session, return domain models rather than ORM
rows, and translate SQLAlchemy failures into the persistence exception
family.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from internscan.domain.models import CareerPage, Company, StoredJobRecord

from .exceptions import DataIntegrityError, PersistenceError
from .schema import CareerPageModel, CompanyModel, JobListingModel

logger = logging.getLogger(__name__)


class CompanyRepository:
    """Read and seed the company directory."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, company_id: str) -> Optional[Company]:
        """Retrieve a company by id, or None.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(CompanyModel, company_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving company {company_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve company: {e}") from e

    def list_all(self) -> List[Company]:
        """All companies, ordered by id."""
        try:
            stmt = select(CompanyModel).order_by(CompanyModel.id)
            return [m.to_domain() for m in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing companies: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list companies: {e}") from e

    def get_many(self, company_ids: Iterable[str]) -> List[Company]:
        """Companies for the given ids, in request order.

        Unknown ids are silently ignored; repeated ids yield one company.
        """
        wanted = list(dict.fromkeys(company_ids))
        if not wanted:
            return []

        try:
            stmt = select(CompanyModel).where(CompanyModel.id.in_(wanted))
            found = {m.id: m.to_domain() for m in self.session.execute(stmt).scalars().all()}
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving companies {wanted}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve companies: {e}") from e

        return [found[cid] for cid in wanted if cid in found]

    def upsert(self, company: Company) -> Company:
        """Insert a company or update its name and website.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(CompanyModel, company.id)
            if existing:
                existing.name = company.name
                existing.website = company.website
                self.session.flush()
                return existing.to_domain()

            model = CompanyModel.from_domain(company)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting company {company.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to upsert company due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting company {company.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert company: {e}") from e


class CareerPageRepository:
    """Explicit careers URLs per company."""

    def __init__(self, session: Session):
        self.session = session

    def list_for_company(self, company_id: str) -> List[CareerPage]:
        """Career pages for a company, in insertion order."""
        try:
            stmt = (
                select(CareerPageModel)
                .where(CareerPageModel.company_id == company_id)
                .order_by(CareerPageModel.id)
            )
            return [m.to_domain() for m in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing career pages for {company_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list career pages: {e}") from e

    def add(self, page: CareerPage) -> CareerPage:
        """Register a career page. Adding an existing (company_id, url) is a no-op."""
        try:
            stmt = select(CareerPageModel).where(
                CareerPageModel.company_id == page.company_id,
                CareerPageModel.url == page.url,
            )
            existing = self.session.execute(stmt).scalar_one_or_none()
            if existing:
                return existing.to_domain()

            model = CareerPageModel(company_id=page.company_id, url=page.url)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error adding career page {page.url}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to add career page due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error adding career page {page.url}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to add career page: {e}") from e


class JobListingRepository:
    """Insert-only storage for normalized internship postings."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, company_id: str, title: str, url: Optional[str]) -> bool:
        """Whether a listing with this (company_id, title, url) is already stored.

        A missing url matches the empty string.
        """
        try:
            stmt = select(JobListingModel.id).where(
                JobListingModel.company_id == company_id,
                JobListingModel.title == title,
                JobListingModel.url == (url or ""),
            )
            return self.session.execute(stmt).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Error checking listing existence for {company_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to check listing existence: {e}") from e

    def insert(self, record: StoredJobRecord) -> StoredJobRecord:
        """Insert a new listing.

        Raises:
            DataIntegrityError: If the uniqueness constraint is violated
            PersistenceError: If any other database error occurs
        """
        try:
            model = JobListingModel.from_domain(record)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()

        except IntegrityError as e:
            logger.warning(
                f"Integrity error inserting listing {record.title!r}: {e}",
                extra={"event": "persist.row.conflict", "company_id": record.company_id},
            )
            raise DataIntegrityError(f"Failed to insert listing due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error inserting listing {record.title!r}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert listing: {e}") from e

    def list_for_company(self, company_id: str) -> List[StoredJobRecord]:
        """Stored listings for a company, oldest first."""
        try:
            stmt = (
                select(JobListingModel)
                .where(JobListingModel.company_id == company_id)
                .order_by(JobListingModel.id)
            )
            return [m.to_domain() for m in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing jobs for {company_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list jobs: {e}") from e
