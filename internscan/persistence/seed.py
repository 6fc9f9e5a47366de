"""Load the company directory from configuration."""

from typing import Callable, ContextManager, Iterable

from sqlalchemy.orm import Session

from internscan.config.models import CompanyConfig
from internscan.domain.models import CareerPage, Company
from internscan.logging import get_logger

from .database import get_session
from .repositories import CareerPageRepository, CompanyRepository

logger = get_logger(__name__, component="database")


def seed_directory(
    companies: Iterable[CompanyConfig],
    session_factory: Callable[[], ContextManager[Session]] = get_session,
) -> int:
    """Upsert configured companies and their explicit career pages.

    Existing career pages are kept; only missing ones are added.

    Returns:
        Number of companies written
    """
    count = 0
    with session_factory() as session:
        company_repo = CompanyRepository(session)
        page_repo = CareerPageRepository(session)

        for company_config in companies:
            company_repo.upsert(
                Company(id=company_config.id, name=company_config.name, website=company_config.website)
            )
            for url in company_config.career_pages:
                page_repo.add(CareerPage(company_id=company_config.id, url=url))
            count += 1

    logger.info(
        f"Seeded {count} companies into the directory",
        extra={"event": "directory.seeded", "company_count": count},
    )
    return count
