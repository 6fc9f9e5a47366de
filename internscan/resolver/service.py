"""Turn company ids into concrete (company, URL) scan targets."""

import re
from typing import Callable, ContextManager, List, Optional
from urllib.parse import urlparse

from sqlalchemy.orm import Session

from internscan.domain.models import Company, Target
from internscan.logging import get_logger
from internscan.persistence.database import get_session
from internscan.persistence.repositories import CareerPageRepository, CompanyRepository

from .overrides import CAREER_SITE_OVERRIDES

logger = get_logger(__name__, component="resolver")

_WHITESPACE = re.compile(r"\s+")


def compact_name(name: str) -> str:
    """Lower-case a company name and drop all whitespace ("Jane Street" -> "janestreet")."""
    return _WHITESPACE.sub("", (name or "").lower())


def is_wikipedia_url(url: str) -> bool:
    return "wikipedia.org" in url.lower()


def website_origin(website: str) -> Optional[str]:
    """Scheme and host of a website URL; None when no host can be found.

    Bare hosts ("acme.com") are treated as https.
    """
    candidate = website.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parsed = urlparse(candidate)
    if not parsed.netloc:
        return None
    return f"{parsed.scheme}://{parsed.netloc}"


def synthesize_careers_url(company: Company) -> str:
    """Best-guess careers URL for a company without explicit career pages.

    Priority: the company website (unless it is a Wikipedia article) reduced
    to its origin plus "/careers", then the override table, then
    "https://{compacted-name}.com/careers".

    Example:
        >>> synthesize_careers_url(Company(id="1", name="Acme", website="https://acme.io/about"))
        'https://acme.io/careers'
        >>> synthesize_careers_url(Company(id="2", name="Stripe"))
        'https://stripe.com/jobs'
    """
    if company.website and not is_wikipedia_url(company.website):
        origin = website_origin(company.website)
        if origin:
            return f"{origin}/careers"

    key = compact_name(company.name)
    if key in CAREER_SITE_OVERRIDES:
        return CAREER_SITE_OVERRIDES[key]
    return f"https://{key}.com/careers"


class TargetResolver:
    """Reads the company directory and produces scan targets. Never writes."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] = get_session):
        self._session_factory = session_factory

    def resolve(self, company_ids: Optional[List[str]] = None) -> List[Target]:
        """Resolve targets for the requested companies.

        Args:
            company_ids: Companies to scan; None or empty means every company
                in the directory. Unknown ids are ignored.

        Returns:
            Targets in company order; explicit career pages are used verbatim,
            otherwise one synthesized URL per company. No (company_id, url)
            pair appears twice.
        """
        targets: List[Target] = []
        seen = set()

        with self._session_factory() as session:
            company_repo = CompanyRepository(session)
            page_repo = CareerPageRepository(session)

            companies = company_repo.get_many(company_ids) if company_ids else company_repo.list_all()

            for company in companies:
                pages = page_repo.list_for_company(company.id)
                if pages:
                    urls = [page.url for page in pages]
                    source = "career_pages"
                else:
                    urls = [synthesize_careers_url(company)]
                    source = "synthesized"

                for url in urls:
                    key = (company.id, url)
                    if key in seen:
                        continue
                    seen.add(key)
                    targets.append(Target(company_id=company.id, company_name=company.name, url=url))
                    logger.debug(
                        f"Target {company.name}: {url}",
                        extra={
                            "event": "resolver.target.added",
                            "company_id": company.id,
                            "target_url": url,
                            "url_source": source,
                        },
                    )

        logger.info(
            f"Resolved {len(targets)} targets",
            extra={
                "event": "resolver.completed",
                "requested_ids": len(company_ids or []),
                "target_count": len(targets),
            },
        )
        return targets
