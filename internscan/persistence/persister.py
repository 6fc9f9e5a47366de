"""Deduplicating, insert-only persistence of normalized postings."""

from dataclasses import dataclass
from typing import Callable, ContextManager, Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from internscan.domain.models import NormalizedJob, StoredJobRecord, has_internship_marker
from internscan.logging import get_logger

from .database import get_session
from .exceptions import DataIntegrityError, PersistenceError
from .repositories import JobListingRepository

logger = get_logger(__name__, component="persister")

BLOCKED_TITLES = frozenset(
    {
        "internal career site",
        "career site",
        "careers",
        "jobs",
        "view jobs",
        "search jobs",
    }
)


def is_persistable_title(title: Optional[str]) -> bool:
    """Last-line guard: reject navigation labels and non-internship titles.

    Example:
        >>> is_persistable_title("Internal Career Site")
        False
        >>> is_persistable_title("Software Engineering Intern")
        True
    """
    if not title:
        return False
    folded = title.strip().casefold()
    if folded in BLOCKED_TITLES:
        return False
    return has_internship_marker(folded)


@dataclass
class PersistResult:
    """
    Per-batch persistence counts.

    Attributes:
        inserted: New rows written
        skipped: Blocked titles and postings already stored
        failed: Rows that raised an unexpected storage error
    """

    inserted: int = 0
    skipped: int = 0
    failed: int = 0


class JobPersister:
    """Stores postings for one company without ever creating duplicates.

    Every row runs in its own session, so a failed insert rolls back only
    itself and the rest of the batch continues.
    """

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] = get_session):
        self._session_factory = session_factory

    def persist(self, company_id: str, jobs: Iterable[NormalizedJob]) -> PersistResult:
        """Insert every posting not already stored for this company.

        Args:
            company_id: Owning company
            jobs: Normalized postings (acceptance rate already attached)

        Returns:
            PersistResult with inserted, skipped and failed counts
        """
        result = PersistResult()

        for job in jobs:
            if not is_persistable_title(job.title):
                result.skipped += 1
                logger.debug(
                    f"Blocked title not persisted: {job.title!r}",
                    extra={"event": "persist.row.blocked", "title": job.title},
                )
                continue

            record = StoredJobRecord.from_job(company_id, job)
            try:
                inserted = self._insert_if_absent(record)
            except DataIntegrityError:
                result.skipped += 1
                continue
            except PersistenceError as e:
                result.failed += 1
                logger.error(
                    f"Failed to persist {job.title!r}: {e}",
                    extra={
                        "event": "persist.row.failed",
                        "title": job.title,
                        "url": job.url,
                        "error_type": type(e).__name__,
                    },
                )
                continue

            if inserted:
                result.inserted += 1
                logger.info(
                    f"Inserted listing {job.title!r}",
                    extra={"event": "persist.row.inserted", "title": job.title, "url": job.url},
                )
            else:
                result.skipped += 1
                logger.debug(
                    f"Listing already stored: {job.title!r}",
                    extra={"event": "persist.row.duplicate", "title": job.title, "url": job.url},
                )

        logger.info(
            f"Persisted {result.inserted} listings for {company_id}",
            extra={
                "event": "persist.batch.completed",
                "company_id": company_id,
                "inserted": result.inserted,
                "skipped": result.skipped,
                "failed": result.failed,
            },
        )
        return result

    def _insert_if_absent(self, record: StoredJobRecord) -> bool:
        """Insert one row in its own session; commit errors become persistence errors.

        Raises:
            DataIntegrityError: If the row conflicts, at flush or at commit
            PersistenceError: On any other storage failure
        """
        try:
            with self._session_factory() as session:
                repo = JobListingRepository(session)
                if repo.exists(record.company_id, record.title, record.url):
                    return False
                repo.insert(record)
                return True
        except IntegrityError as e:
            raise DataIntegrityError(f"Listing conflicted at commit: {e}") from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to commit listing: {e}") from e
