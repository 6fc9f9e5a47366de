"""Persistence layer: company directory and internship listings over SQLAlchemy.

Public API:
    - init_database / get_session / close_database / get_engine
    - CompanyRepository, CareerPageRepository, JobListingRepository
    - JobPersister, PersistResult, is_persistable_title
    - seed_directory
    - PersistenceError and subclasses

Example usage:
    >>> from internscan.persistence import init_database, JobPersister
    >>> init_database("sqlite:///./data/internscan.db")
    >>> result = JobPersister().persist("acme", jobs)
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
)
from .persister import JobPersister, PersistResult, is_persistable_title
from .repositories import CareerPageRepository, CompanyRepository, JobListingRepository
from .seed import seed_directory

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "CompanyRepository",
    "CareerPageRepository",
    "JobListingRepository",
    "JobPersister",
    "PersistResult",
    "is_persistable_title",
    "seed_directory",
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
