"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can catch
every storage failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialized or reached.

    Examples:
    - Invalid database URL
    - Database file not writable
    - get_session() called before init_database()
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised on a constraint violation.

    The job persister treats a violated (company_id, title, url) uniqueness
    constraint as an already-stored posting.
    """

    pass
