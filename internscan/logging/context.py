"""Scoped logging context.

Fields pushed here (run id, company id, target URL) are merged into every log
record emitted inside the scope by ``ContextualFilter``. Storage is a
ContextVar, so nested scopes and threads each see their own view.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_scan_context: ContextVar[Dict[str, Any]] = ContextVar("scan_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return dict(_scan_context.get())


def push_log_context(**fields) -> Token:
    """Merge ``fields`` into the active context.

    Returns:
        Token to hand back to pop_log_context()
    """
    return _scan_context.set({**_scan_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before the matching push."""
    _scan_context.reset(token)


def clear_log_context() -> None:
    """Drop every context field (used by tests)."""
    _scan_context.set({})


class log_context:
    """Context manager pushing fields for the duration of a block.

    Example:
        >>> with log_context(run_id="abc123", company_id="c1"):
        ...     logger.info("Fetching target")
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
