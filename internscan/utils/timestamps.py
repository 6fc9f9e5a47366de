"""Date and time helpers.

Scans work with calendar dates (posting and due dates) as well as UTC
timestamps (run bookkeeping). This module keeps both conversions in one place:
- Getting the current UTC time and the scan date
- Coercing naive datetimes to UTC
- Tolerant parsing of the date strings found on careers pages
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current UTC calendar date (the default scan date)."""
    return utc_now().date()


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_date(value: Any) -> Optional[date]:
    """Parse a posting date in whatever shape a careers page publishes it.

    Accepts ``date``/``datetime`` objects, ISO 8601 strings
    (``2026-01-15``, ``2026-01-15T09:00:00Z``) and the looser human formats
    vendor boards emit (``Jan 15, 2026``). Timezone-aware values are converted
    to UTC before the calendar date is taken.

    Args:
        value: Raw value from structured data or a vendor payload

    Returns:
        Calendar date, or None if the value is empty or unparseable

    Example:
        >>> parse_date("2026-01-15T23:30:00-05:00")
        datetime.date(2026, 1, 16)
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value).date()

    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, OverflowError):
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def format_date(value: Optional[date]) -> Optional[str]:
    """Format a calendar date as ``YYYY-MM-DD`` (None passes through)."""
    if value is None:
        return None
    return value.isoformat()
