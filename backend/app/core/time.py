"""Time utilities for timezone-aware UTC datetimes and billing dates."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def today() -> date:
    """Calendar date used when a request leaves billing dates unset."""
    return date.today()
