"""Datetime utilities."""

from datetime import datetime, timezone


def now() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Make a datetime timezone-aware, treating naive values as UTC.

    Some stores hand back naive timestamps for ``timestamp with time zone``
    columns; API responses always carry an offset.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
