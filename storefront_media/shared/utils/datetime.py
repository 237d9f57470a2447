"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def utc_now_ms() -> int:
    """
    Return the current Unix time in milliseconds.

    Used as the sortable timestamp component of generated filenames
    and object keys.
    """
    return int(utc_now().timestamp() * 1000)
