"""
Timezone-aware datetime utilities for the contact form store.

All functions return timezone-aware datetime objects. Stored timestamps are
always UTC; SQLite hands them back naive, so readers go through ensure_utc.
"""

from datetime import datetime, timezone
from typing import Optional
import pytz


def utc_now() -> datetime:
    """
    Get the current UTC time as a timezone-aware datetime object.

    Returns:
        datetime: Current UTC time with timezone information
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime object is timezone-aware and in UTC.

    Naive values are assumed to already be UTC.

    Args:
        dt: Datetime object (may be naive or timezone-aware)

    Returns:
        datetime: Timezone-aware datetime in UTC, or None if dt is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_timezone(name: str):
    """
    Look up a timezone by its IANA name.

    Raises:
        pytz.UnknownTimeZoneError: If the name is not a known zone
    """
    return pytz.timezone(name)
