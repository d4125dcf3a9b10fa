"""
Date helpers shared by the normalizer and the renderer.

All results are timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from feedparser.datetimes import _parse_date


def to_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_struct(value: Any) -> Optional[datetime]:
    """Convert a feedparser struct_time (always UTC) to a datetime."""
    try:
        return datetime(*tuple(value)[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_date_string(value: Any) -> Optional[datetime]:
    """Parse an RFC 822 / ISO 8601 / W3C date string.

    Uses feedparser's date handlers, which cover the formats found in
    RSS and Atom feeds.

    Args:
        value: Raw date string

    Returns:
        UTC datetime, or None if the string is not a valid instant
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = _parse_date(value.strip())
    except (ValueError, OverflowError, TypeError):
        return None

    if not parsed:
        return None

    return from_struct(parsed)
