"""
Relative time phrases ("3 hours ago", "in 2 days").
"""

from datetime import datetime, timezone
from typing import Optional, Union

from feed_aggregator.utils.dates import parse_date_string

# Largest unit first
UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def _as_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return parse_date_string(value)


def humanize(value: Union[datetime, str, None], now: Optional[datetime] = None) -> str:
    """Describe a timestamp relative to now.

    Args:
        value: Timestamp (naive datetimes are taken as UTC) or date string
        now: Reference time, defaults to the current time

    Returns:
        Phrase in the largest unit that fits, or "" for a missing/invalid timestamp
    """
    timestamp = _as_utc(value)
    if timestamp is None:
        return ""

    now = _as_utc(now) or datetime.now(timezone.utc)
    delta = (timestamp - now).total_seconds()
    seconds = abs(delta)

    for unit, size in UNITS:
        count = int(seconds // size)
        if count >= 1:
            break
    else:
        return "just now"

    phrase = f"{count} {unit}" + ("" if count == 1 else "s")
    if delta < 0:
        return f"{phrase} ago"
    return f"in {phrase}"
