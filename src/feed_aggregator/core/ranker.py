"""
Newest-first ordering of aggregated entries.
"""

from datetime import datetime, timezone
from typing import Sequence

from feed_aggregator.models import NormalizedEntry

# Entries without a timestamp sort as if published at the Unix epoch
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def effective_timestamp(entry: NormalizedEntry) -> datetime:
    """Publication time used for ordering."""
    return entry.published_at or EPOCH


def rank(entries: Sequence[NormalizedEntry]) -> list[NormalizedEntry]:
    """Sort entries by effective timestamp, newest first.

    Ties (including two missing timestamps) keep their input order: the key
    is ``(-timestamp, input position)``, which is a total order.

    Args:
        entries: Entries to order; not modified

    Returns:
        New ordered list
    """
    indexed = list(enumerate(entries))
    indexed.sort(key=lambda pair: (-effective_timestamp(pair[1]).timestamp(), pair[0]))
    return [entry for _, entry in indexed]
