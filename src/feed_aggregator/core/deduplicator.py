"""
Link-based entry deduplication.

Two entries are the same story when their links match once the query
string is removed. The first entry seen wins, so input order decides which
source's copy is kept.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from feed_aggregator.logger import get_logger
from feed_aggregator.models import PLACEHOLDER_LINK, NormalizedEntry

logger = get_logger(__name__)


def canonical_key(link: Optional[str]) -> Optional[str]:
    """Compute the deduplication key for a link.

    Args:
        link: Entry link

    Returns:
        The link up to its first ``?``, or None when the entry has no usable link
    """
    if not link or link == PLACEHOLDER_LINK:
        return None
    key = link.split("?", 1)[0]
    return key or None


@dataclass
class DedupStats:
    """Counts from the last deduplication pass."""

    total: int = 0
    kept: int = 0
    duplicates: int = 0
    missing_link: int = 0


class Deduplicator:
    """Keeps the first entry for each canonical link."""

    def __init__(self):
        self.stats = DedupStats()

    def dedupe(self, entries: Iterable[NormalizedEntry]) -> list[NormalizedEntry]:
        """Drop link-less entries and later copies of an already-seen link.

        Args:
            entries: Entries in priority order

        Returns:
            New list of unique entries, input order preserved
        """
        stats = DedupStats()
        seen: set[str] = set()
        kept: list[NormalizedEntry] = []

        for entry in entries:
            stats.total += 1
            key = canonical_key(entry.link)
            if key is None:
                stats.missing_link += 1
                continue
            if key in seen:
                stats.duplicates += 1
                continue
            seen.add(key)
            kept.append(entry)

        stats.kept = len(kept)
        self.stats = stats

        logger.debug(
            f"Dedup kept {stats.kept}/{stats.total} entries "
            f"({stats.duplicates} duplicates, {stats.missing_link} without link)"
        )
        return kept


def dedupe(entries: Iterable[NormalizedEntry]) -> list[NormalizedEntry]:
    """Deduplicate entries by canonical link, first occurrence wins."""
    return Deduplicator().dedupe(entries)
