"""Data models for the feed aggregator."""

from feed_aggregator.models.entry import (
    PLACEHOLDER_LINK,
    UNTITLED,
    NormalizedEntry,
    RawEntry,
)
from feed_aggregator.models.source import Source, SourceRegistryFile

__all__ = [
    "Source",
    "SourceRegistryFile",
    "RawEntry",
    "NormalizedEntry",
    "UNTITLED",
    "PLACEHOLDER_LINK",
]
