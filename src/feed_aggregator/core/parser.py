"""
Entry normalizer.

Maps raw feed entries of any shape (feedparser entries or plain mappings)
onto NormalizedEntry. Missing fields are defaulted, never reported.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from feed_aggregator.logger import get_logger
from feed_aggregator.models import PLACEHOLDER_LINK, UNTITLED, NormalizedEntry, RawEntry
from feed_aggregator.utils.dates import from_struct, parse_date_string, to_utc

logger = get_logger(__name__)

# Plain-text snippets first, then the full content body
SNIPPET_FIELDS = ("contentSnippet", "summary")
CONTENT_FIELDS = ("content",)

# Already-parsed timestamps first, then raw date strings
STRUCTURED_DATE_FIELDS = ("isoDate", "published_parsed", "updated_parsed")
RAW_DATE_FIELDS = ("published", "pubDate", "updated")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _content_body(value: Any) -> str:
    """Extract the body from a content field.

    feedparser stores content as a list of ``{"type", "value"}`` dicts; other
    parsers use a plain string.
    """
    if isinstance(value, Mapping):
        return _text(value.get("value"))
    if isinstance(value, (list, tuple)):
        for part in value:
            body = _content_body(part)
            if body:
                return body
        return ""
    return _text(value)


def _structured_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, str):
        return parse_date_string(value)
    if isinstance(value, (tuple, list)) or hasattr(value, "tm_year"):
        return from_struct(value)
    return None


class EntryNormalizer:
    """Turns raw entries into NormalizedEntry records."""

    def normalize(self, raw: Mapping[str, Any], source_name: str) -> NormalizedEntry:
        """Normalize one raw entry.

        Args:
            raw: Raw entry fields
            source_name: Display name of the originating source

        Returns:
            NormalizedEntry with defaults applied
        """
        raw = raw or {}
        return NormalizedEntry(
            title=_text(raw.get("title")) or UNTITLED,
            link=_text(raw.get("link")) or PLACEHOLDER_LINK,
            raw_description_html=self._description(raw),
            published_at=self._published_at(raw),
            source_name=source_name,
        )

    def normalize_all(self, raw_entries: list[RawEntry]) -> list[NormalizedEntry]:
        """Normalize tagged raw entries, preserving order."""
        return [self.normalize(item.data, item.source_name) for item in raw_entries]

    def _description(self, raw: Mapping[str, Any]) -> str:
        for key in SNIPPET_FIELDS:
            snippet = _text(raw.get(key))
            if snippet:
                return snippet
        for key in CONTENT_FIELDS:
            body = _content_body(raw.get(key))
            if body:
                return body
        return ""

    def _published_at(self, raw: Mapping[str, Any]) -> Optional[datetime]:
        for key in STRUCTURED_DATE_FIELDS:
            timestamp = _structured_timestamp(raw.get(key))
            if timestamp is not None:
                return timestamp
        for key in RAW_DATE_FIELDS:
            timestamp = parse_date_string(raw.get(key))
            if timestamp is not None:
                return timestamp
            if raw.get(key):
                logger.debug(f"Failed to parse date: {raw.get(key)}")
        return None


_default_normalizer = EntryNormalizer()


def normalize(raw: Mapping[str, Any], source_name: str) -> NormalizedEntry:
    """Normalize one raw entry with the default normalizer."""
    return _default_normalizer.normalize(raw, source_name)
