"""Unit tests for the entry normalizer."""

import time
from datetime import datetime, timedelta, timezone

import feedparser
import pytest

from feed_aggregator.core.parser import EntryNormalizer, normalize
from feed_aggregator.models import PLACEHOLDER_LINK, UNTITLED, NormalizedEntry, RawEntry
from feed_aggregator.utils.dates import parse_date_string


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestDefaults:
    """Tests for missing fields."""

    def test_empty_entry(self):
        """Test that an empty entry still normalizes."""
        entry = normalize({}, "Source")

        assert entry == NormalizedEntry(
            title=UNTITLED,
            link=PLACEHOLDER_LINK,
            raw_description_html="",
            published_at=None,
            source_name="Source",
        )

    def test_none_entry(self):
        """Test that None is treated as an empty entry."""
        assert normalize(None, "S").title == "(untitled)"

    def test_blank_fields(self):
        """Test whitespace-only title and link."""
        entry = normalize({"title": "   ", "link": "\n"}, "S")

        assert entry.title == "(untitled)"
        assert entry.link == "#"

    def test_fields_are_stripped(self):
        """Test title and link trimming."""
        entry = normalize({"title": "  Hello  ", "link": " https://example.com/a "}, "S")

        assert entry.title == "Hello"
        assert entry.link == "https://example.com/a"

    def test_entry_is_immutable(self):
        """Test frozen records."""
        entry = normalize({"title": "T"}, "S")

        with pytest.raises(AttributeError):
            entry.title = "other"


class TestDescription:
    """Tests for description precedence."""

    def test_snippet_preferred(self):
        """Test contentSnippet wins over everything else."""
        raw = {"contentSnippet": "snippet", "summary": "summary", "content": "<p>body</p>"}
        assert normalize(raw, "S").raw_description_html == "snippet"

    def test_summary_before_content(self):
        """Test feedparser summary is used as the snippet."""
        raw = {"summary": "summary", "content": [{"value": "<p>body</p>"}]}
        assert normalize(raw, "S").raw_description_html == "summary"

    def test_content_string(self):
        """Test plain string content body."""
        assert normalize({"content": "<p>body</p>"}, "S").raw_description_html == "<p>body</p>"

    def test_content_list(self):
        """Test feedparser's list-of-dicts content."""
        raw = {"content": [{"type": "text/html", "value": ""}, {"type": "text/html", "value": "<b>x</b>"}]}
        assert normalize(raw, "S").raw_description_html == "<b>x</b>"

    def test_empty_snippet_falls_through(self):
        """Test that empty snippets do not block the content body."""
        raw = {"contentSnippet": "", "summary": "  ", "content": "body"}
        assert normalize(raw, "S").raw_description_html == "body"


class TestTimestamp:
    """Tests for timestamp precedence and parsing."""

    def test_iso_date(self):
        """Test ISO 8601 structured field."""
        entry = normalize({"isoDate": "2024-01-01T10:00:00Z"}, "S")
        assert entry.published_at == utc(2024, 1, 1, 10, 0, 0)

    def test_parsed_struct(self):
        """Test feedparser struct_time field."""
        struct = time.strptime("2024-02-03 04:05:06", "%Y-%m-%d %H:%M:%S")
        entry = normalize({"published_parsed": struct}, "S")
        assert entry.published_at == utc(2024, 2, 3, 4, 5, 6)

    def test_raw_pub_date(self):
        """Test RFC 822 fallback."""
        entry = normalize({"pubDate": "Mon, 01 Jan 2024 10:00:00 GMT"}, "S")
        assert entry.published_at == utc(2024, 1, 1, 10, 0, 0)

    def test_offset_is_converted_to_utc(self):
        """Test timezone offsets."""
        entry = normalize({"published": "2024-01-01T10:00:00+02:00"}, "S")
        assert entry.published_at == utc(2024, 1, 1, 8, 0, 0)

    def test_structured_beats_raw(self):
        """Test that a structured timestamp wins over a raw string."""
        raw = {"isoDate": "2024-01-02T00:00:00Z", "pubDate": "Mon, 01 Jan 2024 10:00:00 GMT"}
        assert normalize(raw, "S").published_at == utc(2024, 1, 2)

    def test_invalid_structured_falls_back(self):
        """Test that an invalid structured value does not hide a valid raw one."""
        raw = {"isoDate": "garbage", "pubDate": "Mon, 01 Jan 2024 10:00:00 GMT"}
        assert normalize(raw, "S").published_at == utc(2024, 1, 1, 10)

    def test_unparseable_is_absent(self):
        """Test that garbage dates are treated as absent."""
        assert normalize({"pubDate": "not a date"}, "S").published_at is None

    def test_naive_datetime_is_utc(self):
        """Test naive datetimes."""
        entry = normalize({"isoDate": datetime(2024, 1, 1, 12)}, "S")
        assert entry.published_at == utc(2024, 1, 1, 12)
        assert entry.published_at.utcoffset() == timedelta(0)


class TestFeedparserEntries:
    """Tests with real feedparser output."""

    def test_rss_item(self):
        """Test a parsed RSS item."""
        parsed = feedparser.parse(
            """<?xml version="1.0"?>
            <rss version="2.0"><channel><title>Example</title>
            <item>
              <title>Hello &amp; welcome</title>
              <link>https://example.com/hello?utm_source=rss</link>
              <description>Short text</description>
              <pubDate>Tue, 02 Jan 2024 08:30:00 GMT</pubDate>
            </item>
            </channel></rss>"""
        )

        entry = normalize(parsed.entries[0], "Example")

        assert entry.title == "Hello & welcome"
        assert entry.link == "https://example.com/hello?utm_source=rss"
        assert entry.raw_description_html == "Short text"
        assert entry.published_at == utc(2024, 1, 2, 8, 30)
        assert entry.source_name == "Example"


class TestEntryNormalizer:
    """Tests for EntryNormalizer."""

    def test_normalize_all_preserves_order(self):
        """Test batch normalization."""
        raw = [RawEntry("A", {"link": "1"}), RawEntry("B", {"link": "2"})]

        result = EntryNormalizer().normalize_all(raw)

        assert [(e.source_name, e.link) for e in result] == [("A", "1"), ("B", "2")]


class TestParseDateString:
    """Tests for the shared date parser."""

    @pytest.mark.parametrize("value", [None, "", "   ", 12345, "yesterday-ish"])
    def test_invalid_values(self, value):
        """Test non-dates."""
        assert parse_date_string(value) is None
