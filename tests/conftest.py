"""Shared fixtures."""

import pytest
from loguru import logger as _logger

from feed_aggregator.models import NormalizedEntry, Source


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = _logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    _logger.remove(handler_id)


@pytest.fixture
def make_entry():
    """Factory for NormalizedEntry instances."""

    def _make(link="https://example.com/a", published_at=None, title="Entry", source_name="Test"):
        return NormalizedEntry(
            title=title,
            link=link,
            raw_description_html="",
            published_at=published_at,
            source_name=source_name,
        )

    return _make


@pytest.fixture
def make_source():
    """Factory for Source instances."""

    def _make(url="https://example.com/feed.xml", name="Test Feed", max_items=10):
        return Source(url=url, name=name, max_items=max_items)

    return _make
