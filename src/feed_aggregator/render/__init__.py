"""Rendering collaborators: sanitizer, relative time, page template."""

from feed_aggregator.render.humanize import humanize
from feed_aggregator.render.renderer import PageRenderer, write_page
from feed_aggregator.render.sanitizer import sanitize

__all__ = [
    "PageRenderer",
    "write_page",
    "sanitize",
    "humanize",
]
