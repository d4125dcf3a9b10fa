"""
Entry records flowing through the aggregation pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

UNTITLED = "(untitled)"
PLACEHOLDER_LINK = "#"


@dataclass(frozen=True)
class RawEntry:
    """A feed entry as produced by the feed parser, tagged with its source."""

    source_name: str
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizedEntry:
    """Uniform entry record handed to deduplication, ranking and rendering."""

    title: str = UNTITLED
    link: str = PLACEHOLDER_LINK
    raw_description_html: str = ""
    published_at: Optional[datetime] = None
    source_name: str = ""

    def __repr__(self) -> str:
        return f"<NormalizedEntry(source='{self.source_name}', link='{self.link}')>"
