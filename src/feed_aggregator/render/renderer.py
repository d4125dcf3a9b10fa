"""
Static page rendering with Jinja2.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from feed_aggregator.config import OutputConfig, get_config
from feed_aggregator.logger import get_logger
from feed_aggregator.models import PLACEHOLDER_LINK, NormalizedEntry, Source
from feed_aggregator.render.humanize import humanize
from feed_aggregator.render.sanitizer import is_safe_url, sanitize

logger = get_logger(__name__)

TEMPLATE_NAME = "index.html"


class PageRenderer:
    """Renders the aggregated entry list into a single HTML document."""

    def __init__(self, output_config: Optional[OutputConfig] = None):
        """Initialize renderer.

        Args:
            output_config: Page settings; defaults to the global configuration
        """
        self.output_config = output_config or get_config().output

        self.env = Environment(
            loader=PackageLoader("feed_aggregator", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["sanitize"] = self._sanitize_filter

    @staticmethod
    def _sanitize_filter(value: Optional[str]) -> Markup:
        """Sanitized markup, marked safe for the template."""
        return Markup(sanitize(value))

    def render(
        self,
        entries: Sequence[NormalizedEntry],
        sources: Sequence[Source],
        updated_at: Optional[datetime] = None,
    ) -> str:
        """Render the page.

        Args:
            entries: Aggregated entries, already ordered
            sources: Sources shown in the header
            updated_at: Build time; defaults to now in local time

        Returns:
            HTML document
        """
        updated_at = updated_at or datetime.now().astimezone()

        cards = [
            {
                "title": entry.title,
                "link": entry.link if is_safe_url(entry.link) else PLACEHOLDER_LINK,
                "source_name": entry.source_name,
                "published_at": entry.published_at,
                "time": humanize(entry.published_at, now=updated_at),
                "description": entry.raw_description_html,
            }
            for entry in entries
        ]

        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            page=self.output_config,
            cards=cards,
            source_names=[source.name for source in sources],
            updated_at=updated_at.strftime(self.output_config.updated_format).strip(),
        )


def write_page(html: str, path: Union[str, Path]) -> Path:
    """Write the rendered page, creating parent directories.

    Args:
        html: Rendered document
        path: Output file path

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    logger.debug(f"Wrote {len(html)} characters to {path}")
    return path
