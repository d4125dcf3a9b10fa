"""
Aggregation pipeline driver.

registry -> fetch (per source, isolated) -> flatten -> normalize -> dedupe
-> rank -> render. Only a broken registry stops a run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from feed_aggregator.config import get_config
from feed_aggregator.core.deduplicator import DedupStats, Deduplicator
from feed_aggregator.core.fetcher import FeedFetcher, FetchResult, FetchStats
from feed_aggregator.core.parser import EntryNormalizer
from feed_aggregator.core.ranker import rank
from feed_aggregator.core.registry import load_sources
from feed_aggregator.logger import get_logger
from feed_aggregator.models import NormalizedEntry, Source
from feed_aggregator.render.renderer import PageRenderer, write_page

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one aggregation run."""

    entries: list[NormalizedEntry] = field(default_factory=list)
    fetch_results: list[FetchResult] = field(default_factory=list)
    fetch_stats: FetchStats = field(default_factory=FetchStats)
    dedup_stats: DedupStats = field(default_factory=DedupStats)
    output_path: Optional[Path] = None

    @property
    def count(self) -> int:
        """Number of entries in the aggregated list."""
        return len(self.entries)

    @property
    def failed_sources(self) -> list[str]:
        """URLs of sources that contributed nothing because they failed."""
        return [r.source_url for r in self.fetch_results if not r.success]


class AggregationPipeline:
    """Sequences fetching, normalization, deduplication, ranking and rendering."""

    def __init__(
        self,
        fetcher: Optional[FeedFetcher] = None,
        normalizer: Optional[EntryNormalizer] = None,
        deduplicator: Optional[Deduplicator] = None,
        renderer: Optional[PageRenderer] = None,
    ):
        """Initialize pipeline.

        Args:
            fetcher: Feed fetcher (default: httpx + feedparser)
            normalizer: Entry normalizer
            deduplicator: Entry deduplicator
            renderer: Page renderer, only needed by build()
        """
        self.fetcher = fetcher or FeedFetcher()
        self.normalizer = normalizer or EntryNormalizer()
        self.deduplicator = deduplicator or Deduplicator()
        self._renderer = renderer

    @property
    def renderer(self) -> PageRenderer:
        if self._renderer is None:
            self._renderer = PageRenderer()
        return self._renderer

    def run(self, sources: Sequence[Source]) -> PipelineResult:
        """Aggregate the given sources into one ordered entry list.

        Args:
            sources: Sources in registry order

        Returns:
            PipelineResult; per-source failures are recorded, never raised
        """
        raw_entries = self.fetcher.fetch_all(sources)
        fetch_results = self.fetcher.results

        normalized = self.normalizer.normalize_all(raw_entries)
        unique = self.deduplicator.dedupe(normalized)
        ranked = rank(unique)

        logger.debug(
            f"Pipeline: {len(raw_entries)} fetched, {len(normalized)} normalized, "
            f"{len(unique)} unique, {len(ranked)} ranked"
        )

        return PipelineResult(
            entries=ranked,
            fetch_results=fetch_results,
            fetch_stats=self.fetcher.stats,
            dedup_stats=self.deduplicator.stats,
        )

    def build(
        self,
        sources_path: Union[str, Path, None] = None,
        output_path: Union[str, Path, None] = None,
    ) -> PipelineResult:
        """Load the registry, aggregate, and write the static page.

        Args:
            sources_path: Registry file (defaults to the configured one)
            output_path: Page path (defaults to the configured output path)

        Returns:
            PipelineResult with ``output_path`` set

        Raises:
            ConfigError: If the registry is missing or malformed; nothing is fetched or written
        """
        config = get_config()
        sources = load_sources(sources_path)

        result = self.run(sources)

        html = self.renderer.render(result.entries, sources)
        result.output_path = write_page(html, output_path or config.output.path)

        stats = result.fetch_stats
        logger.info(
            f"Aggregated {result.count} entries from "
            f"{stats.successful_fetches}/{stats.total_feeds} sources "
            f"({stats.success_rate:.0%} success, avg {stats.avg_time_seconds:.2f}s per feed)"
        )
        if stats.errors_by_type:
            logger.warning(f"Fetch errors by type: {stats.errors_by_type}")
        return result


def create_pipeline(fetcher: Optional[FeedFetcher] = None) -> AggregationPipeline:
    """Create a configured AggregationPipeline instance.

    Args:
        fetcher: Optional fetcher override

    Returns:
        Configured AggregationPipeline
    """
    return AggregationPipeline(fetcher=fetcher)
