"""Core aggregation pipeline.

Stages, in order:
    - registry: load the declared feed sources
    - fetcher: fetch every source once, isolating failures
    - parser: normalize raw entries
    - deduplicator: keep the first entry per canonical link
    - ranker: order newest first, stable among ties
    - pipeline: run the stages and hand the result to the renderer
"""

from feed_aggregator.core.deduplicator import DedupStats, Deduplicator, canonical_key, dedupe
from feed_aggregator.core.fetcher import FeedFetcher, FetchError, FetchResult, FetchStats, create_fetcher
from feed_aggregator.core.parser import EntryNormalizer, normalize
from feed_aggregator.core.pipeline import AggregationPipeline, PipelineResult, create_pipeline
from feed_aggregator.core.ranker import EPOCH, effective_timestamp, rank
from feed_aggregator.core.registry import ConfigError, load_sources

__all__ = [
    # Registry
    "load_sources",
    "ConfigError",
    # Fetching
    "FeedFetcher",
    "FetchResult",
    "FetchStats",
    "FetchError",
    "create_fetcher",
    # Normalization
    "EntryNormalizer",
    "normalize",
    # Deduplication
    "Deduplicator",
    "DedupStats",
    "canonical_key",
    "dedupe",
    # Ranking
    "rank",
    "effective_timestamp",
    "EPOCH",
    # Driver
    "AggregationPipeline",
    "PipelineResult",
    "create_pipeline",
]
