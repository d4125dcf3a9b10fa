"""
RSS/Atom feed fetcher with per-source failure isolation.

Every source gets exactly one attempt. A failing source is logged and
contributes no entries; it never stops the other sources.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

import feedparser
import httpx

from feed_aggregator.config import get_config
from feed_aggregator.logger import get_logger
from feed_aggregator.models import RawEntry, Source

logger = get_logger(__name__)

# (url, timeout_seconds) -> raw entries in feed order
ParseFeed = Callable[[str, float], Sequence[Mapping[str, Any]]]


class FetchError(Exception):
    """Raised when a feed was downloaded but could not be used."""


@dataclass
class FetchResult:
    """Result of fetching one source."""

    success: bool
    source_name: str
    source_url: str
    entries: list = field(default_factory=list)
    entries_count: int = 0
    error: Optional[str] = None
    fetch_time_seconds: float = 0.0
    http_status: Optional[int] = None

    def __post_init__(self):
        """Validate fetch result."""
        if self.success and self.error:
            raise ValueError("Successful fetch cannot have an error")
        if not self.success and not self.error:
            self.error = "Unknown error"
        if not self.success and self.entries:
            raise ValueError("Failed fetch cannot carry entries")


@dataclass
class FetchStats:
    """Statistics for one aggregation run."""

    total_feeds: int = 0
    successful_fetches: int = 0
    failed_fetches: int = 0
    total_entries: int = 0
    total_time_seconds: float = 0.0
    errors_by_type: dict = field(default_factory=dict)

    def add_result(self, result: FetchResult) -> None:
        """Add a fetch result to statistics.

        Args:
            result: FetchResult to add
        """
        self.total_feeds += 1
        self.total_time_seconds += result.fetch_time_seconds

        if result.success:
            self.successful_fetches += 1
            self.total_entries += result.entries_count
        else:
            self.failed_fetches += 1
            error_type = result.error.split(":")[0] if result.error else "unknown"
            self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total_feeds == 0:
            return 0.0
        return self.successful_fetches / self.total_feeds

    @property
    def avg_time_seconds(self) -> float:
        """Calculate average fetch time."""
        if self.total_feeds == 0:
            return 0.0
        return self.total_time_seconds / self.total_feeds


class FeedFetcher:
    """Fetches every source once, isolating failures per source."""

    def __init__(
        self,
        parse_feed: Optional[ParseFeed] = None,
        timeout_seconds: Optional[float] = None,
        max_workers: Optional[int] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize feed fetcher.

        Args:
            parse_feed: Feed-parsing callable; defaults to httpx + feedparser
            timeout_seconds: Per-source timeout in seconds
            max_workers: Maximum number of concurrent fetches
            user_agent: User-Agent header for HTTP requests
        """
        config = get_config()

        self.parse_feed = parse_feed or self._parse_url
        self.timeout_seconds = timeout_seconds or config.fetcher.timeout_seconds
        self.max_workers = max_workers or config.fetcher.max_workers
        self.user_agent = user_agent or config.fetcher.user_agent

        # HTTP client configuration
        self.follow_redirects = config.fetcher.follow_redirects
        self.max_redirects = config.fetcher.max_redirects

        self.stats = FetchStats()
        self.results: list[FetchResult] = []

    def fetch_source(self, source: Source) -> FetchResult:
        """Fetch a single source.

        Never raises: any failure is returned as an unsuccessful FetchResult.

        Args:
            source: Source to fetch

        Returns:
            FetchResult with at most ``source.max_items`` tagged entries, or an error
        """
        start_time = time.time()
        http_status = None

        logger.debug(f"Fetching feed: {source.name} ({source.url})")

        try:
            raw_entries = self.parse_feed(source.url, self.timeout_seconds)
            entries = [
                RawEntry(source_name=source.name, data=raw)
                for raw in list(raw_entries or [])[: source.max_items]
            ]

            fetch_time = time.time() - start_time
            logger.info(
                f"Fetched {len(entries)} entries from {source.name} in {fetch_time:.2f}s"
            )
            return FetchResult(
                success=True,
                source_name=source.name,
                source_url=source.url,
                entries=entries,
                entries_count=len(entries),
                fetch_time_seconds=fetch_time,
            )

        except httpx.TimeoutException as e:
            error = f"Timeout: {e}"
        except httpx.HTTPStatusError as e:
            http_status = e.response.status_code
            error = f"HTTP {http_status}: {e}"
        except httpx.RequestError as e:
            error = f"Request error: {e}"
        except FetchError as e:
            error = str(e)
        except Exception as e:
            error = f"Unexpected error: {type(e).__name__}: {e}"

        logger.error(f"Failed: {source.url} {error}")
        return FetchResult(
            success=False,
            source_name=source.name,
            source_url=source.url,
            error=error,
            fetch_time_seconds=time.time() - start_time,
            http_status=http_status,
        )

    def fetch_multiple(self, sources: Sequence[Source]) -> list[FetchResult]:
        """Fetch all sources concurrently.

        Results are joined after every fetch has settled and are returned
        in the order of ``sources``. ``stats`` and ``results`` describe this
        call only.

        Args:
            sources: Sources to fetch

        Returns:
            List of FetchResult instances, one per source
        """
        stats = FetchStats()
        results: list[FetchResult] = []

        if sources:
            workers = min(self.max_workers, len(sources))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="feed-fetch") as pool:
                futures = [pool.submit(self.fetch_source, source) for source in sources]

            for source, future in zip(sources, futures):
                try:
                    result = future.result()
                except Exception as e:
                    logger.exception(f"Unexpected error fetching {source.url}: {e}")
                    result = FetchResult(
                        success=False,
                        source_name=source.name,
                        source_url=source.url,
                        error=f"Unexpected error: {type(e).__name__}: {e}",
                    )
                stats.add_result(result)
                results.append(result)

        self.stats = stats
        self.results = results
        return results

    def fetch_all(self, sources: Sequence[Source]) -> list[RawEntry]:
        """Fetch all sources and flatten their entries.

        Args:
            sources: Sources to fetch

        Returns:
            Tagged raw entries, grouped by source in registry order
        """
        entries: list[RawEntry] = []
        for result in self.fetch_multiple(sources):
            entries.extend(result.entries)

        logger.debug(
            f"Fetched {len(entries)} entries from "
            f"{self.stats.successful_fetches}/{self.stats.total_feeds} sources"
        )
        return entries

    def _parse_url(self, url: str, timeout_seconds: float) -> list:
        """Download and parse a feed.

        Args:
            url: Feed URL
            timeout_seconds: Request timeout

        Returns:
            feedparser entries in feed order

        Raises:
            httpx.TimeoutException: On timeout
            httpx.HTTPStatusError: On HTTP error
            httpx.RequestError: On network error
            FetchError: If the document is not a usable feed
        """
        response = self._fetch_http(url, timeout_seconds)

        parsed = feedparser.parse(
            response.content,
            response_headers={"content-type": response.headers.get("content-type", "")},
        )
        entries = parsed.get("entries", [])

        if parsed.get("bozo") and not entries:
            reason = parsed.get("bozo_exception") or "not a feed"
            raise FetchError(f"Malformed feed: {reason}")

        return entries

    def _fetch_http(self, url: str, timeout_seconds: float) -> httpx.Response:
        """Fetch URL with HTTP client.

        Args:
            url: URL to fetch
            timeout_seconds: Request timeout

        Returns:
            httpx Response
        """
        headers = {"User-Agent": self.user_agent}

        with httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=self.follow_redirects,
            max_redirects=self.max_redirects,
        ) as client:
            response = client.get(url, headers=headers)
            response.raise_for_status()
            return response


def create_fetcher(parse_feed: Optional[ParseFeed] = None) -> FeedFetcher:
    """Create a configured FeedFetcher instance.

    Args:
        parse_feed: Optional feed-parsing callable

    Returns:
        Configured FeedFetcher instance
    """
    return FeedFetcher(parse_feed=parse_feed)
