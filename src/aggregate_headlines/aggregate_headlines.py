"""Fetch, parse, dedupe and rank headlines from all active sources."""

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from aggregate_headlines.config import Config, get_config
from aggregate_headlines.dedupe_articles.dedupe import dedupe_articles
from aggregate_headlines.events import LoadListener
from aggregate_headlines.fetch_feeds.fetch_feed import (
    FetchError,
    Transport,
    fetch_feed,
    is_async_transport,
    make_transport,
)
from aggregate_headlines.models import Article, LoadResult, LoadState, Source
from aggregate_headlines.parse_feeds.parse_feed import parse_feed
from aggregate_headlines.rank_articles.rank import (
    ALL_CATEGORIES,
    count_by_category,
    filter_by_category,
    select_articles,
)
from aggregate_headlines.sources import resolve_active_sources
from common.datetime import utc_now

logger = logging.getLogger(__name__)

NO_SOURCES_MESSAGE = "No sources configured"
NO_ARTICLES_MESSAGE = "No articles found"


class HeadlineAggregator:
    """Runs load cycles and holds the most recent ranked article list.

    Only one cycle runs at a time; a load requested while another is in
    flight is ignored and returns None.
    """

    def __init__(
        self,
        config: Config | None = None,
        transport: Transport | None = None,
        listener: LoadListener | None = None,
    ) -> None:
        self.config = config or get_config()
        self.transport = transport or make_transport(self.config.fetch.client, self.config.fetch.user_agent)
        self.listener = listener or LoadListener()
        self.state = LoadState.IDLE
        self.articles: list[Article] = []
        self.last_updated: Optional[datetime] = None

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    def active_sources(self) -> list[Source]:
        return resolve_active_sources(self.config.preferences, self.config.limits)

    def articles_for(self, category: str = ALL_CATEGORIES) -> list[Article]:
        return filter_by_category(self.articles, category)

    def category_counts(self) -> dict[str, int]:
        return count_by_category(self.articles)

    async def load(self, sources: list[Source] | None = None) -> LoadResult | None:
        """Run one load cycle over sources (default: the configured active sources)."""
        if self.is_loading:
            logger.info("Load already in progress, ignoring request")
            return None

        self.state = LoadState.LOADING
        try:
            return await self._run_cycle(sources)
        finally:
            self.state = LoadState.IDLE

    async def _run_cycle(self, sources: list[Source] | None) -> LoadResult:
        self.listener.progress(0.0)
        self.listener.status("Initializing news sources...")

        if sources is None:
            sources = self.active_sources()
        total = len(sources)

        if total == 0:
            logger.info("No active sources configured")
            return self._finish([], total_sources=0, loaded_sources=0, message=NO_SOURCES_MESSAGE)

        logger.info("Loading news from %d sources", total)
        stagger = self.config.fetch.stagger_seconds
        loaded_sources = 0

        # One worker per source, so a blocking fetch never waits for a free thread.
        executor = None
        if not is_async_transport(self.transport):
            executor = ThreadPoolExecutor(max_workers=total, thread_name_prefix="feed-fetch")

        async def load_and_report(index: int, source: Source) -> list[Article]:
            nonlocal loaded_sources
            articles = await self.load_source(source, prior_delay=index * stagger, executor=executor)
            loaded_sources += 1
            self.listener.progress(loaded_sources / total)
            return articles

        try:
            # gather keeps dispatch order, so each source's batch stays contiguous.
            batches = await asyncio.gather(
                *(load_and_report(index, source) for index, source in enumerate(sources))
            )
        finally:
            if executor is not None:
                # Timed-out requests finish on their own transport timeout.
                executor.shutdown(wait=False)
        collected = [article for batch in batches for article in batch]

        unique = dedupe_articles(collected)
        ranked = select_articles(unique, self.config.limits.max_articles)
        logger.info("Processed %d unique articles from %d total", len(ranked), len(collected))

        if ranked:
            message = f"Loaded {len(ranked)} articles from {total} sources"
        else:
            message = NO_ARTICLES_MESSAGE
        return self._finish(ranked, total_sources=total, loaded_sources=loaded_sources, message=message)

    async def load_source(
        self,
        source: Source,
        prior_delay: float = 0.0,
        executor: Executor | None = None,
    ) -> list[Article]:
        """Fetch and parse one source. Any failure yields an empty list."""
        self.listener.status(f"Loading {source.name}...")
        limits = self.config.limits
        try:
            raw = await fetch_feed(
                source,
                prior_delay=prior_delay,
                transport=self.transport,
                timeout=self.config.fetch.timeout_seconds,
                executor=executor,
            )
            articles = parse_feed(
                raw,
                source,
                max_items=limits.max_items_per_feed,
                max_articles=limits.max_articles_per_source,
            )
        except FetchError as e:
            logger.warning("Failed to load %s (%s): %s", source.id, e.kind, e)
            return []
        except Exception as e:
            logger.error("Failed to load %s: %s", source.id, e)
            return []

        logger.info("Loaded %d articles from %s", len(articles), source.name)
        return articles

    def _finish(
        self,
        articles: list[Article],
        total_sources: int,
        loaded_sources: int,
        message: str,
    ) -> LoadResult:
        completed_at = utc_now()
        self.articles = articles
        self.last_updated = completed_at

        self.listener.status(message)
        if articles:
            self.listener.completed(articles, completed_at)
        else:
            self.listener.completed_empty()

        return LoadResult(
            articles=articles,
            total_sources=total_sources,
            loaded_sources=loaded_sources,
            completed_at=completed_at,
            message=message,
        )


def aggregate_headlines(
    config: Config | None = None,
    sources: list[Source] | None = None,
    transport: Transport | None = None,
    listener: LoadListener | None = None,
) -> LoadResult:
    """Run a single load cycle to completion from synchronous code."""
    aggregator = HeadlineAggregator(config=config, transport=transport, listener=listener)
    return asyncio.run(aggregator.load(sources))
