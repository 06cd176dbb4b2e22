"""Feed sync pipeline orchestration."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

import structlog

from ..config.settings import Settings
from ..errors import FetchError, RepositoryError, WriteError
from ..filtering.filters import ItemFilter, html_to_text
from ..filtering.interfaces import SkipReason
from ..ingestion.fetcher import FeedFetcher
from ..ingestion.interfaces import FeedItem, FetcherInterface, Subscription
from ..storage.models import StoredRecord, media_from_images

logger = structlog.get_logger()


@dataclass
class SyncStats:
    """Counts for a single run."""
    subscriptions: int = 0
    feeds_synced: int = 0
    items_seen: int = 0
    stored: int = 0
    skipped: Dict[str, int] = field(default_factory=lambda: {r.value: 0 for r in SkipReason})
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "subscriptions": self.subscriptions,
            "feeds_synced": self.feeds_synced,
            "items_seen": self.items_seen,
            "stored": self.stored,
            "skipped": dict(self.skipped),
            "elapsed_seconds": (datetime.now(timezone.utc) - self.started_at).total_seconds(),
        }


class FeedSyncPipeline:
    """Sequential subscription -> feed -> item pipeline.

    Subscription loading errors propagate. Fetch failures skip the feed;
    duplicate-check and write failures skip the item.
    """

    def __init__(
        self,
        fetcher: FetcherInterface,
        subscriptions,
        reader,
        recency_days: int = 7,
    ):
        self.fetcher = fetcher
        self.subscriptions = subscriptions
        self.reader = reader
        self.item_filter = ItemFilter(reader, recency_days=recency_days)

    async def run(self) -> SyncStats:
        """Load subscriptions once and sync each feed in order."""
        stats = SyncStats()

        subscriptions = await self.subscriptions.list_active_subscriptions()
        stats.subscriptions = len(subscriptions)
        if not subscriptions:
            logger.info("no_subscriptions_found")
            return stats

        for subscription in subscriptions:
            await self.sync_feed(subscription, stats)

        logger.info("sync_complete", **stats.to_dict())
        return stats

    async def sync_feed(self, subscription: Subscription, stats: Optional[SyncStats] = None) -> SyncStats:
        """Fetch one feed and process its items in feed order."""
        stats = stats or SyncStats()
        log = logger.bind(feed_url=subscription.feed_url)
        log.info("feed_sync_started", keywords=subscription.keywords)

        try:
            feed = await self.fetcher.fetch_feed(subscription.feed_url)
        except FetchError as e:
            log.warning("feed_skipped", error=e.reason)
            return stats

        # One threshold for the whole feed, taken after the fetch completes
        now = datetime.now(timezone.utc)
        total = len(feed.items)

        for index, item in enumerate(feed.items, start=1):
            stats.items_seen += 1
            await self.process_item(
                item,
                subscription.keywords,
                now,
                stats,
                position=f"{index}/{total}",
            )

        stats.feeds_synced += 1
        log.info("feed_sync_finished", title=feed.title, items=total)
        return stats

    async def process_item(
        self,
        item: FeedItem,
        keywords: Iterable[str],
        now: datetime,
        stats: Optional[SyncStats] = None,
        position: Optional[str] = None,
    ) -> bool:
        """Filter and store a single item. Return True if a page was created."""
        stats = stats or SyncStats()
        log = logger.bind(title=item.title, position=position)

        try:
            result = await self.item_filter.evaluate(item, keywords, now)
        except RepositoryError as e:
            log.error("item_skipped_duplicate_check_failed", link=item.link, error=str(e))
            return False

        if not result.accepted:
            stats.skipped[result.reason.value] += 1
            log.info("item_skipped", reason=result.reason.value)
            return False

        record = StoredRecord(
            title=item.title,
            link=item.link,
            published_at=result.published_at,
            description=html_to_text(item.description),
            media=media_from_images(result.images),
        )

        try:
            await self.reader.create(record)
        except WriteError as e:
            log.error("item_write_failed", link=item.link, error=str(e))
            return False

        stats.stored += 1
        log.info("item_stored", link=item.link, images=len(record.media))
        return True


async def run_sync(settings: Settings) -> SyncStats:
    """Wire Notion and feed collaborators from settings and run one sync."""
    from ..storage.factory import (
        create_notion_client, create_reader_storage, create_subscription_repository
    )

    settings.require()
    client = create_notion_client(settings)

    try:
        async with FeedFetcher(
            timeout_seconds=settings.fetch_timeout_seconds,
            user_agent=settings.user_agent,
        ) as fetcher:
            pipeline = FeedSyncPipeline(
                fetcher=fetcher,
                subscriptions=create_subscription_repository(client, settings),
                reader=create_reader_storage(client, settings),
                recency_days=settings.recency_days,
            )
            return await pipeline.run()
    finally:
        await client.aclose()
