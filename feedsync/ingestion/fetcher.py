"""RSS/Atom feed fetcher built on aiohttp and feedparser."""

import asyncio
import time
from datetime import datetime, timezone
from typing import Optional

import aiohttp
import feedparser
import structlog

from .interfaces import Feed, FeedItem, FetcherInterface
from ..errors import FetchError

logger = structlog.get_logger()


class FeedFetcher(FetcherInterface):
    """Fetches one feed at a time over a shared aiohttp session."""

    def __init__(self, timeout_seconds: int = 30, user_agent: str = "feedsync/0.1"):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            headers={"User-Agent": self.user_agent},
        )
        return self

    async def __aexit__(self, *args):
        if self.session:
            await self.session.close()

    async def fetch_feed(self, url: str) -> Feed:
        """Download and parse a feed, raising FetchError on any failure."""
        start_time = time.time()

        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                content = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("feed_fetch_failed", url=url, error=str(e) or type(e).__name__)
            raise FetchError(url, str(e) or type(e).__name__) from e

        feed = self.parse_document(url, content)

        logger.info(
            "feed_fetched",
            url=url,
            title=feed.title,
            items=len(feed.items),
            time_ms=int((time.time() - start_time) * 1000),
        )
        return feed

    def parse_document(self, url: str, content) -> Feed:
        """Parse raw feed bytes or text into a Feed."""
        parsed = feedparser.parse(content)

        # feedparser sets bozo for recoverable quirks too; only reject documents
        # that yielded nothing usable.
        if parsed.get("bozo") and not parsed.entries and not parsed.feed.get("title"):
            reason = str(parsed.get("bozo_exception") or "malformed feed")
            logger.error("feed_parse_failed", url=url, error=reason)
            raise FetchError(url, reason)

        return Feed(
            url=url,
            title=parsed.feed.get("title", ""),
            items=[self._parse_entry(entry) for entry in parsed.entries],
        )

    def _parse_entry(self, entry) -> FeedItem:
        """Parse a feedparser entry into a FeedItem."""
        content = ""
        if entry.get("content"):
            content = entry.content[0].get("value", "")

        description = (
            entry.get("summary")
            or content
            or entry.get("description")
            or ""
        )

        enclosure_url = None
        enclosure_type = None
        enclosures = entry.get("enclosures") or []
        if enclosures:
            enclosure_url = enclosures[0].get("href") or enclosures[0].get("url")
            enclosure_type = enclosures[0].get("type")

        # Parse date
        published_at = None
        for attr in ["published_parsed", "updated_parsed"]:
            parsed = entry.get(attr)
            if parsed:
                try:
                    published_at = datetime(*parsed[:6], tzinfo=timezone.utc)
                    break
                except (TypeError, ValueError):
                    pass

        return FeedItem(
            title=entry.get("title") or "No Title",
            link=entry.get("link") or "",
            raw_published_at=entry.get("published") or entry.get("updated"),
            published_at=published_at,
            description=description,
            enclosure_url=enclosure_url,
            enclosure_type=enclosure_type,
        )
