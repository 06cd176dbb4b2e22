"""Interface definitions for feed ingestion."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Subscription:
    """A feed URL plus optional title keywords, read from the feeder database."""
    feed_url: str
    keywords: List[str] = field(default_factory=list)


@dataclass
class FeedItem:
    """One entry of a fetched feed.

    published_at is feedparser's own parse of the date (UTC); it is None when
    feedparser could not read the raw value.
    """
    title: str = "No Title"
    link: str = ""
    raw_published_at: Optional[str] = None
    description: str = ""
    enclosure_url: Optional[str] = None
    enclosure_type: Optional[str] = None
    published_at: Optional[datetime] = None


@dataclass
class Feed:
    """A parsed feed document."""
    url: str
    title: str = ""
    items: List[FeedItem] = field(default_factory=list)


class FetcherInterface:
    """Interface for feed fetching."""

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and parse a single feed. Raises FetchError on failure."""
        raise NotImplementedError
