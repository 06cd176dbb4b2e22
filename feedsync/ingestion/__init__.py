"""Feed ingestion - fetching and parsing RSS feeds."""

from .interfaces import Subscription, FeedItem, Feed, FetcherInterface
from .fetcher import FeedFetcher

__all__ = ["Subscription", "FeedItem", "Feed", "FetcherInterface", "FeedFetcher"]
