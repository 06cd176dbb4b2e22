"""Recency, keyword and duplicate gates plus image extraction."""

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup
from dateutil import parser as dateparser
import structlog

from .interfaces import (
    DuplicateCheckerInterface, ExtractedImage, FilterResult,
    ImageOrigin, SkipReason
)
from ..ingestion.interfaces import FeedItem

logger = structlog.get_logger()

# Matches the src attribute of <img> tags only. Not a general HTML parser:
# unquoted values and srcset are ignored.
IMG_SRC_PATTERN = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)

DEFAULT_RECENCY_DAYS = 7

# RFC 822 zone names, which dateutil does not resolve on its own.
RFC822_TZINFOS = {
    "UT": 0, "UTC": 0, "GMT": 0, "Z": 0,
    "EST": -5 * 3600, "EDT": -4 * 3600,
    "CST": -6 * 3600, "CDT": -5 * 3600,
    "MST": -7 * 3600, "MDT": -6 * 3600,
    "PST": -8 * 3600, "PDT": -7 * 3600,
}


def parse_published(raw: Optional[str]) -> Optional[datetime]:
    """Parse a feed date string into an aware UTC datetime, or None."""
    if not raw or not raw.strip():
        return None
    try:
        parsed = dateparser.parse(raw, tzinfos=RFC822_TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def item_published_at(item: FeedItem) -> Optional[datetime]:
    """feedparser's parsed date when it has one, else a parse of the raw string."""
    if item.published_at is not None:
        return item.published_at.astimezone(timezone.utc)
    return parse_published(item.raw_published_at)


def is_recent(
    published_at: Optional[datetime],
    now: datetime,
    days: int = DEFAULT_RECENCY_DAYS
) -> bool:
    """True if published_at falls within the trailing window ending at now."""
    if published_at is None:
        return False
    return published_at >= now - timedelta(days=days)


def matches_keywords(title: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match of any keyword against the title."""
    keywords = list(keywords)
    if not keywords:
        return True
    lower_title = (title or "").lower()
    return any(k.lower() in lower_title for k in keywords)


def html_to_text(fragment: Optional[str]) -> str:
    """Plain text of an HTML fragment, text nodes joined by single spaces."""
    if not fragment:
        return ""
    return BeautifulSoup(fragment, "html.parser").get_text(" ", strip=True)


def extract_image_urls(description: Optional[str]) -> List[str]:
    """Return <img src> values from an HTML fragment in document order."""
    if not description:
        return []
    return IMG_SRC_PATTERN.findall(description)


def collect_images(item: FeedItem) -> List[ExtractedImage]:
    """Enclosure image first (if its type is image/*), then description images."""
    images = []
    if item.enclosure_url and (item.enclosure_type or "").startswith("image"):
        images.append(ExtractedImage(item.enclosure_url, ImageOrigin.ENCLOSURE))
    images.extend(
        ExtractedImage(url, ImageOrigin.DESCRIPTION)
        for url in extract_image_urls(item.description)
    )
    return images


class ItemFilter:
    """Decides whether a feed item becomes a reader record.

    Gates run recency -> keyword -> duplicate and stop at the first
    failure. Errors from the duplicate checker propagate to the caller.
    """

    def __init__(
        self,
        duplicate_checker: DuplicateCheckerInterface,
        recency_days: int = DEFAULT_RECENCY_DAYS
    ):
        self.duplicate_checker = duplicate_checker
        self.recency_days = recency_days

    async def evaluate(
        self,
        item: FeedItem,
        keywords: Iterable[str],
        now: Optional[datetime] = None
    ) -> FilterResult:
        """Run an item through all gates."""
        now = now or datetime.now(timezone.utc)

        published_at = item_published_at(item)
        if not is_recent(published_at, now, self.recency_days):
            return FilterResult(accepted=False, reason=SkipReason.STALE, published_at=published_at)

        if not matches_keywords(item.title, keywords):
            return FilterResult(
                accepted=False,
                reason=SkipReason.NO_KEYWORD_MATCH,
                published_at=published_at
            )

        if not item.link:
            # Never deduplicated; stored every time it passes the other gates.
            logger.warning("item_without_link", title=item.title)
        elif await self.duplicate_checker.exists_by_link(item.link):
            return FilterResult(accepted=False, reason=SkipReason.DUPLICATE, published_at=published_at)

        return FilterResult(
            accepted=True,
            published_at=published_at,
            images=collect_images(item)
        )
