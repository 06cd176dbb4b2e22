"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))


NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def rfc822(dt: datetime) -> str:
    """Format a datetime the way RSS pubDate does."""
    return format_datetime(dt)


@pytest.fixture
def now():
    """Fixed reference time for recency checks."""
    return NOW


@pytest.fixture
def sample_item():
    """Provide a recent FeedItem with an image in its description."""
    from feedsync.ingestion.interfaces import FeedItem
    return FeedItem(
        title="Learning RUST basics",
        link="https://blog.example.com/posts/rust-basics",
        raw_published_at=rfc822(NOW - timedelta(days=2)),
        description='<p>Intro</p><img src="https://cdn.example.com/rust.png">',
        enclosure_url="https://cdn.example.com/cover.jpg",
        enclosure_type="image/jpeg",
    )


@pytest.fixture
def sample_rss():
    """Provide an RSS 2.0 document with three items."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Blog</title>
    <link>https://blog.example.com/</link>
    <description>Posts</description>
    <item>
      <title>Hello</title>
      <link>https://blog.example.com/hello</link>
      <pubDate>{rfc822(NOW - timedelta(days=2))}</pubDate>
      <description>&lt;img src='http://img1'&gt; text &lt;img src="http://img2"&gt;</description>
      <enclosure url="https://blog.example.com/cover.png" length="1024" type="image/png"/>
    </item>
    <item>
      <link>https://blog.example.com/untitled</link>
      <pubDate>{rfc822(NOW - timedelta(days=10))}</pubDate>
    </item>
    <item>
      <title>No link here</title>
      <description>plain text</description>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def notion_client():
    """Provide a Notion client double with async endpoints."""
    client = MagicMock()
    client.databases.query = AsyncMock(return_value={"results": [], "has_more": False, "next_cursor": None})
    client.pages.create = AsyncMock(return_value={"id": "page-1"})
    return client


@pytest.fixture
def feeder_page():
    """Provide a builder for feeder database pages as the Notion API returns them."""
    return _feeder_page


def _feeder_page(url=None, keywords=(), page_id="p", rich_text_url=None):
    properties = {
        "Enable": {"type": "checkbox", "checkbox": True},
        "keyword": {"type": "multi_select", "multi_select": [{"name": k} for k in keywords]},
    }
    if rich_text_url is not None:
        properties["URL"] = {
            "type": "rich_text",
            "rich_text": [{"type": "text", "plain_text": rich_text_url}],
        }
    else:
        properties["URL"] = {"type": "url", "url": url}
    return {"object": "page", "id": page_id, "properties": properties}
