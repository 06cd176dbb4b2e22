"""Reads enabled feed subscriptions from the Notion feeder database."""

from typing import List, Optional

import httpx
from notion_client.errors import HTTPResponseError, RequestTimeoutError
import structlog

from ..errors import RepositoryError
from ..ingestion.interfaces import Subscription

logger = structlog.get_logger()

NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


class SubscriptionRepository:
    """Feeder database access."""

    def __init__(
        self,
        client,
        database_id: str,
        url_property: str = "URL",
        keyword_property: str = "keyword",
        enable_property: str = "Enable",
    ):
        self.client = client
        self.database_id = database_id
        self.url_property = url_property
        self.keyword_property = keyword_property
        self.enable_property = enable_property

    async def list_active_subscriptions(self) -> List[Subscription]:
        """Return subscriptions whose Enable checkbox is set and which have a URL."""
        pages = await self._query_enabled_pages()

        subscriptions = []
        for page in pages:
            subscription = self._page_to_subscription(page)
            if subscription:
                subscriptions.append(subscription)

        logger.info(
            "subscriptions_loaded",
            pages=len(pages),
            valid=len(subscriptions),
        )
        return subscriptions

    async def _query_enabled_pages(self) -> List[dict]:
        """Query all enabled pages, following pagination."""
        pages = []
        cursor = None
        while True:
            kwargs = {
                "database_id": self.database_id,
                "filter": {
                    "property": self.enable_property,
                    "checkbox": {"equals": True},
                },
            }
            if cursor:
                kwargs["start_cursor"] = cursor

            try:
                response = await self.client.databases.query(**kwargs)
            except NOTION_ERRORS as e:
                logger.error("subscriptions_query_failed", database_id=self.database_id, error=str(e))
                raise RepositoryError(f"Failed to query feeder database: {e}") from e

            pages.extend(response.get("results", []))
            if not response.get("has_more") or not response.get("next_cursor"):
                return pages
            cursor = response["next_cursor"]

    def _page_to_subscription(self, page: dict) -> Optional[Subscription]:
        """Convert a feeder page into a Subscription, or None if it has no URL."""
        properties = page.get("properties", {})

        feed_url = self._read_url(properties.get(self.url_property))
        if not feed_url:
            logger.debug("subscription_without_url", page_id=page.get("id"))
            return None

        multi_select = (properties.get(self.keyword_property) or {}).get("multi_select") or []
        keywords = [option["name"] for option in multi_select if option.get("name")]

        return Subscription(feed_url=feed_url, keywords=keywords)

    @staticmethod
    def _read_url(prop: Optional[dict]) -> Optional[str]:
        """Read a URL-typed property, or a rich text one from older feeder layouts."""
        if not prop:
            return None
        if prop.get("type") == "rich_text" or ("rich_text" in prop and "url" not in prop):
            fragments = prop.get("rich_text") or []
            text = "".join(f.get("plain_text", "") for f in fragments).strip()
            return text or None
        url = prop.get("url")
        return url.strip() if url and url.strip() else None
