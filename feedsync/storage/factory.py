"""Factory functions to create Notion-backed storage instances."""

from notion_client import AsyncClient
import structlog

from ..config.settings import Settings

logger = structlog.get_logger()

# Database query/create endpoints used here are stable under this version.
NOTION_API_VERSION = "2022-06-28"


def create_notion_client(settings: Settings) -> AsyncClient:
    """Build an async Notion client from settings. Call settings.require() first."""
    logger.debug("creating_notion_client", timeout_seconds=settings.notion_timeout_seconds)
    return AsyncClient(
        auth=settings.notion_token,
        timeout_ms=settings.notion_timeout_seconds * 1000,
        notion_version=NOTION_API_VERSION,
    )


def create_subscription_repository(client, settings: Settings):
    """Subscription repository over the feeder database."""
    from .subscriptions import SubscriptionRepository
    return SubscriptionRepository(
        client,
        settings.feeder_db_id,
        url_property=settings.feeder_url_property,
        keyword_property=settings.feeder_keyword_property,
        enable_property=settings.feeder_enable_property,
    )


def create_reader_storage(client, settings: Settings):
    """Reader storage over the destination database."""
    from .models import PropertyNames
    from .reader import ReaderStorage
    return ReaderStorage(
        client,
        settings.reader_db_id,
        PropertyNames(
            title=settings.reader_title_property,
            link=settings.reader_link_property,
            published_at=settings.reader_published_property,
            description=settings.reader_description_property,
            media=settings.reader_media_property,
        ),
    )
