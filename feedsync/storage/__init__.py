"""Notion database access - subscriptions and reader records."""

from .models import StoredRecord, MediaReference, PropertyNames, media_from_images
from .subscriptions import SubscriptionRepository
from .reader import ReaderStorage
from .factory import create_notion_client, create_subscription_repository, create_reader_storage

__all__ = [
    "StoredRecord", "MediaReference", "PropertyNames", "media_from_images",
    "SubscriptionRepository", "ReaderStorage", "create_notion_client",
    "create_subscription_repository", "create_reader_storage"
]
