"""Duplicate lookups and page creation in the Notion reader database."""

from typing import Optional

import structlog

from .models import PropertyNames, StoredRecord
from .subscriptions import NOTION_ERRORS
from ..errors import RepositoryError, WriteError
from ..filtering.interfaces import DuplicateCheckerInterface

logger = structlog.get_logger()


class ReaderStorage(DuplicateCheckerInterface):
    """Reader database access.

    Links are not unique in Notion; uniqueness holds only because every
    create is preceded by exists_by_link.
    """

    def __init__(self, client, database_id: str, names: Optional[PropertyNames] = None):
        self.client = client
        self.database_id = database_id
        self.names = names or PropertyNames()

    async def exists_by_link(self, link: str) -> bool:
        """Check if a page with exactly this Link exists. Empty links are never looked up."""
        if not link:
            return False

        try:
            response = await self.client.databases.query(
                database_id=self.database_id,
                filter={
                    "property": self.names.link,
                    "url": {"equals": link},
                },
                page_size=1,
            )
        except NOTION_ERRORS as e:
            logger.error("duplicate_check_failed", link=link, error=str(e))
            raise RepositoryError(f"Failed to query reader database for {link}: {e}") from e

        return len(response.get("results", [])) > 0

    async def create(self, record: StoredRecord) -> str:
        """Create a page for the record, return its page id."""
        try:
            page = await self.client.pages.create(
                parent={"database_id": self.database_id},
                properties=record.to_properties(self.names),
            )
        except NOTION_ERRORS as e:
            logger.error("record_create_failed", title=record.title, link=record.link, error=str(e))
            raise WriteError(f"Failed to create reader page for {record.title!r}: {e}") from e

        page_id = page.get("id", "")
        logger.debug("record_created", page_id=page_id, link=record.link)
        return page_id
