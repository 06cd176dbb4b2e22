"""Error types raised across the sync job."""


class FeedSyncError(Exception):
    """Base class for all feedsync errors."""


class ConfigurationError(FeedSyncError):
    """Required settings are missing. Fatal."""


class RepositoryError(FeedSyncError):
    """A Notion database query failed."""


class FetchError(FeedSyncError):
    """A feed could not be retrieved or parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch feed {url}: {reason}")


class WriteError(FeedSyncError):
    """A reader page could not be created."""
