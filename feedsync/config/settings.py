"""Application settings with environment variable support."""

from typing import List, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # NOTION_TOKEN, FEEDER_DB_ID, READER_DB_ID, etc.
    )

    # Notion
    notion_token: Optional[str] = None
    feeder_db_id: Optional[str] = None
    reader_db_id: Optional[str] = None
    notion_timeout_seconds: int = 30

    # Feeder database properties
    feeder_url_property: str = "URL"
    feeder_keyword_property: str = "keyword"
    feeder_enable_property: str = "Enable"

    # Reader database properties
    reader_title_property: str = "Title"
    reader_link_property: str = "Link"
    reader_published_property: str = "PublishedAt"
    reader_description_property: str = "Description"
    reader_media_property: str = "OGP"

    # Ingestion
    fetch_timeout_seconds: int = 30
    user_agent: str = "feedsync/0.1 (+https://github.com/feedsync/feedsync)"

    # Filtering
    recency_days: int = 7

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def missing(self) -> List[str]:
        """Names of the required environment variables that are unset."""
        required = {
            "NOTION_TOKEN": self.notion_token,
            "FEEDER_DB_ID": self.feeder_db_id,
            "READER_DB_ID": self.reader_db_id,
        }
        return [name for name, value in required.items() if not value]

    def require(self) -> "Settings":
        """Raise ConfigurationError unless token and both database ids are set."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set them in the environment or in a .env file."
            )
        return self


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, applying explicit overrides."""
    try:
        return Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
