"""Configuration and logging setup."""

from .settings import Settings, load_settings
from .logging import configure_logging

__all__ = ["Settings", "load_settings", "configure_logging"]
