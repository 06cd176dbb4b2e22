"""Sync RSS feed subscriptions from Notion into a Notion reader database."""

__version__ = "0.1.0"
