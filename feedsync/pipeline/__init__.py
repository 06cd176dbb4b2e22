"""Pipeline orchestration - one sequential sync run."""

from .sync import FeedSyncPipeline, SyncStats, run_sync

__all__ = ["FeedSyncPipeline", "SyncStats", "run_sync"]
