"""Command-line entry point for a single sync run."""

import argparse
import asyncio
import sys
from typing import List, Optional

import structlog

from .config.logging import configure_logging
from .config.settings import load_settings
from .errors import ConfigurationError, RepositoryError
from .pipeline.sync import run_sync

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_SYNC_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedsync",
        description="Copy recent RSS items from Notion feed subscriptions into a Notion reader database",
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit JSON log lines")
    parser.add_argument("--recency-days", type=int, help="Only store items newer than this many days")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            log_level=args.log_level,
            log_json=args.json_logs,
            recency_days=args.recency_days,
        )
        configure_logging(settings.log_level, settings.log_json)
        settings.require()
    except ConfigurationError as e:
        print(f"feedsync: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        stats = asyncio.run(run_sync(settings))
    except RepositoryError as e:
        logger.error("sync_failed", error=str(e))
        return EXIT_SYNC_FAILED

    print(f"Done! {stats.stored} stored from {stats.feeds_synced}/{stats.subscriptions} feeds")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
