#!/usr/bin/env python3
"""Run one feed sync. Intended for cron / scheduled CI jobs."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from feedsync.cli import main


if __name__ == "__main__":
    sys.exit(main())
