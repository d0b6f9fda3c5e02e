#!/usr/bin/env python3
"""
Rebuild bb_vod_source / bb_vod_episode from legacy bb_vod play data.

Truncates both normalized tables and repopulates them from
vod_play_from / vod_play_url. Do not run two syncs at once and do not
write to bb_vod while a sync is running. A failed run leaves the tables
incomplete: run it again from the start.

Usage:
    python scripts/sync_episodes.py
    python scripts/sync_episodes.py --batch-size 500
    python scripts/sync_episodes.py --pagination keyset --skip-failed-records
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from vodcms.config import EpisodeSyncConfig, get_settings
from vodcms.exceptions import EpisodeSyncError
from vodcms.services.episodes import SyncProgress, run_episode_sync

LOGGER = logging.getLogger("sync_episodes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Full resync of normalized VOD episodes")
    parser.add_argument("--batch-size", type=int, help="Videos per page (default from settings)")
    parser.add_argument(
        "--pagination",
        choices=("offset", "keyset"),
        help="Page through bb_vod by OFFSET or by last seen vod_id",
    )
    parser.add_argument(
        "--skip-failed-records",
        action="store_true",
        default=None,
        help="Log and skip videos whose rows fail to write instead of aborting",
    )
    return parser


def print_progress(progress: SyncProgress) -> None:
    print(
        f"Progress: {progress.processed_records}/{progress.total_records} "
        f"({progress.percentage:.1f}%)",
        flush=True,
    )


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = EpisodeSyncConfig.from_settings(
            settings,
            batch_size=args.batch_size,
            pagination=args.pagination,
            skip_failed_records=args.skip_failed_records,
        )
        result = await run_episode_sync(config, on_progress=print_progress)
    except (EpisodeSyncError, ValidationError) as exc:
        LOGGER.exception("Episode sync failed: %s", exc)
        return 1

    print()
    print(f"Sync complete: {result.processed_records} videos processed")
    if result.skipped_records:
        print(f"  Skipped videos: {result.skipped_records}")
    print(f"  Sources:  {result.source_count} ({result.orphan_source_count} without player)")
    print(f"  Episodes: {result.episode_count}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
