"""CLI entry for watching a job feed and notifying on new postings."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from config import ConfigError, Settings
from extractor import PostingParseError
from fetchers.base import FeedFetchError
from fetchers.rss import RssFeedFetcher
from filters import JunkClassifier
from ingest import IngestionLoop
from notifier import NotificationError, make_notifier
from storage import FILTERED, UNFILTERED, SnapshotError, SnapshotStore

logger = logging.getLogger(__name__)

FATAL_ERRORS = (FeedFetchError, PostingParseError, SnapshotError, NotificationError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Poll a job feed and notify on new postings.")
    parser.add_argument("--feed", help="feed URL (default: $FEED_URL)")
    parser.add_argument("--save-dir", help="snapshot directory (default: $SAVE_DIR)")
    parser.add_argument("--once", action="store_true", help="run a single cycle and exit")
    return parser


def build_loop(settings: Settings) -> IngestionLoop:
    return IngestionLoop(
        fetcher=RssFeedFetcher(settings.feed_url, timeout=settings.request_timeout),
        notifier=make_notifier(settings.notifier),
        unfiltered=SnapshotStore.open(settings.save_dir, UNFILTERED),
        filtered=SnapshotStore.open(settings.save_dir, FILTERED),
        classifier=JunkClassifier.from_countries(settings.junk_countries),
        icon_path=settings.icon_path,
        skip_malformed=settings.skip_malformed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env(feed_url=args.feed, save_dir=args.save_dir)
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        logger.critical("%s", exc)
        return 2

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Watching %s, snapshots in %s", settings.feed_url, settings.save_dir)

    try:
        loop = build_loop(settings)
        loop.run_forever(max_cycles=1 if args.once else None)
    except FATAL_ERRORS as exc:
        logger.critical("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
