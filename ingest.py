"""Polling loop: fetch, extract, dedupe, classify, persist and notify."""

from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from config import DEFAULT_ICON
from extractor import PostingParseError, extract_item
from fetchers.base import BaseFetcher
from filters import JunkClassifier
from models import ZERO_TIME, FeedItem, Posting
from notifier import BaseNotifier
from storage import SnapshotStore

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 30
FILTERED_OUT_TITLE = "Job filtered out"


@dataclass
class CycleResult:
    fetched: int = 0
    seen: int = 0
    junk: int = 0
    errors: int = 0
    new: List[Posting] = field(default_factory=list)


class IngestionLoop:
    """
    Owns the watermark and drives one feed through both snapshot stores.

    Items are handled in feed order. An item counts as new only when its
    posted_on is strictly after the watermark, so which items are new depends
    on delivery order, not on timestamp order.
    """

    def __init__(
        self,
        fetcher: BaseFetcher,
        notifier: BaseNotifier,
        unfiltered: SnapshotStore,
        filtered: SnapshotStore,
        classifier: Optional[JunkClassifier] = None,
        extractor: Callable[[FeedItem], Posting] = extract_item,
        icon_path: str = DEFAULT_ICON,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        skip_malformed: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.notifier = notifier
        self.unfiltered = unfiltered
        self.filtered = filtered
        self.classifier = classifier or JunkClassifier()
        self.extractor = extractor
        self.icon_path = icon_path
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.skip_malformed = skip_malformed
        self.watermark: dt.datetime = ZERO_TIME

    def process_item(self, item: FeedItem, result: Optional[CycleResult] = None) -> Optional[Posting]:
        """Handle one feed item. Returns the posting if it was new and legitimate."""
        if result is None:
            result = CycleResult()
        posting = self.extractor(item)

        # Every observed posting is saved, new or not.
        self.unfiltered.upsert(posting)
        self.unfiltered.save()

        if not posting.posted_on > self.watermark:
            logger.debug("Already seen: %r (%s)", posting.title, posting.posted_on)
            result.seen += 1
            return None
        self.watermark = posting.posted_on

        junk, reason = self.classifier.classify(posting)
        if junk:
            logger.info("Filtered out %r: %s", posting.title, reason)
            result.junk += 1
            self.notifier.notify(FILTERED_OUT_TITLE, reason, self.icon_path)
            return None

        self.filtered.upsert(posting)
        self.filtered.save()
        logger.info("New posting %r (%s)", posting.title, posting.posted_on)
        result.new.append(posting)
        self.notifier.notify(posting.title, posting.format(), self.icon_path)
        return posting

    def run_cycle(self) -> CycleResult:
        items = self.fetcher.fetch()
        result = CycleResult(fetched=len(items))
        for item in items:
            try:
                self.process_item(item, result)
            except PostingParseError as exc:
                if not self.skip_malformed:
                    raise
                logger.warning("Skipping malformed item %r: %s", item.title, exc)
                result.errors += 1

        logger.info(
            "Cycle done: %d fetched, %d new, %d junk, %d seen, %d errors",
            result.fetched,
            len(result.new),
            result.junk,
            result.seen,
            result.errors,
        )
        return result

    def run_forever(self, max_cycles: Optional[int] = None) -> None:
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            self.run_cycle()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            self.sleep(self.poll_interval)
