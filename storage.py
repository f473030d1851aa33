"""Daily JSON snapshots of job postings."""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from models import Posting

logger = logging.getLogger(__name__)

UNFILTERED = "unfiltered"
FILTERED = "filtered"


class SnapshotError(RuntimeError):
    """A snapshot file could not be read back or written."""


def snapshot_filename(day: dt.date, category: str) -> str:
    """One file per calendar day and storage category."""
    return f"upfeed_{day.strftime('%d-%m-%Y')}_{category}.json"


class SnapshotStore:
    """
    Postings keyed by their posted_on timestamp, mirrored to today's file.

    Upserts replace any previous posting with the same key (last write wins).
    Only today's file is ever read, so a store opened on a new calendar day
    starts empty. Every save rewrites the whole file.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        category: str,
        today: Optional[Callable[[], dt.date]] = None,
    ) -> None:
        self.directory = Path(directory)
        self.category = category
        self._today = today
        self._postings: Dict[dt.datetime, Posting] = {}

    @classmethod
    def open(cls, directory: Union[str, Path], category: str) -> "SnapshotStore":
        store = cls(directory, category)
        store.load()
        return store

    def path_for(self, day: dt.date) -> Path:
        return self.directory / snapshot_filename(day, self.category)

    def current_path(self) -> Path:
        day = self._today() if self._today else dt.date.today()
        return self.path_for(day)

    def load(self) -> Dict[dt.datetime, Posting]:
        path = self.current_path()
        if not path.exists():
            logger.info("No %s snapshot for today at %s; starting empty", self.category, path)
            self._postings = {}
            return dict(self._postings)

        try:
            with path.open("r", encoding="utf-8") as fh:
                records = json.load(fh)
            if records is None:
                records = []
            if not isinstance(records, list):
                raise SnapshotError(f"{path}: expected a JSON array")
            postings = [Posting.from_dict(record) for record in records]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise SnapshotError(f"{path}: {exc}") from exc

        self._postings = {posting.posted_on: posting for posting in postings}
        logger.info("Loaded %d %s postings from %s", len(self._postings), self.category, path)
        return dict(self._postings)

    def save(self, postings: Optional[Dict[dt.datetime, Posting]] = None) -> Path:
        if postings is not None:
            self._postings = dict(postings)
        path = self.current_path()
        records = [posting.to_dict() for posting in self.postings()]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as fh:
                json.dump(records, fh, ensure_ascii=False)
        except OSError as exc:
            raise SnapshotError(f"{path}: {exc}") from exc
        logger.debug("Saved %d %s postings to %s", len(records), self.category, path)
        return path

    def upsert(self, posting: Posting) -> None:
        self._postings[posting.posted_on] = posting

    def get(self, posted_on: dt.datetime) -> Optional[Posting]:
        return self._postings.get(posted_on)

    def postings(self) -> List[Posting]:
        """Newest first."""
        return sorted(self._postings.values(), key=lambda p: p.posted_on, reverse=True)

    def as_dict(self) -> Dict[dt.datetime, Posting]:
        return dict(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, posted_on: object) -> bool:
        return posted_on in self._postings
