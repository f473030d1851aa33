# tests/conftest.py
from typing import List, Tuple

import pytest

from fetchers.base import BaseFetcher
from models import FeedItem
from notifier import BaseNotifier
from storage import FILTERED, UNFILTERED, SnapshotStore

SAMPLE_CONTENT = (
    "We need a backend developer for an API migration.<br /><br />"
    "<b>Hourly Range</b>: $15.00-$35.50\n<br />"
    "<b>Posted On</b>: March 11, 2021 17:45 UTC<br />"
    "<b>Category</b>: Web Development<br />"
    "<b>Skills</b>:Go,     PostgreSQL,     REST API    \n<br />"
    "<b>Country</b>: Germany\n<br />"
    '<a href="https://www.upwork.com/jobs/~01">click to apply</a>'
)


def make_content(posted_on: str, country: str = "Germany", extra: str = "") -> str:
    return (
        f"<b>Posted On</b>: {posted_on}<br />"
        "<b>Category</b>: Web Development<br />"
        f"<b>Country</b>: {country}<br />"
        f"{extra}"
    )


class FakeFetcher(BaseFetcher):
    def __init__(self, batches: List[List[FeedItem]]) -> None:
        super().__init__("https://example.com/feed.rss")
        self.batches = list(batches)
        self.calls = 0

    def fetch(self) -> List[FeedItem]:
        self.calls += 1
        if len(self.batches) > 1:
            return self.batches.pop(0)
        return self.batches[0]


class RecordingNotifier(BaseNotifier):
    def __init__(self) -> None:
        self.sent: List[Tuple[str, str, str]] = []

    def notify(self, title: str, body: str, icon_path: str) -> None:
        self.sent.append((title, body, icon_path))


@pytest.fixture
def sample_content() -> str:
    return SAMPLE_CONTENT


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def stores(tmp_path) -> Tuple[SnapshotStore, SnapshotStore]:
    return SnapshotStore(tmp_path, UNFILTERED), SnapshotStore(tmp_path, FILTERED)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("FEED_URL", "SAVE_DIR", "JUNK_COUNTRIES", "NOTIFY_ICON", "REQUEST_TIMEOUT", "SKIP_MALFORMED", "NOTIFIER", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
