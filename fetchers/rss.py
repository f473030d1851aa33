"""Fetcher for RSS/Atom job feeds."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import feedparser
import requests

from fetchers.base import BaseFetcher, FeedFetchError
from models import FeedItem

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36",
    "Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml;q=0.9, */*;q=0.8",
}


def _entry_content(entry: Any) -> str:
    content = entry.get("content") or []
    if content:
        return content[0].get("value", "")
    return entry.get("summary", "")


class RssFeedFetcher(BaseFetcher):
    def __init__(self, url: str, timeout: float = 30, session: Optional[requests.Session] = None) -> None:
        super().__init__(url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def fetch(self) -> List[FeedItem]:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FeedFetchError(f"failed to download {self.url}: {exc}") from exc

        feed = feedparser.parse(resp.content)
        if feed.bozo and not feed.entries:
            raise FeedFetchError(f"failed to parse {self.url}: {feed.get('bozo_exception')}")

        items = [FeedItem(title=entry.get("title", ""), content=_entry_content(entry)) for entry in feed.entries]
        logger.info("Fetched %d feed items from %s", len(items), self.url)
        return items
