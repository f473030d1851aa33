import pytest
import requests

from fetchers.base import FeedFetchError
from fetchers.rss import RssFeedFetcher

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>All jobs | upwork.com</title>
    <link>https://www.upwork.com</link>
    <description>Latest jobs</description>
    <item>
      <title><![CDATA[Go backend for API migration - Upwork]]></title>
      <link>https://www.upwork.com/jobs/~01</link>
      <description><![CDATA[short description]]></description>
      <content:encoded><![CDATA[Details<br /><b>Posted On</b>: March 11, 2021 17:45 UTC<br /><b>Country</b>: Germany<br />]]></content:encoded>
    </item>
    <item>
      <title>Logo design - Upwork</title>
      <link>https://www.upwork.com/jobs/~02</link>
      <description><![CDATA[<b>Budget</b>: $50<br /><b>Country</b>: Chile<br />]]></description>
    </item>
  </channel>
</rss>
"""


class DummyResp:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_fetch_maps_entries_in_feed_order(monkeypatch):
    fetcher = RssFeedFetcher("https://example.com/feed.rss")
    monkeypatch.setattr(fetcher.session, "get", lambda url, timeout: DummyResp(SAMPLE_RSS))

    items = fetcher.fetch()

    assert [item.title for item in items] == ["Go backend for API migration - Upwork", "Logo design - Upwork"]
    assert "<b>Posted On</b>: March 11, 2021 17:45 UTC" in items[0].content
    assert "<b>Budget</b>: $50" in items[1].content


def test_http_error_raises_fetch_error(monkeypatch):
    fetcher = RssFeedFetcher("https://example.com/feed.rss")
    monkeypatch.setattr(fetcher.session, "get", lambda url, timeout: DummyResp(status_code=503))

    with pytest.raises(FeedFetchError):
        fetcher.fetch()


def test_connection_error_raises_fetch_error(monkeypatch):
    fetcher = RssFeedFetcher("https://example.com/feed.rss")

    def boom(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(fetcher.session, "get", boom)

    with pytest.raises(FeedFetchError):
        fetcher.fetch()


def test_garbage_payload_raises_fetch_error(monkeypatch):
    fetcher = RssFeedFetcher("https://example.com/feed.rss")
    monkeypatch.setattr(fetcher.session, "get", lambda url, timeout: DummyResp(b"<html><body><p>oops"))

    with pytest.raises(FeedFetchError):
        fetcher.fetch()
