"""Base classes for feed fetchers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from models import FeedItem


class FeedFetchError(RuntimeError):
    """The feed could not be downloaded or parsed."""


class BaseFetcher(ABC):
    def __init__(self, url: str) -> None:
        self.url = url

    @abstractmethod
    def fetch(self) -> List[FeedItem]:
        raise NotImplementedError
