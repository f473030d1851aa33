"""Notification sinks for newly detected postings."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from plyer import notification

logger = logging.getLogger(__name__)

APP_NAME = "upfeed-watcher"


class NotificationError(RuntimeError):
    """A notification could not be delivered."""


class BaseNotifier(ABC):
    @abstractmethod
    def notify(self, title: str, body: str, icon_path: str) -> None:
        raise NotImplementedError


class DesktopNotifier(BaseNotifier):
    def __init__(self, timeout: int = 10) -> None:
        self.timeout = timeout

    def notify(self, title: str, body: str, icon_path: str) -> None:
        try:
            notification.notify(
                title=title,
                message=body,
                app_name=APP_NAME,
                app_icon=icon_path,
                timeout=self.timeout,
            )
        except Exception as exc:
            raise NotificationError(f"failed to deliver {title!r}: {exc}") from exc


class LogNotifier(BaseNotifier):
    """Writes notifications to the log instead of the desktop."""

    def notify(self, title: str, body: str, icon_path: str) -> None:
        logger.info("NOTIFY %s | %s", title, body.strip().replace("\n", " | "))


def make_notifier(kind: str) -> BaseNotifier:
    if kind == "desktop":
        return DesktopNotifier()
    if kind == "log":
        return LogNotifier()
    raise ValueError(f"unknown notifier {kind!r}")
