"""Environment-based settings for upfeed_watcher."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from filters import DEFAULT_JUNK_COUNTRIES

load_dotenv()

DEFAULT_ICON = "assets/information.png"


class ConfigError(ValueError):
    """A required startup parameter is missing or invalid."""


def _parse_list(env_name: str) -> List[str]:
    raw = os.getenv(env_name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_bool(env_name: str, default: str = "false") -> bool:
    return os.getenv(env_name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    feed_url: str
    save_dir: str
    junk_countries: List[str]
    icon_path: str
    request_timeout: float
    skip_malformed: bool
    notifier: str
    log_level: str

    @classmethod
    def from_env(cls, feed_url: Optional[str] = None, save_dir: Optional[str] = None) -> "Settings":
        """Explicit arguments (e.g. CLI flags) take precedence over the environment."""
        feed_url = feed_url or os.getenv("FEED_URL", "")
        save_dir = save_dir or os.getenv("SAVE_DIR", "")
        if not feed_url:
            raise ConfigError("please specify the feed URL (--feed or FEED_URL)")
        if not save_dir:
            raise ConfigError("please specify the snapshot directory (--save-dir or SAVE_DIR)")

        try:
            request_timeout = float(os.getenv("REQUEST_TIMEOUT", "30"))
        except ValueError as exc:
            raise ConfigError(f"REQUEST_TIMEOUT must be a number: {exc}") from exc

        notifier = os.getenv("NOTIFIER", "desktop").lower()
        if notifier not in {"desktop", "log"}:
            raise ConfigError(f"NOTIFIER must be 'desktop' or 'log', got {notifier!r}")

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

        return cls(
            feed_url=feed_url,
            save_dir=save_dir,
            junk_countries=_parse_list("JUNK_COUNTRIES") or list(DEFAULT_JUNK_COUNTRIES),
            icon_path=os.getenv("NOTIFY_ICON", DEFAULT_ICON),
            request_timeout=request_timeout,
            skip_malformed=_parse_bool("SKIP_MALFORMED"),
            notifier=notifier,
            log_level=log_level,
        )
