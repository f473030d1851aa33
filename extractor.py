"""Field extraction from the markup embedded in feed entries."""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Callable, Dict, List, Tuple

from models import FeedItem, Posting

logger = logging.getLogger(__name__)

TITLE_SUFFIX = " - Upwork"

FIELD_RE = re.compile(r"<b>([a-zA-Z ]+)</b>:(.[^<]+)<")
# Zone: three upper-case letters, four or five ending in T, a few named
# exceptions, or GMT with an optional hour offset.
POSTED_ON_RE = re.compile(
    r"^(?P<stamp>.+ \d{1,2}:\d{2}) "
    r"(?:GMT(?:(?P<sign>[+-])(?P<hours>\d{1,2}))?|ChST|MeST|WITA|[A-Z]{3}|[A-Z]{3,4}T)$"
)
POSTED_ON_FORMAT = "%B %d, %Y %H:%M"
INT_RE = re.compile(r"^[+-]?\d+$")
FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
FLOAT32_MAX = 3.4028234663852886e38


class PostingParseError(ValueError):
    """A recognized field carried a value that does not match its grammar."""

    def __init__(self, label: str, value: str, reason: str) -> None:
        super().__init__(f"cannot parse {label!r} value {value!r}: {reason}")
        self.label = label
        self.value = value


def clean_title(raw: str) -> str:
    """
    Drop the feed's trailing " - Upwork" marker.

    Known quirk: this strips any trailing run of characters from the suffix's
    character set, not the literal suffix, so "Python Framework" becomes
    "Python Frame". Kept as-is to match existing snapshots.
    """
    return raw.rstrip(TITLE_SUFFIX)


def scan_fields(content: str) -> List[Tuple[str, str]]:
    return [(label.strip(), value.strip()) for label, value in FIELD_RE.findall(content)]


def parse_posted_on(value: str) -> dt.datetime:
    match = POSTED_ON_RE.match(value)
    if not match:
        raise PostingParseError("Posted On", value, "expected 'Month D, YYYY HH:MM ZONE'")
    try:
        naive = dt.datetime.strptime(match.group("stamp"), POSTED_ON_FORMAT)
    except ValueError as exc:
        raise PostingParseError("Posted On", value, str(exc)) from exc

    # Zone abbreviations carry no offset of their own; only GMT+H shifts the time.
    offset = dt.timedelta(0)
    if match.group("hours"):
        if int(match.group("hours")) > 23:
            raise PostingParseError("Posted On", value, "GMT offset out of range")
        offset = dt.timedelta(hours=int(match.group("hours")))
        if match.group("sign") == "-":
            offset = -offset
    return naive.replace(tzinfo=dt.timezone(offset))


def parse_skills(value: str) -> List[str]:
    return [skill.strip() for skill in value.split(", ")]


def parse_budget(value: str) -> int:
    raw = value.replace("$", "").replace(",", "")
    if not INT_RE.match(raw):
        raise PostingParseError("Budget", value, "not an integer")
    budget = int(raw)
    if not INT64_MIN <= budget <= INT64_MAX:
        raise PostingParseError("Budget", value, "out of range")
    return budget


def _parse_float(label: str, original: str, token: str) -> float:
    if not FLOAT_RE.match(token):
        raise PostingParseError(label, original, f"{token!r} is not a number")
    number = float(token)
    if abs(number) > FLOAT32_MAX:
        raise PostingParseError(label, original, f"{token!r} is out of range")
    return number


def parse_hourly_range(value: str) -> Tuple[float, float]:
    tokens = value.replace("$", "").split("-")
    lower = _parse_float("Hourly Range", value, tokens[0])
    upper = _parse_float("Hourly Range", value, tokens[1]) if len(tokens) > 1 else 0.0
    return (lower, upper)


def _set_posted_on(posting: Posting, value: str) -> None:
    posting.posted_on = parse_posted_on(value)


def _set_category(posting: Posting, value: str) -> None:
    posting.category = value


def _set_skills(posting: Posting, value: str) -> None:
    posting.skills = parse_skills(value)


def _set_country(posting: Posting, value: str) -> None:
    posting.country = value


def _set_budget(posting: Posting, value: str) -> None:
    posting.budget = parse_budget(value)
    posting.is_hourly = False


def _set_hourly_range(posting: Posting, value: str) -> None:
    posting.hourly_range = parse_hourly_range(value)


# Label (case-sensitive) -> setter applying the parsed value to the posting.
FIELD_PARSERS: Dict[str, Callable[[Posting, str], None]] = {
    "Posted On": _set_posted_on,
    "Category": _set_category,
    "Skills": _set_skills,
    "Country": _set_country,
    "Budget": _set_budget,
    "Hourly Range": _set_hourly_range,
}


def extract(title: str, content: str) -> Posting:
    """
    Build a Posting from an entry title and its content markup.

    Unknown labels are ignored. A malformed Posted On, Budget or Hourly Range
    value raises PostingParseError.
    """
    posting = Posting(title=clean_title(title))
    for label, value in scan_fields(content):
        setter = FIELD_PARSERS.get(label)
        if setter is None:
            logger.debug("Ignoring unknown field %r", label)
            continue
        setter(posting, value)

    if posting.is_hourly:
        posting.budget = 0
    else:
        posting.hourly_range = (0.0, 0.0)
    return posting


def extract_item(item: FeedItem) -> Posting:
    return extract(item.title, item.content)
