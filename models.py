"""Data models for job postings."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

# Zero value for a posting that never carried a "Posted On" field.
ZERO_TIME = dt.datetime(1, 1, 1, tzinfo=dt.timezone.utc)


def format_timestamp(value: dt.datetime) -> str:
    if value.utcoffset() == dt.timedelta(0):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()


def parse_timestamp(value: str) -> dt.datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = dt.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _typed(data: Dict[str, Any], name: str, kind: type, default: Any) -> Any:
    # Missing keys and nulls fall back to the zero value.
    value = data.get(name)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ValueError(f"{name!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass
class FeedItem:
    title: str
    content: str


@dataclass
class Posting:
    title: str = ""
    posted_on: dt.datetime = ZERO_TIME
    category: str = ""
    skills: List[str] = field(default_factory=list)
    country: str = ""
    # False means fixed price.
    is_hourly: bool = True
    hourly_range: Tuple[float, float] = (0.0, 0.0)
    # Only meaningful when is_hourly is False.
    budget: int = 0

    def format(self) -> str:
        """Notification body for a legitimate posting."""
        body = f"Country: {self.country}\n"
        if self.is_hourly:
            lower, upper = self.hourly_range
            body += f"Type: Hourly\nHourly Range: ${_format_number(lower)}-${_format_number(upper)}\n"
        else:
            body += f"Type: Fixed price\nBudget: ${self.budget}\n"
        return body

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "posted_on": format_timestamp(self.posted_on),
            "category": self.category,
            "skills": list(self.skills),
            "country": self.country,
            "is_hourly": self.is_hourly,
            "hourly_range": [self.hourly_range[0], self.hourly_range[1]],
            "budget": self.budget,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Posting":
        """Build a Posting from a snapshot record, rejecting mistyped fields with ValueError."""
        if not isinstance(data, dict):
            raise ValueError(f"record must be an object, got {type(data).__name__}")

        posted_on = _typed(data, "posted_on", str, "")
        skills = _typed(data, "skills", list, [])
        if not all(isinstance(skill, str) for skill in skills):
            raise ValueError("'skills' must be a list of strings")
        hourly_range = _typed(data, "hourly_range", list, [0.0, 0.0])
        if len(hourly_range) != 2 or not all(_is_number(bound) for bound in hourly_range):
            raise ValueError("'hourly_range' must be a pair of numbers")
        budget = _typed(data, "budget", int, 0)
        if isinstance(budget, bool):
            raise ValueError("'budget' must be an integer")

        return cls(
            title=_typed(data, "title", str, ""),
            posted_on=parse_timestamp(posted_on) if posted_on else ZERO_TIME,
            category=_typed(data, "category", str, ""),
            skills=list(skills),
            country=_typed(data, "country", str, ""),
            is_hourly=_typed(data, "is_hourly", bool, True),
            hourly_range=(float(hourly_range[0]), float(hourly_range[1])),
            budget=budget,
        )
