"""Rule-based junk filtering for job postings."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from models import Posting

Rule = Callable[[Posting], Optional[str]]

DEFAULT_JUNK_COUNTRIES: Tuple[str, ...] = ("India", "Nigeria")


def country_denylist_rule(countries: Iterable[str]) -> Rule:
    denied = frozenset(countries)

    def rule(posting: Posting) -> Optional[str]:
        if posting.country in denied:
            return f"Country is {posting.country}"
        return None

    return rule


class JunkClassifier:
    """
    Evaluates rules in order; the first rule returning a reason marks the
    posting as junk. No matching rule means the posting is legitimate.
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None) -> None:
        if rules is None:
            rules = [country_denylist_rule(DEFAULT_JUNK_COUNTRIES)]
        self.rules: List[Rule] = list(rules)

    @classmethod
    def from_countries(cls, countries: Sequence[str]) -> "JunkClassifier":
        return cls([country_denylist_rule(countries)])

    def classify(self, posting: Posting) -> Tuple[bool, str]:
        for rule in self.rules:
            reason = rule(posting)
            if reason:
                return True, reason
        return False, ""
