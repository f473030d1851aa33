import pytest

from filters import JunkClassifier, country_denylist_rule
from models import Posting


@pytest.mark.parametrize("country", ["India", "Nigeria"])
def test_denied_countries_are_junk(country):
    junk, reason = JunkClassifier().classify(Posting(country=country))

    assert junk is True
    assert reason == f"Country is {country}"


@pytest.mark.parametrize("country", ["Germany", "", "india"])
def test_other_countries_are_legit(country):
    assert JunkClassifier().classify(Posting(country=country)) == (False, "")


def test_first_matching_rule_wins():
    def budget_rule(posting):
        if not posting.is_hourly and posting.budget < 50:
            return "Budget too low"
        return None

    classifier = JunkClassifier([budget_rule, country_denylist_rule(["India"])])
    posting = Posting(country="India", is_hourly=False, budget=10)

    assert classifier.classify(posting) == (True, "Budget too low")


def test_empty_rule_list_accepts_everything():
    assert JunkClassifier([]).classify(Posting(country="India")) == (False, "")


def test_from_countries():
    classifier = JunkClassifier.from_countries(["Atlantis"])

    assert classifier.classify(Posting(country="Atlantis")) == (True, "Country is Atlantis")
    assert classifier.classify(Posting(country="India")) == (False, "")
