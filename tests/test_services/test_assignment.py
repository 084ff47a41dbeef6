import pytest
from types import SimpleNamespace
from choukwa.services.assignment import (
    assign,
    AssignmentError,
    TARGET_MP,
    TARGET_LOCAL_DEPUTY,
)


class FakeMPs:
    def __init__(self, mps):
        self.mps = mps
        self.calls = []

    def find_by_wilaya(self, wilaya_id):
        self.calls.append(wilaya_id)
        return [m for m in self.mps if m.wilaya_id == wilaya_id]


class FakeDeputies:
    def __init__(self, deputies):
        self.deputies = deputies

    def find_by_location(self, wilaya_id, daira_id):
        return [
            d
            for d in self.deputies
            if d.wilaya_id == wilaya_id and d.daira_id == daira_id
        ]


def official(id, wilaya_id, daira_id=None):
    return SimpleNamespace(id=id, wilaya_id=wilaya_id, daira_id=daira_id)


def test_municipal_goes_to_deputy_of_exact_location():
    deputies = FakeDeputies([official(1, 5, 50), official(2, 5, 51)])
    result = assign("municipal", 5, 51, FakeMPs([]), deputies)

    assert result.target == TARGET_LOCAL_DEPUTY
    assert result.official_id == 2
    assert result.ministry is None


def test_municipal_without_matching_deputy_is_degraded_not_an_error():
    deputies = FakeDeputies([official(1, 5, 50)])
    result = assign("municipal", 5, 99, FakeMPs([]), deputies)

    assert result.target == TARGET_LOCAL_DEPUTY
    assert result.official_id is None


def test_municipal_requires_daira():
    with pytest.raises(AssignmentError):
        assign("municipal", 5, None, FakeMPs([]), FakeDeputies([]))


def test_non_municipal_goes_to_mp_of_wilaya_and_ignores_daira():
    mps = FakeMPs([official(7, 5), official(8, 6)])
    with_daira = assign("health", 5, 50, mps, FakeDeputies([]))
    without_daira = assign("health", 5, None, mps, FakeDeputies([]))

    assert with_daira == without_daira
    assert with_daira.target == TARGET_MP
    assert with_daira.official_id == 7
    assert with_daira.ministry == "Ministère de la Santé"


def test_non_municipal_without_mp():
    result = assign("education", 9, None, FakeMPs([official(7, 5)]), FakeDeputies([]))
    assert result.target == TARGET_MP
    assert result.official_id is None


def test_lowest_id_wins_between_candidates():
    mps = FakeMPs([official(12, 5), official(3, 5), official(8, 5)])
    assert assign("transport", 5, None, mps, FakeDeputies([])).official_id == 3


def test_wilaya_is_required():
    with pytest.raises(AssignmentError):
        assign("health", None, None, FakeMPs([]), FakeDeputies([]))
