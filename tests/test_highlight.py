import pytest

from notifix.reconcile_recently_checked__highlight import reconcile_recently_checked
from notifix.should_highlight__highlight import build_highlights, should_highlight


@pytest.mark.parametrize("value", [0, None])
def test_zero_or_absent_is_never_highlighted(value):
    assert should_highlight({"alfrescoCount": 3}, {"alfrescoCount"}, "alfrescoCount", value) is False
    assert should_highlight(None, None, "alfrescoCount", value) is False


def test_first_observation_is_highlighted():
    assert should_highlight(None, None, "alfrescoCount", 3) is True
    assert should_highlight({"emailCount": 1}, {"alfrescoCount"}, "alfrescoCount", 3) is True
    assert should_highlight({"alfrescoCount": None}, {"alfrescoCount"}, "alfrescoCount", 3) is True


def test_unacknowledged_counter_is_highlighted():
    assert should_highlight({"alfrescoCount": 3}, set(), "alfrescoCount", 3) is True
    assert should_highlight({"alfrescoCount": 3}, None, "alfrescoCount", 3) is True


def test_acknowledged_counter_highlights_only_on_change():
    assert should_highlight({"alfrescoCount": 3}, {"alfrescoCount"}, "alfrescoCount", 3) is False
    assert should_highlight({"alfrescoCount": 3}, {"alfrescoCount"}, "alfrescoCount", 4) is True


def test_build_highlights_covers_every_counter():
    counts = {"alfrescoCount": 3, "usdIssuesCount": None, "emailCount": 0}

    assert build_highlights(counts, {"alfrescoCount"}, counts) == {
        "alfrescoCount": False,
        "usdIssuesCount": False,
        "emailCount": False,
    }


def test_reconcile_drops_changed_acknowledgements():
    acknowledged = {"alfrescoCount": 3, "emailCount": 1, "invoicesCount": 2}
    new = {"alfrescoCount": 5, "emailCount": 1, "invoicesCount": None}

    kept = reconcile_recently_checked(acknowledged, new)

    assert kept == {"emailCount": 1}


def test_reconcile_compares_against_acknowledged_value():
    kept = reconcile_recently_checked({"alfrescoCount": 3}, {"alfrescoCount": 3, "emailCount": 4})

    assert kept == {"alfrescoCount": 3}


def test_reconcile_drops_acknowledgement_made_before_any_value():
    assert reconcile_recently_checked({"emailCount": None}, {"emailCount": 9}) == {}
    assert reconcile_recently_checked({"emailCount": None}, {"emailCount": None}) == {
        "emailCount": None
    }


def test_reconcile_with_no_acknowledgements_is_a_no_op():
    assert reconcile_recently_checked(None, {"alfrescoCount": 2}) is None
    assert reconcile_recently_checked({}, {"alfrescoCount": 2}) is None
