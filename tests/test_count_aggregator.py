import time
from threading import Event, Timer

import pytest

from notification_fakes import COUNTER_NAMES, BlockingProvider, SequenceProvider, make_providers

from notifix.count_aggregator import CountAggregator


def _aggregator(deadline_s: float = 0.5, max_in_flight: int = 10, **providers) -> CountAggregator:
    return CountAggregator(
        COUNTER_NAMES,
        make_providers(**providers),
        deadline_s=deadline_s,
        max_in_flight=max_in_flight,
    )


def test_aggregate_collects_every_counter():
    aggregator = _aggregator(alfrescoCount=SequenceProvider(2), randomCount=SequenceProvider(7))

    counts = aggregator.aggregate("bob")

    assert counts == {
        "alfrescoCount": 2,
        "usdIssuesCount": 0,
        "randomCount": 7,
        "emailCount": 0,
        "invoicesCount": 0,
    }


def test_aggregate_passes_user_to_providers():
    provider = SequenceProvider(1)
    aggregator = _aggregator(emailCount=provider)

    aggregator.aggregate("carol")

    assert provider.calls == ["carol"]


def test_failing_provider_is_isolated():
    aggregator = _aggregator(
        alfrescoCount=SequenceProvider(2),
        usdIssuesCount=SequenceProvider(RuntimeError("usd down")),
        randomCount=SequenceProvider(7),
        invoicesCount=SequenceProvider(1),
    )

    counts = aggregator.aggregate("bob")

    assert counts == {
        "alfrescoCount": 2,
        "usdIssuesCount": None,
        "randomCount": 7,
        "emailCount": 0,
        "invoicesCount": 1,
    }


def test_invalid_counts_are_recorded_as_absent():
    aggregator = _aggregator(
        alfrescoCount=SequenceProvider(-1),
        emailCount=lambda _user: "not a number",
        invoicesCount=lambda _user: "4",
    )

    counts = aggregator.aggregate("bob")

    assert counts["alfrescoCount"] is None
    assert counts["emailCount"] is None
    assert counts["invoicesCount"] == 4


def test_slow_provider_is_abandoned_at_deadline():
    slow = BlockingProvider(value=9)
    aggregator = _aggregator(deadline_s=0.1, emailCount=slow, alfrescoCount=SequenceProvider(3))

    started = time.monotonic()
    counts = aggregator.aggregate("bob")
    elapsed = time.monotonic() - started
    slow.release.set()

    assert counts["emailCount"] is None
    assert counts["alfrescoCount"] == 3
    assert set(counts) == set(COUNTER_NAMES)
    assert elapsed < 1.0


def test_explicit_deadline_overrides_default():
    slow = BlockingProvider()
    aggregator = _aggregator(deadline_s=5.0, emailCount=slow)

    started = time.monotonic()
    counts = aggregator.aggregate("bob", deadline_s=0.05)
    slow.release.set()

    assert counts["emailCount"] is None
    assert time.monotonic() - started < 1.0


def test_cancel_event_abandons_pending_providers():
    slow = BlockingProvider()
    cancel = Event()
    aggregator = _aggregator(deadline_s=5.0, emailCount=slow)
    timer = Timer(0.05, cancel.set)
    timer.start()

    started = time.monotonic()
    counts = aggregator.aggregate("bob", cancel_event=cancel)
    slow.release.set()
    timer.cancel()

    assert counts["emailCount"] is None
    assert time.monotonic() - started < 1.0


def _wait_until_idle(aggregator: CountAggregator, counter_name: str) -> None:
    deadline = time.monotonic() + 2.0
    while aggregator.in_flight(counter_name) and time.monotonic() < deadline:
        time.sleep(0.01)


def test_hung_provider_calls_are_capped_per_counter():
    hung = BlockingProvider()
    other = SequenceProvider(2)
    aggregator = _aggregator(deadline_s=0.02, max_in_flight=2, emailCount=hung, alfrescoCount=other)

    results = [aggregator.aggregate("bob") for _ in range(20)]

    assert aggregator.in_flight("emailCount") == 2
    assert all(counts["emailCount"] is None for counts in results)
    assert all(counts["alfrescoCount"] == 2 for counts in results)
    hung.release.set()
    _wait_until_idle(aggregator, "emailCount")
    assert len(hung.calls) == 2
    assert aggregator.in_flight("emailCount") == 0


def test_counter_is_called_again_once_stragglers_finish():
    hung = BlockingProvider(value=4)
    aggregator = _aggregator(deadline_s=0.02, max_in_flight=1, emailCount=hung)

    aggregator.aggregate("bob")
    hung.release.set()
    _wait_until_idle(aggregator, "emailCount")
    counts = aggregator.aggregate("bob")

    assert counts["emailCount"] == 4
    assert len(hung.calls) == 2


def test_max_in_flight_must_be_positive():
    with pytest.raises(ValueError):
        _aggregator(max_in_flight=0)
