"""Concurrent fan-out of count providers for one user."""

from __future__ import annotations

import time as time_module
from collections.abc import Mapping, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, wait
from functools import partial
from threading import Event, Lock

from notifix.count_map import CountMap
from notifix.errors import ProviderError
from notifix.ports.count_provider import CountProvider
from notifix.resolve_provider_value__aggregator import _resolve_provider_value
from notifix.start_provider_call__aggregator import _start_provider_call
from notifix.utils import funclogger

# Upper bound on how long a wait runs before the cancel event is rechecked.
_CANCEL_POLL_S = 0.05


class CountAggregator:
    """Invoke every provider concurrently and collect a complete count map.

    Failed, timed-out and abandoned providers appear in the result with a
    None value; ``aggregate`` never raises on their account.

    Abandoned calls keep running on their thread until the provider returns.
    At most ``max_in_flight`` calls per counter exist at once; while a counter
    is at that limit it is reported absent without being called.
    """

    def __init__(
        self,
        counter_names: Sequence[str],
        providers: Mapping[str, CountProvider],
        deadline_s: float,
        max_in_flight: int = 10,
    ) -> None:
        if max_in_flight <= 0:
            raise ValueError("max_in_flight must be positive")
        self.counter_names = tuple(counter_names)
        self.providers = dict(providers)
        self.deadline_s = deadline_s
        self.max_in_flight = max_in_flight
        self._in_flight = dict.fromkeys(self.counter_names, 0)
        self._in_flight_lock = Lock()

    @funclogger
    def aggregate(
        self,
        user: str,
        deadline_s: float | None = None,
        cancel_event: Event | None = None,
    ) -> CountMap:
        budget_s = self.deadline_s if deadline_s is None else deadline_s
        expires_at = time_module.monotonic() + budget_s
        futures = {name: self._start_call(name, user) for name in self.counter_names}
        abandon_reason = _wait_for_providers(set(futures.values()), expires_at, cancel_event)
        return {
            name: _resolve_provider_value(name, user, futures[name], abandon_reason)
            for name in self.counter_names
        }

    def in_flight(self, counter_name: str) -> int:
        with self._in_flight_lock:
            return self._in_flight[counter_name]

    def _start_call(self, counter_name: str, user: str) -> Future[int]:
        with self._in_flight_lock:
            if self._in_flight[counter_name] >= self.max_in_flight:
                return _rejected_call(
                    f"{self.max_in_flight} earlier calls are still running"
                )
            self._in_flight[counter_name] += 1
        return _start_provider_call(
            counter_name,
            self.providers[counter_name],
            user,
            on_finish=partial(self._release_call, counter_name),
        )

    def _release_call(self, counter_name: str) -> None:
        with self._in_flight_lock:
            self._in_flight[counter_name] -= 1


def _rejected_call(reason: str) -> Future[int]:
    future: Future[int] = Future()
    future.set_exception(ProviderError(reason))
    return future


def _wait_for_providers(
    pending: set[Future[int]],
    expires_at: float,
    cancel_event: Event | None,
) -> str:
    """Block until every future is done, the deadline passes, or cancellation."""
    while pending:
        if cancel_event is not None and cancel_event.is_set():
            return "aggregation cancelled"
        remaining = expires_at - time_module.monotonic()
        if remaining <= 0:
            return "deadline exceeded"
        timeout = remaining if cancel_event is None else min(remaining, _CANCEL_POLL_S)
        _, pending = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
    return "completed"
