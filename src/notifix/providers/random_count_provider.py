"""Synthetic count source."""

from __future__ import annotations

import random
from collections.abc import Callable

from notifix.ports.count_provider import CountProvider

_RANDOM_COUNT_MAX = 10


def random_count() -> int:
    """Return a random count; the synthetic source does not depend on the user."""
    return random.randint(0, _RANDOM_COUNT_MAX)


def userless(fetch: Callable[[], int]) -> CountProvider:
    """Adapt a provider that takes no user argument."""

    def provider(_user: str) -> int:
        return fetch()

    provider.__name__ = getattr(fetch, "__name__", "userless_provider")
    return provider


def unavailable(counter_name: str) -> CountProvider:
    """Provider for a counter with no configured source; every call fails."""

    def provider(_user: str) -> int:
        raise LookupError(f"No source configured for {counter_name}")

    return provider
