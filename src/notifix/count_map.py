"""Count map type and helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

CountMap = dict[str, int | None]


def empty_count_map(counter_names: Iterable[str]) -> CountMap:
    """Return a map with every counter present and no value observed."""
    return dict.fromkeys(counter_names)


def restrict_to_counters(counts: Mapping[str, int | None], counter_names: Iterable[str]) -> CountMap:
    """Project ``counts`` onto exactly ``counter_names``, filling gaps with None."""
    return {name: counts.get(name) for name in counter_names}
