"""Derive the highlight advisory for one counter."""

from __future__ import annotations

from collections.abc import Mapping, Set


def should_highlight(
    cached_counts: Mapping[str, int | None] | None,
    recently_checked: Set[str] | None,
    counter_name: str,
    new_value: int | None,
) -> bool:
    """Return True when ``counter_name`` should be visually emphasised.

    A zero or missing value is never highlighted. A value the cache has not
    stored yet, or one the user has not acknowledged, is highlighted. An
    acknowledged counter is highlighted again only once its value moves
    away from the cached one.
    """
    if not new_value:
        return False
    cached_value = cached_counts.get(counter_name) if cached_counts is not None else None
    if cached_value is None:
        return True
    if not recently_checked or counter_name not in recently_checked:
        return True
    return cached_value != new_value


def build_highlights(
    cached_counts: Mapping[str, int | None] | None,
    recently_checked: Set[str] | None,
    counts: Mapping[str, int | None],
) -> dict[str, bool]:
    """Highlight every counter in ``counts`` against the cached state."""
    return {
        name: should_highlight(cached_counts, recently_checked, name, value)
        for name, value in counts.items()
    }
