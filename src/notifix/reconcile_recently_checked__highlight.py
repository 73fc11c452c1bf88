"""Drop acknowledgements whose counter value changed during a refresh."""

from __future__ import annotations

from collections.abc import Mapping


def reconcile_recently_checked(
    acknowledged: Mapping[str, int | None] | None,
    new_counts: Mapping[str, int | None],
) -> dict[str, int | None] | None:
    """Return the acknowledgements that survive ``new_counts``.

    Each acknowledgement carries the value the user saw. It survives only
    while the refreshed value still equals that one, so a counter that went
    absent, or that was acknowledged before any value was cached and now has
    one, is dropped. Returns None when there is nothing to reconcile.
    """
    if not acknowledged:
        return None
    return {
        counter_name: seen_value
        for counter_name, seen_value in acknowledged.items()
        if seen_value == new_counts.get(counter_name)
    }
