"""Per-user cache entry holding counts and acknowledgements."""

from __future__ import annotations

from dataclasses import dataclass

from notifix.count_map import CountMap


@dataclass(slots=True)
class CacheEntry:
    """Two independently expiring slots for one user.

    ``acknowledged`` maps each acknowledged counter to the value that was
    cached when the user acknowledged it.
    """

    counts: CountMap | None = None
    counts_stored_at: float = 0.0
    acknowledged: dict[str, int | None] | None = None
    acknowledged_stored_at: float = 0.0

    def expire(self, now: float, ttl_s: float) -> None:
        """Drop every slot older than ``ttl_s``."""
        if self.counts is not None and now - self.counts_stored_at > ttl_s:
            self.counts = None
        if self.acknowledged is not None and now - self.acknowledged_stored_at > ttl_s:
            self.acknowledged = None

    @property
    def recently_checked(self) -> frozenset[str] | None:
        if self.acknowledged is None:
            return None
        return frozenset(self.acknowledged)

    @property
    def is_empty(self) -> bool:
        return self.counts is None and self.acknowledged is None
