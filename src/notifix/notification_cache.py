"""In-memory per-user notification cache."""

from __future__ import annotations

import time as time_module
from collections import OrderedDict
from collections.abc import Callable, Iterable, Mapping
from threading import Lock

from notifix.CacheEntry import CacheEntry
from notifix.CacheStats import CacheStats
from notifix.count_map import CountMap

RecentlyChecked = frozenset[str]
Acknowledged = Mapping[str, int | None]
Reconciler = Callable[[Acknowledged | None, CountMap], Acknowledged | None]


class NotificationCache:
    """TTL-expiring, LRU-bounded store of counts and acknowledgements per user.

    Every operation runs under one lock, so each slot is updated
    linearizably. Values handed out are copies; callers never share
    mutable state with the cache.
    """

    def __init__(self, ttl_s: float, max_entries: int) -> None:
        self.ttl_s = ttl_s
        self.max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def get_counts(self, user: str) -> CountMap | None:
        with self._lock:
            entry = self._live_entry(user, time_module.monotonic())
            if entry is None or entry.counts is None:
                self._misses += 1
                return None
            self._hits += 1
            return dict(entry.counts)

    def put_counts(self, user: str, counts: CountMap) -> None:
        with self._lock:
            now = time_module.monotonic()
            entry = self._entry_for_write(user, now)
            entry.counts = dict(counts)
            entry.counts_stored_at = now

    def get_recently_checked(self, user: str) -> RecentlyChecked | None:
        with self._lock:
            entry = self._live_entry(user, time_module.monotonic())
            if entry is None:
                return None
            return entry.recently_checked

    def mutate_recently_checked(
        self,
        user: str,
        mutate: Callable[[RecentlyChecked], Iterable[str]],
    ) -> RecentlyChecked:
        """Apply ``mutate`` to the current set (empty when absent) and store the result.

        A newly added counter records the value cached for it right now, or
        None when there is none. Counters already present keep their value.
        """
        with self._lock:
            now = time_module.monotonic()
            entry = self._entry_for_write(user, now)
            current = entry.acknowledged or {}
            cached = entry.counts or {}
            updated = {
                name: current[name] if name in current else cached.get(name)
                for name in mutate(frozenset(current))
            }
            entry.acknowledged = updated
            entry.acknowledged_stored_at = now
            return frozenset(updated)

    def snapshot(self, user: str) -> tuple[CountMap | None, RecentlyChecked | None]:
        """Return counts and acknowledgements read under a single lock."""
        with self._lock:
            entry = self._live_entry(user, time_module.monotonic())
            if entry is None:
                self._misses += 1
                return None, None
            if entry.counts is None:
                self._misses += 1
            else:
                self._hits += 1
            counts = dict(entry.counts) if entry.counts is not None else None
            return counts, entry.recently_checked

    def replace_counts(self, user: str, counts: CountMap, reconcile: Reconciler) -> None:
        """Write refreshed counts and the reconciled acknowledgements in one step.

        ``reconcile`` receives the acknowledged values and the new counts.
        Returning None leaves the acknowledgement slot as it is.
        A changed acknowledgement set keeps its original expiry time.
        """
        with self._lock:
            now = time_module.monotonic()
            entry = self._entry_for_write(user, now)
            reconciled = reconcile(entry.acknowledged, counts)
            if reconciled is not None and entry.acknowledged is not None:
                entry.acknowledged = dict(reconciled)
            entry.counts = dict(counts)
            entry.counts_stored_at = now

    def reset_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def describe(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                ttl_s=self.ttl_s,
                max_entries=self.max_entries,
            )

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(time_module.monotonic())
            return len(self._entries)

    def _live_entry(self, user: str, now: float) -> CacheEntry | None:
        entry = self._entries.get(user)
        if entry is None:
            return None
        entry.expire(now, self.ttl_s)
        if entry.is_empty:
            self._entries.pop(user, None)
            return None
        self._entries.move_to_end(user)
        return entry

    def _entry_for_write(self, user: str, now: float) -> CacheEntry:
        entry = self._live_entry(user, now)
        if entry is None:
            entry = CacheEntry()
            self._entries[user] = entry
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return entry

    def _purge_expired(self, now: float) -> None:
        for user in list(self._entries):
            entry = self._entries[user]
            entry.expire(now, self.ttl_s)
            if entry.is_empty:
                del self._entries[user]
