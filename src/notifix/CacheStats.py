from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Basic cache metrics for administrative inspection."""

    size: int
    hits: int
    misses: int
    ttl_s: float
    max_entries: int
