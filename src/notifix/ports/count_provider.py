"""Port interface for notification count sources."""

from __future__ import annotations

from typing import Protocol


class CountProvider(Protocol):
    """Return the current count of one notification source for a user."""

    def __call__(self, user: str) -> int:
        """Fetch the count, raising on failure."""
