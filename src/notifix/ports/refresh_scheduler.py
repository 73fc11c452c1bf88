"""Port interface for background refresh scheduling."""

from __future__ import annotations

from typing import Protocol


class RefreshSchedulerPort(Protocol):
    """Schedule per-user cache refreshes off the request path."""

    def schedule_refresh(self, user: str, delay_s: float) -> bool:
        """Queue a refresh for ``user``; return False when coalesced or rejected."""

    def shutdown(self) -> None:
        """Stop accepting work and release worker threads."""
