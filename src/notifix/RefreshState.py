from __future__ import annotations

from enum import Enum


class RefreshState(Enum):
    """Where a user's refresh sits in the scheduler."""

    IDLE = "idle"
    QUEUED = "queued"
    RUNNING = "running"
    RUNNING_REQUEUED = "running+requeued"
