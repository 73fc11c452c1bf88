from __future__ import annotations

from collections.abc import Collection

from notifix.errors import InvalidInputError


def _resolve_counter_name(notification_type: str | None, counter_names: Collection[str]) -> str:
    """Map a detail-view notification type such as ``usdIssues`` to its counter name."""
    if not notification_type:
        raise InvalidInputError("notification_type is required")
    counter_name = f"{notification_type}Count"
    if counter_name not in counter_names:
        raise InvalidInputError(f"NotificationType [{notification_type}] is unknown.")
    return counter_name
