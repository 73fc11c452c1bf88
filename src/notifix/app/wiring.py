"""Default dependency wiring for the HTTP layer."""

from __future__ import annotations

from threading import Lock

from notifix.config import get_settings
from notifix.notification_service import NotificationService
from notifix.providers import build_default_providers

_SERVICE: NotificationService | None = None
_SERVICE_LOCK = Lock()


def get_notification_service() -> NotificationService:
    """Return the process-wide service, building it from settings on first use."""
    global _SERVICE  # noqa: PLW0603
    with _SERVICE_LOCK:
        if _SERVICE is None:
            settings = get_settings()
            _SERVICE = NotificationService.from_settings(build_default_providers(settings), settings)
        return _SERVICE


def close_notification_service() -> None:
    """Shut down and forget the process-wide service, if one was built."""
    global _SERVICE  # noqa: PLW0603
    with _SERVICE_LOCK:
        service, _SERVICE = _SERVICE, None
    if service is not None:
        service.shutdown()
