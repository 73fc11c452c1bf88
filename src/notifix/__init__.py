"""NOTIFIX package entrypoints."""

import sys

from notifix.config import Settings, get_settings
from notifix.count_aggregator import CountAggregator
from notifix.notification_cache import NotificationCache
from notifix.notification_config import NotificationConfig
from notifix.notification_service import NotificationService
from notifix.providers import build_default_providers
from notifix.refresh_scheduler import RefreshScheduler
from notifix.render_view import RenderResult


def main() -> None:
    """Refresh and print the notification summary for one screen name."""
    screen_name = sys.argv[1] if len(sys.argv) > 1 else "demo"
    settings = get_settings()
    with NotificationService.from_settings(build_default_providers(settings), settings) as service:
        service.refresh(screen_name)
        print(service.on_render(screen_name).to_view())


__all__ = [
    "CountAggregator",
    "NotificationCache",
    "NotificationConfig",
    "NotificationService",
    "RefreshScheduler",
    "RenderResult",
    "Settings",
    "get_settings",
    "main",
]
