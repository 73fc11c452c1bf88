"""Port interfaces for the notification core."""

from notifix.ports.count_provider import CountProvider
from notifix.ports.refresh_scheduler import RefreshSchedulerPort

__all__ = ["CountProvider", "RefreshSchedulerPort"]
