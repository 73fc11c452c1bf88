"""Aggregate counts for a user and write them through the cache."""

from __future__ import annotations

from threading import Event

from notifix.count_aggregator import CountAggregator
from notifix.notification_cache import NotificationCache
from notifix.reconcile_recently_checked__highlight import reconcile_recently_checked
from notifix.utils import Logger

logger = Logger(__name__)


def refresh_user_counts(
    user: str,
    aggregator: CountAggregator,
    cache: NotificationCache,
    cancel_event: Event | None = None,
) -> bool:
    """Run one refresh for ``user``.

    Returns False when the refresh was abandoned because ``cancel_event`` was
    set; the cache then keeps its prior state.
    """
    counts = aggregator.aggregate(user, cancel_event=cancel_event)
    if cancel_event is not None and cancel_event.is_set():
        logger.info("Refresh for %s abandoned during shutdown", user)
        return False
    cache.replace_counts(user, counts, reconcile_recently_checked)
    logger.debug("Refreshed counts for %s: %s", user, counts)
    return True
