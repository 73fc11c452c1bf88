"""Read, poll and acknowledge operations consumed by the transport layer."""

from __future__ import annotations

from collections.abc import Mapping
from threading import Event

from notifix.config import Settings, get_settings
from notifix.count_aggregator import CountAggregator
from notifix.count_map import CountMap, empty_count_map, restrict_to_counters
from notifix.errors import InvalidInputError
from notifix.notification_cache import NotificationCache
from notifix.notification_config import NotificationConfig
from notifix.ports.count_provider import CountProvider
from notifix.ports.refresh_scheduler import RefreshSchedulerPort
from notifix.refresh_scheduler import RefreshScheduler
from notifix.refresh_user_counts__scheduler import refresh_user_counts
from notifix.render_view import RenderResult
from notifix.resolve_counter_name__notification_type import _resolve_counter_name
from notifix.should_highlight__highlight import build_highlights
from notifix.utils import Logger

logger = Logger(__name__)


class NotificationService:
    """Per-user notification summary backed by a cache and background refresh.

    The render and poll paths only read the cache and schedule work; neither
    waits on a provider unless a poll explicitly allows a synchronous fill.
    """

    def __init__(
        self,
        config: NotificationConfig,
        cache: NotificationCache | None = None,
        aggregator: CountAggregator | None = None,
        scheduler: RefreshSchedulerPort | None = None,
    ) -> None:
        self.config = config
        if cache is None:
            cache = NotificationCache(
                ttl_s=config.cache_ttl_ms / 1000.0,
                max_entries=config.cache_max_entries,
            )
        if aggregator is None:
            aggregator = CountAggregator(
                config.counter_names,
                config.providers,
                deadline_s=config.aggregation_deadline_s,
                max_in_flight=config.worker_pool_size,
            )
        self.cache = cache
        self.aggregator = aggregator
        if scheduler is None:
            scheduler = RefreshScheduler(
                self.refresh,
                pool_size=config.worker_pool_size,
                shutdown_grace_s=config.shutdown_grace_ms / 1000.0,
            )
        self.scheduler = scheduler

    @classmethod
    def from_settings(
        cls,
        providers: Mapping[str, CountProvider],
        settings: Settings | None = None,
    ) -> NotificationService:
        return cls(NotificationConfig.from_settings(settings or get_settings(), providers))

    def refresh(self, user: str, cancel_event: Event | None = None) -> bool:
        """Aggregate, reconcile and store counts for ``user`` on the calling thread."""
        return refresh_user_counts(user, self.aggregator, self.cache, cancel_event)

    def on_render(self, user: str) -> RenderResult:
        counts, recently_checked = self.cache.snapshot(user)
        if counts is None:
            self.scheduler.schedule_refresh(user, self.config.immediate_refresh_delay_s)
            return RenderResult(
                counts=empty_count_map(self.config.counter_names),
                highlights=dict.fromkeys(self.config.counter_names, False),
                refresh_interval_ms=self.config.refresh_interval_ms,
            )
        counts = restrict_to_counters(counts, self.config.counter_names)
        return RenderResult(
            counts=counts,
            highlights=build_highlights(counts, recently_checked, counts),
            refresh_interval_ms=self.config.refresh_interval_ms,
        )

    def on_poll(self, user: str, allow_synchronous_fill: bool | None) -> CountMap | None:
        """Return cached counts and schedule the next refresh one interval out.

        With an empty cache and ``allow_synchronous_fill`` set, the providers
        are aggregated on the calling thread; that result is returned but not
        cached, the scheduled refresh fills the cache.
        """
        if allow_synchronous_fill is None:
            raise InvalidInputError("allow_synchronous_fill is required")
        self.scheduler.schedule_refresh(user, self.config.refresh_interval_s)
        counts = self.cache.get_counts(user)
        if counts is None and allow_synchronous_fill:
            counts = self.aggregator.aggregate(user)
        return counts

    def on_acknowledge(self, user: str, counter_name: str) -> None:
        if counter_name not in self.config.counter_names:
            logger.warning("Ignoring acknowledgement of unknown counter %s for %s", counter_name, user)
            return
        self.cache.mutate_recently_checked(user, lambda checked: checked | {counter_name})

    def on_show_details(self, user: str, notification_type: str | None) -> str:
        """Acknowledge the counter behind a detail view and return its name."""
        counter_name = _resolve_counter_name(notification_type, self.config.counter_names)
        self.on_acknowledge(user, counter_name)
        return counter_name

    def reset_all(self) -> None:
        logger.info("Resetting notification cache")
        self.cache.reset_all()

    def shutdown(self) -> None:
        self.scheduler.shutdown()

    def __enter__(self) -> NotificationService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
