"""Construction-time configuration record for the notification core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from notifix.config import Settings
from notifix.errors import ConfigurationError
from notifix.ports.count_provider import CountProvider


@dataclass(frozen=True)
class NotificationConfig:  # pylint: disable=too-many-instance-attributes
    """Counter set, providers and timing for one notification core.

    Validation runs on construction; an invalid record raises
    ``ConfigurationError`` and never reaches the scheduler.
    """

    counter_names: tuple[str, ...]
    providers: Mapping[str, CountProvider]
    refresh_interval_ms: int = 10_000
    immediate_refresh_delay_ms: int = 10
    aggregation_deadline_ms: int = 5_000
    worker_pool_size: int = 10
    shutdown_grace_ms: int = 2_000
    cache_ttl_ms: int = 600_000
    cache_max_entries: int = 10_000
    api_token: str = field(default="local-dev-token", repr=False)

    def __post_init__(self) -> None:
        _validate_counter_names(self.counter_names)
        _validate_providers(self.counter_names, self.providers)
        _validate_positive(
            refresh_interval_ms=self.refresh_interval_ms,
            aggregation_deadline_ms=self.aggregation_deadline_ms,
            worker_pool_size=self.worker_pool_size,
            cache_ttl_ms=self.cache_ttl_ms,
            cache_max_entries=self.cache_max_entries,
        )
        if self.immediate_refresh_delay_ms < 0:
            raise ConfigurationError("immediate_refresh_delay_ms must not be negative")
        if self.shutdown_grace_ms < 0:
            raise ConfigurationError("shutdown_grace_ms must not be negative")
        if self.aggregation_deadline_ms >= self.refresh_interval_ms:
            raise ConfigurationError(
                "aggregation_deadline_ms must be less than refresh_interval_ms "
                f"({self.aggregation_deadline_ms} >= {self.refresh_interval_ms})"
            )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        providers: Mapping[str, CountProvider],
    ) -> NotificationConfig:
        """Combine environment-driven settings with the provider mapping."""
        return cls(
            counter_names=tuple(settings.counter_names),
            providers=dict(providers),
            refresh_interval_ms=settings.refresh_interval_ms,
            immediate_refresh_delay_ms=settings.immediate_refresh_delay_ms,
            aggregation_deadline_ms=settings.aggregation_deadline_ms,
            worker_pool_size=settings.worker_pool_size,
            shutdown_grace_ms=settings.shutdown_grace_ms,
            cache_ttl_ms=settings.cache_ttl_ms,
            cache_max_entries=settings.cache_max_entries,
            api_token=settings.api_token,
        )

    @property
    def refresh_interval_s(self) -> float:
        return self.refresh_interval_ms / 1000.0

    @property
    def immediate_refresh_delay_s(self) -> float:
        return self.immediate_refresh_delay_ms / 1000.0

    @property
    def aggregation_deadline_s(self) -> float:
        return self.aggregation_deadline_ms / 1000.0


def _validate_counter_names(counter_names: tuple[str, ...]) -> None:
    if not counter_names:
        raise ConfigurationError("At least one counter name is required")
    seen: set[str] = set()
    for name in counter_names:
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Counter names must be non-empty strings, got {name!r}")
        if name in seen:
            raise ConfigurationError(f"Counter name {name!r} is configured twice")
        seen.add(name)


def _validate_providers(
    counter_names: tuple[str, ...],
    providers: Mapping[str, CountProvider],
) -> None:
    missing = [name for name in counter_names if name not in providers]
    if missing:
        raise ConfigurationError(f"No provider configured for: {', '.join(missing)}")
    unknown = sorted(set(providers) - set(counter_names))
    if unknown:
        raise ConfigurationError(f"Providers configured for unknown counters: {', '.join(unknown)}")
    for name in counter_names:
        if not callable(providers[name]):
            raise ConfigurationError(f"Provider for {name!r} is not callable")


def _validate_positive(**values: int) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")
