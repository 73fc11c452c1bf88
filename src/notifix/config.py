from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from notifix.read_env__config import _read_endpoints, _read_float, _read_int, _read_names

DEFAULT_COUNTER_NAMES = (
    "alfrescoCount",
    "usdIssuesCount",
    "randomCount",
    "emailCount",
    "invoicesCount",
)
DEFAULT_REFRESH_INTERVAL_MS = 10_000
DEFAULT_IMMEDIATE_REFRESH_DELAY_MS = 10
DEFAULT_AGGREGATION_DEADLINE_MS = 5_000
DEFAULT_WORKER_POOL_SIZE = 10
DEFAULT_SHUTDOWN_GRACE_MS = 2_000
DEFAULT_CACHE_TTL_MS = 600_000
DEFAULT_CACHE_MAX_ENTRIES = 10_000


@dataclass(slots=True)
class HttpProviderSettings:
    """Settings for counters served by a JSON endpoint."""

    endpoints: dict[str, str] = field(
        default_factory=lambda: _read_endpoints("NOTIFIX_COUNTER_ENDPOINTS")
    )
    timeout_s: float = field(default_factory=lambda: _read_float("NOTIFIX_HTTP_TIMEOUT_S", 3.0))
    max_attempts: int = field(default_factory=lambda: _read_int("NOTIFIX_HTTP_MAX_ATTEMPTS", 2))
    api_key: str | None = field(default_factory=lambda: os.getenv("NOTIFIX_HTTP_API_KEY"))


@dataclass(slots=True)
class Settings:
    """Central configuration for aggregation, refresh scheduling and caching."""

    api_token: str = field(
        default_factory=lambda: os.getenv("NOTIFIX_API_TOKEN", "local-dev-token")
    )
    counter_names: tuple[str, ...] = field(
        default_factory=lambda: _read_names("NOTIFIX_COUNTER_NAMES", DEFAULT_COUNTER_NAMES)
    )
    refresh_interval_ms: int = field(
        default_factory=lambda: _read_int(
            "NOTIFIX_REFRESH_INTERVAL_MS", DEFAULT_REFRESH_INTERVAL_MS
        )
    )
    immediate_refresh_delay_ms: int = field(
        default_factory=lambda: _read_int(
            "NOTIFIX_IMMEDIATE_REFRESH_DELAY_MS", DEFAULT_IMMEDIATE_REFRESH_DELAY_MS
        )
    )
    aggregation_deadline_ms: int = field(
        default_factory=lambda: _read_int(
            "NOTIFIX_AGGREGATION_DEADLINE_MS", DEFAULT_AGGREGATION_DEADLINE_MS
        )
    )
    worker_pool_size: int = field(
        default_factory=lambda: _read_int("NOTIFIX_WORKER_POOL_SIZE", DEFAULT_WORKER_POOL_SIZE)
    )
    shutdown_grace_ms: int = field(
        default_factory=lambda: _read_int("NOTIFIX_SHUTDOWN_GRACE_MS", DEFAULT_SHUTDOWN_GRACE_MS)
    )
    cache_ttl_ms: int = field(
        default_factory=lambda: _read_int("NOTIFIX_CACHE_TTL_MS", DEFAULT_CACHE_TTL_MS)
    )
    cache_max_entries: int = field(
        default_factory=lambda: _read_int("NOTIFIX_CACHE_MAX_ENTRIES", DEFAULT_CACHE_MAX_ENTRIES)
    )
    http: HttpProviderSettings = field(default_factory=HttpProviderSettings)


def get_settings(**overrides: object) -> Settings:
    """Load ``.env`` and build settings, applying keyword overrides last."""
    load_dotenv()
    settings = Settings()
    for name, value in overrides.items():
        if not hasattr(settings, name):
            raise TypeError(f"get_settings() got an unexpected keyword argument '{name}'")
        setattr(settings, name, value)
    return settings

