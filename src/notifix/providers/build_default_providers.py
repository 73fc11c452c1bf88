"""Default provider wiring from settings."""

from __future__ import annotations

from notifix.config import Settings
from notifix.ports.count_provider import CountProvider
from notifix.providers.http_count_provider import HttpCountProvider
from notifix.providers.random_count_provider import random_count, unavailable, userless
from notifix.utils import Logger

logger = Logger(__name__)

RANDOM_COUNTER_NAME = "randomCount"


def build_default_providers(settings: Settings) -> dict[str, CountProvider]:
    """Build one provider per configured counter.

    Counters with an endpoint get an ``HttpCountProvider``; ``randomCount``
    gets the synthetic source; anything else always reports no value.
    """
    providers: dict[str, CountProvider] = {}
    for name in settings.counter_names:
        url_template = settings.http.endpoints.get(name)
        if url_template:
            providers[name] = HttpCountProvider(
                url_template,
                timeout_s=settings.http.timeout_s,
                max_attempts=settings.http.max_attempts,
                api_key=settings.http.api_key,
                budget_s=settings.aggregation_deadline_ms / 1000.0,
            )
        elif name == RANDOM_COUNTER_NAME:
            providers[name] = userless(random_count)
        else:
            logger.warning("No endpoint configured for %s; it will report no value", name)
            providers[name] = unavailable(name)
    return providers
