from __future__ import annotations

from concurrent.futures import CancelledError, Future

from notifix.errors import ProviderError
from notifix.utils import Logger, coerce_count

logger = Logger(__name__)


def _resolve_provider_value(
    counter_name: str,
    user: str,
    future: Future[int],
    abandon_reason: str,
) -> int | None:
    """Return the provider's count, or None after logging why there is none."""
    if not future.done():
        future.cancel()
        logger.error("Provider %s for %s abandoned: %s", counter_name, user, abandon_reason)
        return None
    try:
        return coerce_count(future.result())
    except CancelledError:
        logger.error("Provider %s for %s was cancelled", counter_name, user)
    except ProviderError as exc:
        logger.error("Provider %s for %s produced no count: %s", counter_name, user, exc)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.error(
            "Provider %s for %s failed: %s",
            counter_name,
            user,
            exc,
            exc_info=exc,
        )
    return None
