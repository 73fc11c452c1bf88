"""Count provider backed by a JSON endpoint."""

from __future__ import annotations

import logging
import time as time_module
from urllib.parse import quote

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

from notifix.errors import ProviderError
from notifix.utils import Logger, coerce_count

log = Logger(__name__)

# Attempts are not started with less time than this left in the budget.
_MIN_ATTEMPT_S = 0.05


class HttpCountProvider:
    """Fetch a user's count from ``url_template`` formatted with ``{user}``.

    The endpoint may answer with a bare integer or an object carrying a
    ``count`` field. Connection errors, timeouts and 5xx responses are
    retried while ``budget_s`` allows; each attempt's timeout is capped by
    what is left of it, so a call never outlives the aggregation waiting on it.
    Without an injected ``session`` every request goes through ``requests.get``,
    so concurrent calls share no connection state.
    """

    def __init__(
        self,
        url_template: str,
        timeout_s: float = 3.0,
        max_attempts: int = 2,
        api_key: str | None = None,
        budget_s: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.url_template = url_template
        self.timeout_s = timeout_s
        self.api_key = api_key
        self.budget_s = budget_s
        self._get = session.get if session is not None else requests.get
        stop = stop_after_attempt(max(max_attempts, 1))
        if budget_s is not None:
            stop = stop | stop_after_delay(budget_s)
        self._fetch = retry(
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout, _ServerError)),
            stop=stop,
            wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
            reraise=True,
            before_sleep=before_sleep_log(log, logging.WARNING),
        )(self._fetch_once)

    def __call__(self, user: str) -> int:
        expires_at = None
        if self.budget_s is not None:
            expires_at = time_module.monotonic() + self.budget_s
        return coerce_count(_extract_count(self._fetch(user, expires_at)))

    def url_for(self, user: str) -> str:
        return self.url_template.format(user=quote(user, safe=""))

    def attempt_timeout(self, expires_at: float | None) -> float:
        """Return the timeout for the next attempt, bounded by the remaining budget."""
        if expires_at is None:
            return self.timeout_s
        remaining = expires_at - time_module.monotonic()
        if remaining < _MIN_ATTEMPT_S:
            raise ProviderError(f"Time budget of {self.budget_s}s spent")
        return min(self.timeout_s, remaining)

    def _fetch_once(self, user: str, expires_at: float | None) -> object:
        timeout = self.attempt_timeout(expires_at)
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        response = self._get(self.url_for(user), headers=headers, timeout=timeout)
        if response.status_code >= 500:
            raise _ServerError(f"{response.status_code} from {response.url}", response=response)
        response.raise_for_status()
        return response.json()


class _ServerError(requests.HTTPError):
    """Retryable server-side failure."""


def _extract_count(payload: object) -> object:
    if isinstance(payload, dict):
        if "count" not in payload:
            raise ProviderError("Count payload has no 'count' field")
        return payload["count"]
    return payload
