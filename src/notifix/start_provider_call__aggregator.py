"""Run one provider call on a background daemon thread."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from threading import Thread

from notifix.ports.count_provider import CountProvider


def _start_provider_call(
    counter_name: str,
    provider: CountProvider,
    user: str,
    on_finish: Callable[[], None] | None = None,
) -> Future[int]:
    """Start ``provider(user)`` and return a future for its result.

    The thread is a daemon, so a provider that never returns cannot hold the
    process open. Cancelling the future before the thread starts skips the call.
    ``on_finish`` runs on the worker thread once the call is over, whether or
    not anyone is still waiting for it.
    """
    future: Future[int] = Future()

    def worker() -> None:
        try:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = provider(user)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                future.set_exception(exc)
            else:
                future.set_result(result)
        finally:
            if on_finish is not None:
                on_finish()

    Thread(target=worker, name=f"notifix-provider-{counter_name}", daemon=True).start()
    return future
