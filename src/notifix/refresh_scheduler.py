"""Background refresh scheduling with per-user coalescing."""

from __future__ import annotations

import heapq
import time as time_module
from collections.abc import Callable
from threading import Condition, Event, Thread

from notifix.RefreshState import RefreshState
from notifix.utils import Logger

logger = Logger(__name__)

RefreshJob = Callable[[str, Event], object]


class RefreshScheduler:  # pylint: disable=too-many-instance-attributes
    """Run refresh jobs on a fixed pool of daemon worker threads.

    Each user is in one of the ``RefreshState`` states. A request for a user
    that is already queued, or already running with a follow-up queued, is
    coalesced; a request for a running user queues exactly one follow-up.
    A queued request moves earlier when a later call asks for a shorter delay.
    """

    def __init__(
        self,
        refresh: RefreshJob,
        pool_size: int = 10,
        shutdown_grace_s: float = 2.0,
    ) -> None:
        if pool_size <= 0:
            raise ValueError("pool_size must be positive")
        self._refresh = refresh
        self._shutdown_grace_s = shutdown_grace_s
        self._condition = Condition()
        self._heap: list[tuple[float, int, str]] = []
        self._sequence = 0
        self._states: dict[str, RefreshState] = {}
        self._queued_due: dict[str, float] = {}
        self._requeue_due: dict[str, float] = {}
        self._running = 0
        self._accepting = True
        self._cancel_event = Event()
        self._workers = [
            Thread(target=self._work, name=f"notifix-refresh-{index}", daemon=True)
            for index in range(pool_size)
        ]
        for worker in self._workers:
            worker.start()
        logger.debug("Started %s refresh workers", pool_size)

    def schedule_refresh(self, user: str, delay_s: float = 0.0) -> bool:
        """Queue a refresh for ``user`` no sooner than ``delay_s`` from now.

        Returns True when a new refresh was queued, False when the request was
        coalesced into pending work or the scheduler is shut down.
        """
        due = time_module.monotonic() + max(delay_s, 0.0)
        with self._condition:
            if not self._accepting:
                logger.debug("Ignoring refresh for %s after shutdown", user)
                return False
            state = self._states.get(user, RefreshState.IDLE)
            if state is RefreshState.IDLE:
                self._states[user] = RefreshState.QUEUED
                self._push(user, due)
                return True
            if state is RefreshState.QUEUED:
                if due < self._queued_due[user]:
                    self._push(user, due)
                return False
            if state is RefreshState.RUNNING:
                self._states[user] = RefreshState.RUNNING_REQUEUED
                self._requeue_due[user] = due
                return True
            self._requeue_due[user] = min(self._requeue_due[user], due)
            return False

    def state_of(self, user: str) -> RefreshState:
        with self._condition:
            return self._states.get(user, RefreshState.IDLE)

    @property
    def running_count(self) -> int:
        with self._condition:
            return self._running

    @property
    def is_shut_down(self) -> bool:
        with self._condition:
            return not self._accepting

    def shutdown(self) -> None:
        """Drop queued work, cancel in-flight refreshes and wait out the grace period."""
        with self._condition:
            if not self._accepting:
                return
            self._accepting = False
            dropped = len(self._queued_due) + len(self._requeue_due)
            self._heap.clear()
            self._queued_due.clear()
            self._requeue_due.clear()
            self._states = {
                user: RefreshState.RUNNING
                for user, state in self._states.items()
                if state in (RefreshState.RUNNING, RefreshState.RUNNING_REQUEUED)
            }
            self._cancel_event.set()
            self._condition.notify_all()
            if dropped:
                logger.info("Dropped %s queued refreshes on shutdown", dropped)
            grace_ends = time_module.monotonic() + self._shutdown_grace_s
            while self._running:
                remaining = grace_ends - time_module.monotonic()
                if remaining <= 0:
                    logger.warning(
                        "Abandoning %s in-flight refreshes after %.1fs grace period",
                        self._running,
                        self._shutdown_grace_s,
                    )
                    break
                self._condition.wait(remaining)
        logger.debug("Refresh scheduler shut down")

    def _push(self, user: str, due: float) -> None:
        self._sequence += 1
        heapq.heappush(self._heap, (due, self._sequence, user))
        self._queued_due[user] = due
        self._condition.notify()

    def _work(self) -> None:
        while True:
            with self._condition:
                user = self._take_due_user()
            if user is None:
                return
            try:
                self._refresh(user, self._cancel_event)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Refresh failed for %s", user)
            finally:
                self._finish(user)

    def _take_due_user(self) -> str | None:
        while True:
            if not self._accepting:
                return None
            if not self._heap:
                self._condition.wait()
                continue
            due, _, user = self._heap[0]
            if self._queued_due.get(user) != due:
                heapq.heappop(self._heap)
                continue
            remaining = due - time_module.monotonic()
            if remaining > 0:
                self._condition.wait(remaining)
                continue
            heapq.heappop(self._heap)
            del self._queued_due[user]
            self._states[user] = RefreshState.RUNNING
            self._running += 1
            return user

    def _finish(self, user: str) -> None:
        with self._condition:
            self._running -= 1
            state = self._states.pop(user, RefreshState.IDLE)
            if state is RefreshState.RUNNING_REQUEUED and self._accepting:
                self._states[user] = RefreshState.QUEUED
                self._push(user, self._requeue_due.pop(user))
            self._condition.notify_all()
