r"""Scheduler running work on a pool of threads."""

from __future__ import annotations

__all__ = ["ThreadPoolScheduler"]

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from reattempt.scheduler.base import BaseScheduler, ScheduledHandle, run_work

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger: logging.Logger = logging.getLogger(__name__)


class ThreadPoolScheduler(BaseScheduler):
    """Scheduler running work on a ``ThreadPoolExecutor``.

    Work with a positive delay is held by a ``threading.Timer`` and handed
    to the pool when the timer fires; work without delay is submitted
    directly. Pool threads are only busy while work runs, never while it
    waits.

    Thread-safe: a single scheduler can serve any number of concurrent
    retry executions.

    Args:
        max_workers: Maximum number of pool threads. Defaults to the
            ``ThreadPoolExecutor`` default.
        thread_name_prefix: Prefix of the pool thread names.

    Example:
        ```pycon
        >>> from reattempt.policy import continuously
        >>> from reattempt.scheduler import ThreadPoolScheduler
        >>> with ThreadPoolScheduler(max_workers=2) as scheduler:
        ...     future = continuously().limit(3).execute(lambda: 42, scheduler)
        ...     future.result(timeout=5)
        ...
        42

        ```
    """

    def __init__(
        self, max_workers: int | None = None, thread_name_prefix: str = "reattempt"
    ) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()
        self._shutdown = False

    def schedule(self, work: Callable[[], object], delay: float) -> ScheduledHandle:
        future: Future[None] = Future()
        if delay <= 0:
            with self._lock:
                self._check_running()
            self._executor.submit(run_work, future, work)
            return ScheduledHandle(future)

        timer: threading.Timer

        def fire() -> None:
            with self._lock:
                self._timers.discard(timer)
            self._submit(future, work)

        def release() -> None:
            timer.cancel()
            with self._lock:
                self._timers.discard(timer)

        timer = threading.Timer(delay, fire)
        timer.daemon = True
        with self._lock:
            self._check_running()
            self._timers.add(timer)
        logger.debug(f"Scheduling work in {delay:.3f}s")
        timer.start()
        return ScheduledHandle(future, on_cancel=release)

    def _check_running(self) -> None:
        if self._shutdown:
            msg = "cannot schedule new work after shutdown"
            raise RuntimeError(msg)

    def _submit(self, future: Future[None], work: Callable[[], object]) -> None:
        try:
            self._executor.submit(run_work, future, work)
        except RuntimeError:
            # The pool was shut down while the timer was running
            logger.debug("Dropping scheduled work after shutdown")
            future.cancel()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the scheduler.

        Pending timers are cancelled, so work that has not started yet
        never runs. Futures of retry executions depending on it stay
        pending; cancel them first if callers may wait on them.

        Args:
            wait: Whether to wait for running work to complete.
        """
        with self._lock:
            self._shutdown = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        logger.debug(f"Shutting down scheduler, {len(timers)} pending timer(s) cancelled")
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> ThreadPoolScheduler:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)
