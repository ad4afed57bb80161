r"""Scheduler running work in the calling thread."""

from __future__ import annotations

__all__ = ["SameThreadScheduler"]

import logging
import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from reattempt.scheduler.base import BaseScheduler, ScheduledHandle, run_work

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class SameThreadScheduler(BaseScheduler):
    """Scheduler which runs work synchronously in the calling thread.

    ``schedule`` sleeps for the requested delay, then runs the work
    before returning. This is the default scheduler: it needs no setup
    and owns no thread, so there is nothing to shut down. With this
    scheduler, a retry execution is complete when ``execute`` returns.

    Work which schedules itself again while running (a retry scheduled
    by the failed attempt) is queued after the delay, and run by the
    ``schedule`` call that started it once the current run returns. Long
    retry sequences therefore do not grow the call stack, and the handle
    of queued work can still be cancelled. Any other work scheduled from
    running work, such as a nested retry execution, runs inline like a
    top-level call.

    Errors raised while sleeping propagate to the caller of ``schedule``.

    Example:
        ```pycon
        >>> from reattempt.scheduler import SameThreadScheduler
        >>> calls = []
        >>> handle = SameThreadScheduler.get().schedule(lambda: calls.append(1), 0)
        >>> calls, handle.done()
        ([1], True)

        ```
    """

    _instance: ClassVar[SameThreadScheduler | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._local = threading.local()

    @classmethod
    def get(cls) -> SameThreadScheduler:
        """Return the shared instance of the scheduler."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def schedule(self, work: Callable[[], object], delay: float) -> ScheduledHandle:
        if delay > 0:
            logger.debug(f"Sleeping {delay:.3f}s before running work")
            time.sleep(delay)
        future: Future[None] = Future()
        frames: list[tuple[Callable[[], object], deque[Future[None]]]] | None = getattr(
            self._local, "frames", None
        )
        if frames is None:
            frames = []
            self._local.frames = frames
        if frames and frames[-1][0] == work:
            # Work rescheduling itself, run once it returns
            frames[-1][1].append(future)
            return ScheduledHandle(future)

        queue: deque[Future[None]] = deque([future])
        frames.append((work, queue))
        try:
            while queue:
                run_work(queue.popleft(), work)
        finally:
            frames.pop()
        return ScheduledHandle(future)

    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Future[T]:
        """Run a function immediately and capture its outcome.

        Args:
            fn: The function to call.
            *args: Positional arguments passed to fn.
            **kwargs: Keyword arguments passed to fn.

        Returns:
            A future which is already done, holding either the return
            value of fn or the exception it raised.
        """
        future: Future[T] = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
