r"""Scheduler running work on an asyncio event loop."""

from __future__ import annotations

__all__ = ["EventLoopScheduler"]

import asyncio
import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING

from reattempt.scheduler.base import BaseScheduler, ScheduledHandle, run_work

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class EventLoopScheduler(BaseScheduler):
    """Scheduler running work as callbacks of an asyncio event loop.

    Delays are handled by ``loop.call_later``, so waiting between
    attempts never blocks the loop. The work itself runs on the loop
    thread and should be short; use a ``ThreadPoolScheduler`` for
    blocking tasks.

    ``schedule`` must be called from the thread running the loop, which
    is always the case for retries since they are scheduled from the
    previous attempt. Handles may be cancelled from any thread.

    Args:
        loop: The event loop to use. Defaults to the running loop.

    Raises:
        RuntimeError: If no loop is given and none is running.

    Example:
        ```pycon
        >>> import asyncio
        >>> from reattempt.policy import every
        >>> from reattempt.scheduler import EventLoopScheduler
        >>> async def main():
        ...     scheduler = EventLoopScheduler()
        ...     return await every(0.01).limit(3).execute(lambda: "done", scheduler)
        ...
        >>> asyncio.run(main())
        'done'

        ```
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop if loop is not None else asyncio.get_running_loop()

    def schedule(self, work: Callable[[], object], delay: float) -> ScheduledHandle:
        future: Future[None] = Future()
        if delay > 0:
            logger.debug(f"Scheduling work in {delay:.3f}s on {self.loop!r}")
            timer = self.loop.call_later(delay, run_work, future, work)
        else:
            timer = self.loop.call_soon(run_work, future, work)

        def release() -> None:
            if self._in_loop_thread():
                timer.cancel()
            elif not self.loop.is_closed():
                self.loop.call_soon_threadsafe(timer.cancel)

        return ScheduledHandle(future, on_cancel=release)

    def _in_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self.loop
        except RuntimeError:
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(loop={self.loop!r})"
