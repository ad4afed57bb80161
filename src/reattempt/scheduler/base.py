r"""Base classes of the scheduling capability.

A scheduler runs a piece of work once, no sooner than a given delay, and
returns a handle which can cancel the work before it starts. The retry
engine only relies on this contract, so any timer facility can be
plugged in by implementing ``BaseScheduler``.
"""

from __future__ import annotations

__all__ = ["BaseScheduler", "ScheduledHandle", "run_work"]

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def run_work(future: Future[None], work: Callable[[], object]) -> None:
    """Run scheduled work and record its outcome in a future.

    Nothing is run if the future was cancelled first. A failure of the
    work is stored in the future rather than raised, so it is reported
    through the handle like with any other executor.

    Args:
        future: The future backing the handle of the work.
        work: The work to run.
    """
    if not future.set_running_or_notify_cancel():
        logger.debug("Skipping cancelled scheduled work")
        return
    try:
        work()
    except Exception as exc:
        logger.debug(f"Scheduled work failed: {exc!r}")
        future.set_exception(exc)
    else:
        future.set_result(None)


class ScheduledHandle:
    """Handle of a piece of scheduled work.

    The outcome of the work is tracked with a
    ``concurrent.futures.Future``. Cancelling the handle prevents a
    not-yet-started run; a run in progress cannot be stopped.

    Args:
        future: The future recording the outcome of the work.
        on_cancel: Optional function releasing the underlying timer when
            the handle is cancelled.
    """

    def __init__(
        self, future: Future[None], on_cancel: Callable[[], object] | None = None
    ) -> None:
        self._future = future
        self._on_cancel = on_cancel

    def cancel(self, may_interrupt_if_running: bool = False) -> bool:  # noqa: ARG002
        """Cancel the work if it has not started yet.

        Args:
            may_interrupt_if_running: Whether a running work may be
                interrupted. Threads cannot be interrupted, so this is
                accepted for compatibility only.

        Returns:
            True if the work will not run, False if it already ran or is
            running.
        """
        cancelled = self._future.cancel()
        if cancelled and self._on_cancel is not None:
            self._on_cancel()
        return cancelled

    def cancelled(self) -> bool:
        """Return True if the work was cancelled before running."""
        return self._future.cancelled()

    def done(self) -> bool:
        """Return True if the work ran or was cancelled."""
        return self._future.done()

    def result(self, timeout: float | None = None) -> None:
        """Wait for the work to run.

        Args:
            timeout: Maximum number of seconds to wait, None to wait
                forever.

        Raises:
            concurrent.futures.CancelledError: If the work was cancelled.
            TimeoutError: If the work did not complete in time.
            Exception: The failure of the work, if any.
        """
        self._future.result(timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._future!r})"


class BaseScheduler(ABC):
    """Abstract base class for schedulers.

    Implementations must be safe to share between unrelated retry
    executions: ``schedule`` may be called from several threads at once.
    """

    @abstractmethod
    def schedule(self, work: Callable[[], object], delay: float) -> ScheduledHandle:
        """Run work once, no sooner than delay seconds from now.

        Args:
            work: The work to run. It takes no argument.
            delay: The minimum number of seconds to wait. Must be >= 0.

        Returns:
            A handle to cancel the work before it starts.
        """
