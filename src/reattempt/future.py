r"""Completion handle of a retry execution.

This module provides the ``RetryFuture`` class returned by
``BaseDelayPolicy.execute``. It is a ``concurrent.futures.Future`` which
also reports the policy in effect and the delay until the next attempt.
"""

from __future__ import annotations

__all__ = ["RetryFuture"]

import asyncio
import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.units import TimeUnit

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from reattempt.policy.base import BaseDelayPolicy

T = TypeVar("T")
R = TypeVar("R")

logger: logging.Logger = logging.getLogger(__name__)


class RetryFuture(Future[T]):
    """Cancellable, awaitable handle on the final outcome of a task.

    The future transitions exactly once from pending to completed with
    a value, failed, or cancelled; the outcome never changes afterwards.
    The usual ``concurrent.futures.Future`` API is available
    (``result``, ``exception``, ``done``, ``add_done_callback``...), the
    future can be awaited from asyncio, and it can be passed to
    ``concurrent.futures.wait`` or ``as_completed``.

    The ``delay`` is advisory: it is the delay requested before the next
    attempt when that attempt was scheduled. Futures compare by delay, so
    pending retries can be ordered with ``sorted`` or ``heapq``.

    Args:
        policy: The policy of the execution.
        interrupt: Optional function cancelling the pending attempt. It
            receives the ``may_interrupt_if_running`` flag of ``cancel``.

    Example:
        ```pycon
        >>> from reattempt.policy import none
        >>> policy = none()
        >>> future = policy.execute(lambda: 42)
        >>> future.result()
        42
        >>> future.policy is policy
        True
        >>> future.cancel()  # Already complete
        False

        ```
    """

    def __init__(
        self,
        policy: BaseDelayPolicy,
        interrupt: Callable[[bool], object] | None = None,
    ) -> None:
        super().__init__()
        self._policy = policy
        self._interrupt = interrupt
        self._delay = 0.0

    @property
    def policy(self) -> BaseDelayPolicy:
        """The policy given to ``execute``, as it was given."""
        return self._policy

    @property
    def delay(self) -> float:
        """The delay in seconds requested before the next attempt."""
        return self._delay

    def get_delay(self, unit: TimeUnit = TimeUnit.SECONDS) -> float:
        """Return the delay before the next attempt in the given unit.

        Args:
            unit: The unit of the returned delay (default: seconds).

        Returns:
            The advisory delay.
        """
        return unit.from_seconds(self._delay)

    def set_delay(self, delay: float, unit: TimeUnit = TimeUnit.SECONDS) -> None:
        """Set the delay reported by this future.

        Args:
            delay: The delay before the next attempt. Must be >= 0.
            unit: The unit of the delay (default: seconds).
        """
        self._delay = unit.to_seconds(delay)

    def cancel(self, may_interrupt_if_running: bool = False) -> bool:
        """Cancel the execution.

        The future is marked cancelled first, so an attempt starting
        concurrently does nothing; then the pending attempt is cancelled.
        An attempt already running is not stopped: Python threads cannot
        be interrupted, and its outcome is discarded.

        Args:
            may_interrupt_if_running: Whether the scheduler may try to
                interrupt a running attempt.

        Returns:
            True if the future is cancelled, False if it was already
            complete.
        """
        if self.cancelled():
            return True
        cancelled = super().cancel()
        if cancelled:
            logger.debug(f"Retry execution of {self._policy!r} cancelled")
            if self._interrupt is not None:
                self._interrupt(may_interrupt_if_running)
        return cancelled

    def then(self, fn: Callable[[T], R]) -> Future[R]:
        """Chain a function applied to the result of this future.

        Failures and cancellation of this future propagate to the returned
        future without calling ``fn``. Cancelling the returned future
        cancels this one.

        Args:
            fn: The function applied to the result.

        Returns:
            A future holding the result of ``fn``, or its failure.

        Example:
            ```pycon
            >>> from reattempt.policy import none
            >>> none().execute(lambda: 20).then(lambda x: x + 22).result()
            42

            ```
        """
        derived: Future[R] = Future()

        def propagate(source: Future[T]) -> None:
            if source.cancelled():
                derived.cancel()
                return
            exc = source.exception()
            if exc is not None:
                if derived.set_running_or_notify_cancel():
                    derived.set_exception(exc)
                return
            if not derived.set_running_or_notify_cancel():
                return
            try:
                value = fn(source.result())
            except Exception as error:
                derived.set_exception(error)
            else:
                derived.set_result(value)

        def cancel_upstream(future: Future[R]) -> None:
            if future.cancelled():
                self.cancel()

        derived.add_done_callback(cancel_upstream)
        self.add_done_callback(propagate)
        return derived

    def __await__(self) -> Generator[Any, None, T]:
        return asyncio.wrap_future(self).__await__()

    def __lt__(self, other: RetryFuture[Any]) -> bool:
        if not isinstance(other, RetryFuture):
            return NotImplemented
        return self._delay < other._delay

    def __le__(self, other: RetryFuture[Any]) -> bool:
        if not isinstance(other, RetryFuture):
            return NotImplemented
        return self._delay <= other._delay

    def __gt__(self, other: RetryFuture[Any]) -> bool:
        if not isinstance(other, RetryFuture):
            return NotImplemented
        return self._delay > other._delay

    def __ge__(self, other: RetryFuture[Any]) -> bool:
        if not isinstance(other, RetryFuture):
            return NotImplemented
        return self._delay >= other._delay

    def __repr__(self) -> str:
        state = super().__repr__()[1:-1]
        return f"<{state} policy={self._policy!r} delay={self._delay}>"
