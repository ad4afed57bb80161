r"""Retry executor driving a task through repeated attempts.

This module provides the ``RetryExecutor`` class which schedules the
attempts of one task according to a delay policy, chains the failures of
the attempts, and completes a ``RetryFuture`` with the final outcome.
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "execute"]

import logging
import threading
from concurrent.futures import InvalidStateError
from typing import TYPE_CHECKING, Generic, TypeVar

from reattempt.future import RetryFuture
from reattempt.scheduler.same_thread import SameThreadScheduler
from reattempt.utils.exceptions import add_suppressed
from reattempt.utils.structured_logging import (
    bind_execution_id,
    log_structured,
    new_execution_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.policy.base import BaseDelayPolicy
    from reattempt.scheduler.base import BaseScheduler, ScheduledHandle

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor(Generic[T]):
    """Executes a task with automatic retries.

    One executor drives exactly one execution of one task. It owns the
    run state of the execution: the number of attempts made, the failure
    of the last attempt and the handle of the pending attempt.

    The attempts are strictly sequential: the next one is scheduled by
    the previous one once it has failed, so two attempts of the same
    execution never run at the same time. The run state is still guarded
    by a lock because cancellation comes from another thread.

    Args:
        policy: The policy deciding the delay before each attempt.
        task: The task to execute. It takes no argument.
        scheduler: The scheduler running the attempts. Defaults to the
            shared ``SameThreadScheduler``.

    Attributes:
        future: The future completed with the outcome of the task.
        attempts: The number of failed attempts so far.
        execution_id: Id of the execution, bound to the logging context
            while an attempt runs.

    Example:
        ```pycon
        >>> from reattempt.executor import RetryExecutor
        >>> from reattempt.policy import continuously
        >>> outcomes = iter([ValueError("flaky"), ValueError("flaky"), "ok"])
        >>> def task():
        ...     outcome = next(outcomes)
        ...     if isinstance(outcome, Exception):
        ...         raise outcome
        ...     return outcome
        ...
        >>> executor = RetryExecutor(continuously().limit(5), task)
        >>> executor.start().result()
        'ok'
        >>> executor.attempts
        2

        ```
    """

    def __init__(
        self,
        policy: BaseDelayPolicy,
        task: Callable[[], T],
        scheduler: BaseScheduler | None = None,
    ) -> None:
        if not callable(task):
            msg = f"task must be callable, got {task!r}"
            raise TypeError(msg)
        self.policy = policy
        self.task = task
        self.scheduler: BaseScheduler = (
            scheduler if scheduler is not None else SameThreadScheduler.get()
        )
        self.future: RetryFuture[T] = RetryFuture(policy, self._interrupt)
        self.attempts = 0
        self.execution_id = new_execution_id()
        self._last_failure: Exception | None = None
        self._pending: ScheduledHandle | None = None
        self._pending_generation = 0
        self._generation = 0
        self._lock = threading.Lock()
        self._started = False

    def start(self) -> RetryFuture[T]:
        """Schedule the first attempt and return the future.

        The initial delay is ``policy.get_delay(0, None)``, clamped to be
        non-negative. Depending on the scheduler, the task may already
        have run (and even completed) when this method returns.

        Returns:
            The future of the execution.

        Raises:
            RuntimeError: If the executor was already started.
        """
        with self._lock:
            if self._started:
                msg = "a retry executor can only be started once"
                raise RuntimeError(msg)
            self._started = True
        initial_delay = max(self.policy.get_delay(0, None), 0.0)
        log_structured(
            logger,
            logging.DEBUG,
            f"Starting retry execution {self.execution_id} with {self.policy!r} "
            f"(initial delay {initial_delay:.3f}s)",
            delay=initial_delay,
        )
        self._schedule(initial_delay)
        return self.future

    def _schedule(self, delay: float) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
        self.future.set_delay(delay)
        handle = self.scheduler.schedule(self._attempt, delay)
        with self._lock:
            # The next attempt may already have scheduled its successor
            # (always the case with a synchronous scheduler)
            if generation > self._pending_generation:
                self._pending = handle
                self._pending_generation = generation

    def _interrupt(self, may_interrupt_if_running: bool) -> None:
        with self._lock:
            pending = self._pending
        if pending is not None:
            pending.cancel(may_interrupt_if_running)

    def _attempt(self) -> None:
        if self.future.done():
            logger.debug(f"Skipping attempt of {self.execution_id}: future already done")
            return
        with bind_execution_id(self.execution_id):
            try:
                value = self.task()
            except Exception as exc:
                self._on_failure(exc)
            except BaseException as exc:
                logger.debug(f"Attempt {self.attempts + 1} interrupted by {exc!r}")
                self._complete_exceptionally(exc)
                raise
            else:
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"Attempt {self.attempts + 1} succeeded",
                    attempt=self.attempts + 1,
                )
                self._complete(value)

    def _on_failure(self, exc: Exception) -> None:
        with self._lock:
            previous = self._last_failure
            if previous is not None and previous is not exc:
                add_suppressed(exc, previous)
            self.attempts += 1
            attempts = self.attempts
        try:
            delay = self.policy.get_delay(attempts, exc)
        except Exception as error:
            logger.exception(f"Delay policy {self.policy!r} failed, giving up")
            self._complete_exceptionally(error)
            raise
        if delay < 0:
            log_structured(
                logger,
                logging.DEBUG,
                f"Attempt {attempts} failed with {exc!r}, no more retries",
                attempt=attempts,
            )
            self._complete_exceptionally(exc)
            return
        log_structured(
            logger,
            logging.DEBUG,
            f"Attempt {attempts} failed with {exc!r}, retrying in {delay:.3f}s",
            attempt=attempts,
            delay=delay,
        )
        with self._lock:
            self._last_failure = exc
        if self.future.cancelled():
            return
        try:
            self._schedule(delay)
        except Exception as error:
            logger.debug(f"Could not schedule attempt {attempts + 1}: {error!r}")
            add_suppressed(error, exc)
            self._complete_exceptionally(error)

    def _complete(self, value: T) -> None:
        try:
            self.future.set_result(value)
        except InvalidStateError:
            logger.debug(f"Discarding result of {self.execution_id}: future already done")

    def _complete_exceptionally(self, exc: BaseException) -> None:
        try:
            self.future.set_exception(exc)
        except InvalidStateError:
            logger.debug(f"Discarding failure of {self.execution_id}: future already done")


def execute(
    task: Callable[[], T],
    policy: BaseDelayPolicy,
    scheduler: BaseScheduler | None = None,
) -> RetryFuture[T]:
    """Execute a task, retrying it according to a policy.

    Args:
        task: The task to execute. It takes no argument.
        policy: The policy deciding the delay before each attempt.
        scheduler: The scheduler running the attempts. Defaults to the
            shared ``SameThreadScheduler``.

    Returns:
        A future which provides the final outcome of the task.

    Example:
        ```pycon
        >>> from reattempt.executor import execute
        >>> from reattempt.policy import none
        >>> future = execute(lambda: 1 / 0, none())
        >>> future.exception()
        ZeroDivisionError('division by zero')

        ```
    """
    return RetryExecutor(policy, task, scheduler).start()
