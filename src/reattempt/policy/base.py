r"""Abstract base class for delay policies."""

from __future__ import annotations

__all__ = ["STOP", "BaseDelayPolicy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.future import RetryFuture
    from reattempt.policy.decorators import FilteredPolicy, LimitedPolicy
    from reattempt.scheduler.base import BaseScheduler

T = TypeVar("T")

# Canonical "give up" delay. Any negative delay stops the retries.
STOP = -1.0


class BaseDelayPolicy(ABC):
    """Abstract base class for delay policies.

    A delay policy decides how long to wait before the next attempt of a
    task, given the number of attempts made so far and the failure of the
    last one. A negative delay means that no more attempts should be
    made.

    Policies are immutable. ``limit`` and ``when`` do not modify the
    policy they are called on, they return a new policy wrapping it.

    Example:
        ```pycon
        >>> from reattempt.policy import continuously
        >>> policy = continuously().limit(2).when(ValueError)
        >>> policy.get_delay(1, ValueError())
        0.0
        >>> policy.get_delay(1, KeyError())
        -1.0
        >>> policy.get_delay(3, ValueError())
        -1.0

        ```
    """

    @abstractmethod
    def get_delay(self, attempts: int, cause: BaseException | None) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempts: The number of attempts made so far. 0 means that the
                task has not run yet.
            cause: The failure of the last attempt, or None if the task
                has not run yet.

        Returns:
            The delay in seconds. A negative value means that no more
            attempts should be made.
        """

    def limit(self, max_attempts: int) -> LimitedPolicy:
        """Extend this policy to limit the number of attempts.

        The returned policy delegates to this one while
        ``attempts <= max_attempts``, so ``max_attempts + 1`` executions
        of the task are allowed in total.

        Args:
            max_attempts: The highest attempt index that may still be
                scheduled. Must be >= 0.

        Returns:
            A new policy wrapping this one.
        """
        from reattempt.policy.decorators import LimitedPolicy

        return LimitedPolicy(self, max_attempts)

    def when(
        self,
        condition: Callable[[BaseException | None], bool]
        | type[BaseException]
        | tuple[type[BaseException], ...],
    ) -> FilteredPolicy:
        """Extend this policy to only retry on some failures.

        Args:
            condition: Either a predicate receiving the failure (None
                before the first attempt) and returning True to keep
                retrying, or an exception type (or tuple of types) the
                failure must be an instance of.

        Returns:
            A new policy wrapping this one.

        Raises:
            TypeError: If condition is None or neither a callable nor an
                exception type.
        """
        from reattempt.policy.decorators import FilteredPolicy

        return FilteredPolicy(self, condition)

    def execute(
        self, task: Callable[[], T], scheduler: BaseScheduler | None = None
    ) -> RetryFuture[T]:
        """Execute a task, retrying it according to this policy.

        Args:
            task: The task to execute. It takes no argument.
            scheduler: The scheduler used to run the attempts. Defaults to
                the shared ``SameThreadScheduler``, which runs every
                attempt in the calling thread before returning.

        Returns:
            A future which provides the final outcome of the task.
        """
        from reattempt.executor import execute

        return execute(task, self, scheduler)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def _fields(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._fields()))
