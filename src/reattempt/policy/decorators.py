r"""Policies extending another policy.

The policies of this module wrap an existing policy and delegate to it
under some condition. They never modify the wrapped policy, so the same
base policy can be shared by several compositions.
"""

from __future__ import annotations

__all__ = ["FilteredPolicy", "LimitedPolicy"]

from typing import TYPE_CHECKING, Any

from reattempt.policy.base import STOP, BaseDelayPolicy
from reattempt.validation import validate_exception_types, validate_max_attempts

if TYPE_CHECKING:
    from collections.abc import Callable


class LimitedPolicy(BaseDelayPolicy):
    """Policy limiting the number of attempts of another policy.

    Delegates to the wrapped policy while ``attempts <= max_attempts``
    and stops afterwards. As attempts are counted from 0, a task failing
    forever is executed ``max_attempts + 1`` times.

    Args:
        policy: The policy to wrap.
        max_attempts: The highest attempt index that may still be
            scheduled. Must be >= 0.

    Example:
        ```pycon
        >>> from reattempt.policy import ContinuousPolicy, LimitedPolicy
        >>> policy = LimitedPolicy(ContinuousPolicy(), max_attempts=2)
        >>> [policy.get_delay(attempts, None) for attempts in range(4)]
        [0.0, 0.0, 0.0, -1.0]

        ```
    """

    def __init__(self, policy: BaseDelayPolicy, max_attempts: int) -> None:
        validate_max_attempts(max_attempts)
        self.policy = policy
        self.max_attempts = max_attempts

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:
        if attempts > self.max_attempts:
            return STOP
        return self.policy.get_delay(attempts, cause)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.policy!r}, max_attempts={self.max_attempts})"

    def _fields(self) -> tuple[Any, ...]:
        return (self.policy, self.max_attempts)


class FilteredPolicy(BaseDelayPolicy):
    """Policy retrying only the failures accepted by a condition.

    The condition is either a predicate or exception types:

    - A predicate receives the cause of the failure, which is None when
      the initial delay is computed before the first attempt, and must
      handle that case. It returns True to delegate to the wrapped policy
      and False to stop.
    - Exception types accept a failure if it is an instance of one of
      them. They also accept the None cause of the initial delay, so the
      wrapped policy still decides how long to wait before the first
      attempt.

    Args:
        policy: The policy to wrap.
        condition: A predicate, an exception type or a tuple of
            exception types.

    Raises:
        TypeError: If condition is None or neither a callable nor
            exception types.

    Example:
        ```pycon
        >>> from reattempt.policy import ContinuousPolicy, FilteredPolicy
        >>> policy = FilteredPolicy(ContinuousPolicy(), (TimeoutError, ConnectionError))
        >>> policy.get_delay(1, TimeoutError())
        0.0
        >>> policy.get_delay(1, ValueError())
        -1.0

        ```
    """

    def __init__(
        self,
        policy: BaseDelayPolicy,
        condition: Callable[[BaseException | None], bool]
        | type[BaseException]
        | tuple[type[BaseException], ...],
    ) -> None:
        self.policy = policy
        self.exception_types: tuple[type[BaseException], ...] | None = None
        if isinstance(condition, (type, tuple)):
            self.exception_types = validate_exception_types(condition)
            self.predicate = self._is_instance
        elif callable(condition):
            self.predicate = condition
        else:
            msg = f"condition must be a predicate or exception types, got {condition!r}"
            raise TypeError(msg)

    def _is_instance(self, cause: BaseException | None) -> bool:
        return cause is None or isinstance(cause, self.exception_types)

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:
        if not self.predicate(cause):
            return STOP
        return self.policy.get_delay(attempts, cause)

    def __repr__(self) -> str:
        if self.exception_types is not None:
            condition = ", ".join(t.__name__ for t in self.exception_types)
        else:
            condition = getattr(self.predicate, "__qualname__", repr(self.predicate))
        return f"{type(self).__name__}({self.policy!r}, when={condition})"

    def _fields(self) -> tuple[Any, ...]:
        if self.exception_types is not None:
            return (self.policy, self.exception_types)
        return (self.policy, self.predicate)
