r"""Delay policies deciding when a failed task is retried.

This package provides the built-in delay policies, the decorators used
to compose them, and factory functions for the common cases.

Example:
    ```pycon
    >>> from reattempt.policy import with_exponential_backoff
    >>> from reattempt.units import TimeUnit
    >>> policy = with_exponential_backoff(100, TimeUnit.MILLISECONDS).limit(5).when(OSError)
    >>> policy.get_delay(2, OSError())
    0.4

    ```
"""

from __future__ import annotations

__all__ = [
    "STOP",
    "BaseDelayPolicy",
    "ContinuousPolicy",
    "ExponentialBackoffPolicy",
    "FilteredPolicy",
    "FixedDelayPolicy",
    "FunctionPolicy",
    "LimitedPolicy",
    "LinearBackoffPolicy",
    "NoRetryPolicy",
    "continuously",
    "every",
    "from_function",
    "none",
    "with_exponential_backoff",
    "with_linear_backoff",
]

from typing import TYPE_CHECKING

from reattempt.policy.base import STOP, BaseDelayPolicy
from reattempt.policy.continuous import ContinuousPolicy
from reattempt.policy.decorators import FilteredPolicy, LimitedPolicy
from reattempt.policy.exponential import ExponentialBackoffPolicy
from reattempt.policy.fixed import FixedDelayPolicy
from reattempt.policy.function import FunctionPolicy
from reattempt.policy.linear import LinearBackoffPolicy
from reattempt.policy.none import NoRetryPolicy
from reattempt.units import TimeUnit

if TYPE_CHECKING:
    from collections.abc import Callable


def none() -> NoRetryPolicy:
    """Return a policy which runs the task once and does not retry."""
    return NoRetryPolicy()


def continuously() -> ContinuousPolicy:
    """Return a policy which retries immediately, without limit."""
    return ContinuousPolicy()


def every(period: float, unit: TimeUnit = TimeUnit.SECONDS) -> FixedDelayPolicy:
    """Return a policy which retries periodically.

    Args:
        period: The length of the period to wait between attempts.
            Must be non-negative.
        unit: The unit of the period (default: seconds).
    """
    return FixedDelayPolicy(period, unit)


def with_linear_backoff(period: float, unit: TimeUnit = TimeUnit.SECONDS) -> LinearBackoffPolicy:
    """Return a policy whose delay grows by one period after each attempt.

    Args:
        period: The initial increment of the delay. Must be non-negative.
        unit: The unit of the period (default: seconds).
    """
    return LinearBackoffPolicy(period, unit)


def with_exponential_backoff(
    period: float, unit: TimeUnit = TimeUnit.SECONDS
) -> ExponentialBackoffPolicy:
    """Return a policy whose delay doubles after each attempt.

    Args:
        period: The length of the first delay. Must be non-negative.
        unit: The unit of the period (default: seconds).
    """
    return ExponentialBackoffPolicy(period, unit)


def from_function(func: Callable[[int, BaseException | None], float]) -> FunctionPolicy:
    """Return a policy computing its delays with the given function."""
    return FunctionPolicy(func)
