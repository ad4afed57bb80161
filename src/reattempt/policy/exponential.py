r"""Exponential backoff policy."""

from __future__ import annotations

__all__ = ["MAX_EXPONENT", "ExponentialBackoffPolicy"]

from typing import Any

from reattempt.policy.base import STOP, BaseDelayPolicy
from reattempt.units import TimeUnit
from reattempt.validation import validate_period

# Largest attempt count for which a delay is computed; retries stop after it
MAX_EXPONENT = 62


class ExponentialBackoffPolicy(BaseDelayPolicy):
    """Exponential backoff policy.

    Calculates delay as: period * (2 ** attempts). The delay doubles
    after each attempt. Once more than ``MAX_EXPONENT`` attempts have been
    made the policy stops retrying, whatever the failure.

    Args:
        period: The delay before the first attempt. Must be non-negative.
        unit: The unit of the period (default: seconds).

    Example:
        ```pycon
        >>> from reattempt.policy import ExponentialBackoffPolicy
        >>> policy = ExponentialBackoffPolicy(0.5)
        >>> policy.get_delay(0, None)
        0.5
        >>> policy.get_delay(1, RuntimeError())
        1.0
        >>> policy.get_delay(3, RuntimeError())
        4.0
        >>> policy.get_delay(63, RuntimeError())
        -1.0

        ```
    """

    def __init__(self, period: float, unit: TimeUnit = TimeUnit.SECONDS) -> None:
        validate_period(period)
        self.period = unit.to_seconds(period)

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:  # noqa: ARG002
        """Calculate exponential backoff delay.

        Args:
            attempts: The number of attempts made so far.
            cause: The failure of the last attempt (unused).

        Returns:
            The calculated delay: period * (2 ** attempts), or STOP once
            attempts exceeds MAX_EXPONENT.
        """
        if attempts > MAX_EXPONENT:
            return STOP
        return (1 << attempts) * self.period

    def __repr__(self) -> str:
        return f"{type(self).__name__}(period={self.period})"

    def _fields(self) -> tuple[Any, ...]:
        return (self.period,)
