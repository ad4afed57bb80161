r"""Linear backoff policy."""

from __future__ import annotations

__all__ = ["LinearBackoffPolicy"]

from typing import Any

from reattempt.policy.base import BaseDelayPolicy
from reattempt.units import TimeUnit
from reattempt.validation import validate_period


class LinearBackoffPolicy(BaseDelayPolicy):
    """Linear backoff policy.

    Calculates delay as: period * attempts. The first attempt runs
    without delay, then each retry waits one period longer than the
    previous one.

    Args:
        period: The increment added to the delay after each attempt.
            Must be non-negative.
        unit: The unit of the period (default: seconds).

    Example:
        ```pycon
        >>> from reattempt.policy import LinearBackoffPolicy
        >>> policy = LinearBackoffPolicy(2.0)
        >>> policy.get_delay(0, None)  # First attempt
        0.0
        >>> policy.get_delay(1, RuntimeError())  # First retry
        2.0
        >>> policy.get_delay(3, RuntimeError())  # Third retry
        6.0

        ```
    """

    def __init__(self, period: float, unit: TimeUnit = TimeUnit.SECONDS) -> None:
        validate_period(period)
        self.period = unit.to_seconds(period)

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:  # noqa: ARG002
        """Calculate linear backoff delay.

        Args:
            attempts: The number of attempts made so far.
            cause: The failure of the last attempt (unused).

        Returns:
            The calculated delay: period * attempts.
        """
        return attempts * self.period

    def __repr__(self) -> str:
        return f"{type(self).__name__}(period={self.period})"

    def _fields(self) -> tuple[Any, ...]:
        return (self.period,)
