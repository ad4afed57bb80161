r"""Fixed interval policy."""

from __future__ import annotations

__all__ = ["FixedDelayPolicy"]

from typing import Any

from reattempt.policy.base import BaseDelayPolicy
from reattempt.units import TimeUnit
from reattempt.validation import validate_period


class FixedDelayPolicy(BaseDelayPolicy):
    """Policy which retries a failed task periodically.

    The same delay is used before every attempt, including the first one.

    Args:
        period: The length of the period to wait between attempts.
            Must be non-negative.
        unit: The unit of the period (default: seconds).

    Example:
        ```pycon
        >>> from reattempt.policy import FixedDelayPolicy
        >>> from reattempt.units import TimeUnit
        >>> policy = FixedDelayPolicy(500, TimeUnit.MILLISECONDS)
        >>> policy.get_delay(0, None)
        0.5
        >>> policy.get_delay(7, RuntimeError())
        0.5

        ```
    """

    def __init__(self, period: float, unit: TimeUnit = TimeUnit.SECONDS) -> None:
        validate_period(period)
        self.period = unit.to_seconds(period)

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:  # noqa: ARG002
        return self.period

    def __repr__(self) -> str:
        return f"{type(self).__name__}(period={self.period})"

    def _fields(self) -> tuple[Any, ...]:
        return (self.period,)
