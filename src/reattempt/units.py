r"""Time units used to express delay periods.

Delays are handled as ``float`` seconds everywhere in ``reattempt``.
This module provides the ``TimeUnit`` enum to convert a period given in
another unit to seconds, and back.
"""

from __future__ import annotations

__all__ = ["TimeUnit"]

from enum import Enum


class TimeUnit(Enum):
    """Units of time, valued by their length in seconds.

    Example:
        ```pycon
        >>> from reattempt.units import TimeUnit
        >>> TimeUnit.MILLISECONDS.to_seconds(250)
        0.25
        >>> TimeUnit.MINUTES.to_seconds(2)
        120.0
        >>> TimeUnit.MILLISECONDS.from_seconds(1.5)
        1500.0

        ```
    """

    NANOSECONDS = 1e-9
    MICROSECONDS = 1e-6
    MILLISECONDS = 1e-3
    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 3600.0
    DAYS = 86400.0

    def to_seconds(self, value: float) -> float:
        """Convert a value expressed in this unit to seconds.

        Args:
            value: The amount of time in this unit.

        Returns:
            The same amount of time in seconds.
        """
        return float(value * self.value)

    def from_seconds(self, seconds: float) -> float:
        """Convert a number of seconds to this unit.

        Args:
            seconds: The amount of time in seconds.

        Returns:
            The same amount of time in this unit.
        """
        return seconds / self.value
