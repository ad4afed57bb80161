r"""Parameter validation utilities for delay policies.

This module provides validation functions for the arguments of the
policy constructors and decorators. Invalid arguments are caller
defects: they are reported immediately and never retried.
"""

from __future__ import annotations

__all__ = ["validate_exception_types", "validate_max_attempts", "validate_period"]

from typing import Any


def validate_period(period: float) -> None:
    """Validate a delay period.

    Args:
        period: The length of a delay period. Must be >= 0.

    Raises:
        TypeError: If period is not a number.
        ValueError: If period is negative.

    Example:
        ```pycon
        >>> from reattempt.validation import validate_period
        >>> validate_period(1.5)
        >>> validate_period(0)
        >>> validate_period(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: period must be non-negative, got -1

        ```
    """
    if isinstance(period, bool) or not isinstance(period, (int, float)):
        msg = f"period must be a number, got {type(period).__name__}"
        raise TypeError(msg)
    if period < 0:
        msg = f"period must be non-negative, got {period}"
        raise ValueError(msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the attempt threshold of a limited policy.

    Args:
        max_attempts: The highest attempt index that may still be
            scheduled. Must be an int >= 0.

    Raises:
        TypeError: If max_attempts is not an int.
        ValueError: If max_attempts is negative.
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an int, got {type(max_attempts).__name__}"
        raise TypeError(msg)
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)


def validate_exception_types(types: Any) -> tuple[type[BaseException], ...]:
    """Validate and normalize an exception type filter.

    Args:
        types: An exception type or a non-empty tuple of exception types.

    Returns:
        The exception types as a tuple.

    Raises:
        TypeError: If types is None, empty, or contains anything other
            than exception types.

    Example:
        ```pycon
        >>> from reattempt.validation import validate_exception_types
        >>> validate_exception_types(ValueError)
        (<class 'ValueError'>,)
        >>> validate_exception_types((OSError, TimeoutError))
        (<class 'OSError'>, <class 'TimeoutError'>)

        ```
    """
    if types is None:
        msg = "exception type filter must not be None"
        raise TypeError(msg)
    normalized = types if isinstance(types, tuple) else (types,)
    if not normalized:
        msg = "exception type filter must contain at least one type"
        raise TypeError(msg)
    for exc_type in normalized:
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            msg = f"expected an exception type, got {exc_type!r}"
            raise TypeError(msg)
    return normalized
