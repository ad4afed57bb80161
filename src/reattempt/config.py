r"""Configuration dataclass and defaults for retry policies.

This module provides configuration constants and a dataclass-based
configuration object building a delay policy declaratively, e.g. from
application settings.
"""

from __future__ import annotations

__all__ = [
    "BACKOFF_KINDS",
    "DEFAULT_BACKOFF",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_PERIOD",
    "RetryConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from reattempt.policy import (
    continuously,
    every,
    none,
    with_exponential_backoff,
    with_linear_backoff,
)
from reattempt.units import TimeUnit
from reattempt.validation import (
    validate_exception_types,
    validate_max_attempts,
    validate_period,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.policy import BaseDelayPolicy

# Names of the base policies a config can build
BACKOFF_KINDS = ("none", "continuous", "fixed", "linear", "exponential")

# Default base policy
DEFAULT_BACKOFF = "exponential"

# Default period of the base policy, in the configured unit
# With exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s
DEFAULT_PERIOD = 0.1

# Default highest attempt index that may still be scheduled
# Total executions = max_attempts + 1
DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class RetryConfig:
    """Declarative configuration of a delay policy.

    Args:
        backoff: The base policy, one of ``BACKOFF_KINDS``.
        period: The period of the base policy, in ``unit``. Must be >= 0.
            Ignored by the "none" and "continuous" policies.
        unit: The unit of the period (default: seconds).
        max_attempts: The highest attempt index that may still be
            scheduled, or None for no limit. Must be >= 0.
        retry_on: Exception types worth retrying.
        retry_if: Optional predicate on the failure, applied after
            ``retry_on``. It receives None before the first attempt.

    Example:
        ```pycon
        >>> from reattempt.config import RetryConfig
        >>> config = RetryConfig(backoff="linear", period=2, max_attempts=4)
        >>> config.build_policy()
        FilteredPolicy(LimitedPolicy(LinearBackoffPolicy(period=2.0), max_attempts=4), when=Exception)
        >>> config.merge(max_attempts=10).max_attempts
        10
        >>> config.max_attempts  # Original unchanged
        4

        ```
    """

    backoff: str = DEFAULT_BACKOFF
    period: float = DEFAULT_PERIOD
    unit: TimeUnit = TimeUnit.SECONDS
    max_attempts: int | None = DEFAULT_MAX_ATTEMPTS
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    retry_if: Callable[[BaseException | None], bool] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If backoff is unknown, or period or
                max_attempts are negative.
            TypeError: If a parameter has the wrong type.
        """
        if self.backoff not in BACKOFF_KINDS:
            msg = f"backoff must be one of {BACKOFF_KINDS}, got {self.backoff!r}"
            raise ValueError(msg)
        validate_period(self.period)
        if not isinstance(self.unit, TimeUnit):
            msg = f"unit must be a TimeUnit, got {self.unit!r}"
            raise TypeError(msg)
        if self.max_attempts is not None:
            validate_max_attempts(self.max_attempts)
        object.__setattr__(self, "retry_on", validate_exception_types(self.retry_on))
        if self.retry_if is not None and not callable(self.retry_if):
            msg = f"retry_if must be callable, got {self.retry_if!r}"
            raise TypeError(msg)

    def build_policy(self) -> BaseDelayPolicy:
        """Build the delay policy described by this configuration.

        The base policy is wrapped by ``limit`` (if max_attempts is set),
        then ``when(retry_on)``, then ``when(retry_if)`` (if set).

        Returns:
            A new policy.
        """
        if self.backoff == "none":
            policy: BaseDelayPolicy = none()
        elif self.backoff == "continuous":
            policy = continuously()
        elif self.backoff == "fixed":
            policy = every(self.period, self.unit)
        elif self.backoff == "linear":
            policy = with_linear_backoff(self.period, self.unit)
        else:
            policy = with_exponential_backoff(self.period, self.unit)

        if self.max_attempts is not None:
            policy = policy.limit(self.max_attempts)
        policy = policy.when(self.retry_on)
        if self.retry_if is not None:
            policy = policy.when(self.retry_if)
        return policy

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied, so ``max_attempts``
        cannot be reset to None through this method.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.

        Example:
            ```pycon
            >>> from reattempt.config import RetryConfig
            >>> RetryConfig(max_attempts=5).to_dict()["max_attempts"]
            5

            ```
        """
        return {
            "backoff": self.backoff,
            "period": self.period,
            "unit": self.unit,
            "max_attempts": self.max_attempts,
            "retry_on": self.retry_on,
            "retry_if": self.retry_if,
        }
