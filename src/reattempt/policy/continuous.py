r"""Policy which retries immediately and indefinitely."""

from __future__ import annotations

__all__ = ["ContinuousPolicy"]

from reattempt.policy.base import BaseDelayPolicy


class ContinuousPolicy(BaseDelayPolicy):
    """Policy which retries a failed task immediately, without limit.

    Combine it with ``limit`` or ``when`` unless the task is known to
    eventually succeed.

    Example:
        ```pycon
        >>> from reattempt.policy import ContinuousPolicy
        >>> ContinuousPolicy().get_delay(1000, RuntimeError())
        0.0

        ```
    """

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:  # noqa: ARG002
        return 0.0
