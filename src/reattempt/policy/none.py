r"""Policy which never retries."""

from __future__ import annotations

__all__ = ["NoRetryPolicy"]

from reattempt.policy.base import STOP, BaseDelayPolicy


class NoRetryPolicy(BaseDelayPolicy):
    """Policy which runs the task once and never retries it.

    The first attempt is scheduled without delay. Any failure is final.

    Example:
        ```pycon
        >>> from reattempt.policy import NoRetryPolicy
        >>> policy = NoRetryPolicy()
        >>> policy.get_delay(0, None)  # First attempt
        0.0
        >>> policy.get_delay(1, RuntimeError("boom"))  # No retry
        -1.0

        ```
    """

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:  # noqa: ARG002
        """Allow the first attempt only.

        Args:
            attempts: The number of attempts made so far.
            cause: The failure of the last attempt (unused).

        Returns:
            0.0 for the first attempt, STOP afterwards.
        """
        return 0.0 if attempts == 0 else STOP
