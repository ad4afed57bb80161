r"""Policy backed by a plain function."""

from __future__ import annotations

__all__ = ["FunctionPolicy"]

from typing import TYPE_CHECKING, Any

from reattempt.policy.base import BaseDelayPolicy

if TYPE_CHECKING:
    from collections.abc import Callable


class FunctionPolicy(BaseDelayPolicy):
    """Policy delegating to a ``(attempts, cause) -> delay`` function.

    This is the simplest way to write a custom policy; the result still
    supports ``limit``, ``when`` and ``execute``.

    Args:
        func: The function computing the delay in seconds. It must not
            raise; a negative result stops the retries.

    Raises:
        TypeError: If func is not callable.

    Example:
        ```pycon
        >>> from reattempt.policy import FunctionPolicy
        >>> policy = FunctionPolicy(lambda attempts, cause: 0.1 if attempts < 3 else -1)
        >>> policy.get_delay(2, RuntimeError())
        0.1
        >>> policy.get_delay(3, RuntimeError())
        -1.0

        ```
    """

    def __init__(self, func: Callable[[int, BaseException | None], float]) -> None:
        if not callable(func):
            msg = f"func must be callable, got {func!r}"
            raise TypeError(msg)
        self.func = func

    def get_delay(self, attempts: int, cause: BaseException | None) -> float:
        return float(self.func(attempts, cause))

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"{type(self).__name__}({name})"

    def _fields(self) -> tuple[Any, ...]:
        return (self.func,)
