r"""Suppressed failure chaining.

Every failed attempt is kept. When an attempt fails, the failure of the
previous attempt is attached to the new one as a suppressed failure, so
the final failure of an exhausted execution carries the whole retry
history. The suppressed failures are stored in the ``__suppressed__``
attribute of the exception and summarized in its notes so they show up
in tracebacks.
"""

from __future__ import annotations

__all__ = ["add_suppressed", "get_suppressed", "iter_suppressed"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_SUPPRESSED_ATTR = "__suppressed__"


def add_suppressed(exc: BaseException, suppressed: BaseException) -> None:
    """Attach a suppressed failure to an exception.

    Args:
        exc: The exception that is being propagated.
        suppressed: The earlier failure to retain.

    Raises:
        ValueError: If an exception is attached to itself.

    Example:
        ```pycon
        >>> from reattempt.utils.exceptions import add_suppressed, get_suppressed
        >>> first, second = ValueError("first"), ValueError("second")
        >>> add_suppressed(second, first)
        >>> get_suppressed(second)
        (ValueError('first'),)

        ```
    """
    if exc is suppressed:
        msg = "an exception cannot suppress itself"
        raise ValueError(msg)
    existing: list[BaseException] | None = getattr(exc, _SUPPRESSED_ATTR, None)
    if existing is None:
        existing = []
        setattr(exc, _SUPPRESSED_ATTR, existing)
    existing.append(suppressed)
    exc.add_note(f"Suppressed: {type(suppressed).__name__}: {suppressed}")


def get_suppressed(exc: BaseException) -> tuple[BaseException, ...]:
    """Return the failures directly suppressed by an exception.

    Args:
        exc: The exception to inspect.

    Returns:
        The suppressed failures, in the order they were attached.
    """
    return tuple(getattr(exc, _SUPPRESSED_ATTR, ()))


def iter_suppressed(exc: BaseException) -> Iterator[BaseException]:
    """Iterate over all failures reachable through suppression.

    The traversal is depth-first, so for a retry history the most recent
    earlier failure comes first.

    Args:
        exc: The exception to start from. It is not yielded itself.

    Yields:
        Every suppressed failure, each at most once.

    Example:
        ```pycon
        >>> from reattempt.utils.exceptions import add_suppressed, iter_suppressed
        >>> errors = [RuntimeError(str(i)) for i in range(3)]
        >>> add_suppressed(errors[1], errors[0])
        >>> add_suppressed(errors[2], errors[1])
        >>> [str(e) for e in iter_suppressed(errors[2])]
        ['1', '0']

        ```
    """
    seen = {id(exc)}
    stack = list(reversed(get_suppressed(exc)))
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        stack.extend(reversed(get_suppressed(current)))
