r"""reattempt - Retry policies for tasks that may fail.

This package runs a task, retries it after each failure according to a
delay policy, and exposes the final outcome through a cancellable,
awaitable future. The attempts run on a pluggable scheduler: the calling
thread by default, a thread pool, or an asyncio event loop.

Key Features:
    - Built-in policies: no retry, continuous, fixed period, linear and
      exponential backoff, and custom functions
    - Policies composed with ``limit`` and ``when`` (exception types or
      predicates)
    - Failures of the previous attempts attached to the final one
    - Futures usable with ``concurrent.futures`` and ``await``
    - Declarative configuration with ``RetryConfig``

Example:
    ```pycon
    >>> from reattempt import continuously
    >>> outcomes = iter([OSError("flaky"), "ok"])
    >>> def task():
    ...     outcome = next(outcomes)
    ...     if isinstance(outcome, Exception):
    ...         raise outcome
    ...     return outcome
    ...
    >>> continuously().limit(3).when(OSError).execute(task).result()
    'ok'

    ```
"""

from __future__ import annotations

__all__ = [
    "STOP",
    "BaseDelayPolicy",
    "BaseScheduler",
    "EventLoopScheduler",
    "RetryConfig",
    "RetryExecutor",
    "RetryFuture",
    "SameThreadScheduler",
    "ThreadPoolScheduler",
    "TimeUnit",
    "__version__",
    "continuously",
    "every",
    "execute",
    "from_function",
    "none",
    "with_exponential_backoff",
    "with_linear_backoff",
]

from importlib.metadata import PackageNotFoundError, version

from reattempt.config import RetryConfig
from reattempt.executor import RetryExecutor, execute
from reattempt.future import RetryFuture
from reattempt.policy import (
    STOP,
    BaseDelayPolicy,
    continuously,
    every,
    from_function,
    none,
    with_exponential_backoff,
    with_linear_backoff,
)
from reattempt.scheduler import (
    BaseScheduler,
    EventLoopScheduler,
    SameThreadScheduler,
    ThreadPoolScheduler,
)
from reattempt.units import TimeUnit

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
