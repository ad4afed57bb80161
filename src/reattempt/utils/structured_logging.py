r"""Structured logging utilities for machine-readable log output.

This module provides an opt-in JSON formatter for the ``reattempt``
loggers. Each retry execution is given an execution id, which is bound
to the current context while one of its attempts runs, so that all log
records of an execution (including those emitted by the task itself) can
be grouped by log aggregation systems.

Example:
    Enable structured logging for reattempt:

    ```python
    import logging
    from reattempt.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("reattempt")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "bind_execution_id",
    "get_execution_id",
    "log_structured",
    "new_execution_id",
]

import contextvars
import json
import logging
import time
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

# Context variable for the id of the execution whose attempt is running
_execution_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "execution_id", default=None
)

# Attributes present on every LogRecord; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def new_execution_id() -> str:
    """Create a new random execution id.

    Returns:
        A 32 character hexadecimal string.
    """
    return uuid.uuid4().hex


def get_execution_id() -> str | None:
    """Get the execution id bound to the current context.

    Returns:
        The execution id, or None outside of an attempt.

    Example:
        ```pycon
        >>> from reattempt.utils.structured_logging import (
        ...     bind_execution_id,
        ...     get_execution_id,
        ... )
        >>> get_execution_id()
        >>> with bind_execution_id("abc123"):
        ...     get_execution_id()
        ...
        'abc123'

        ```
    """
    return _execution_id.get()


@contextmanager
def bind_execution_id(execution_id: str) -> Iterator[str]:
    """Bind an execution id to the current context.

    The previous value is restored on exit, which keeps nested executions
    (a task that itself executes a retry) correctly attributed.

    Args:
        execution_id: The execution id to bind.

    Yields:
        The bound execution id.
    """
    token = _execution_id.set(execution_id)
    try:
        yield execution_id
    finally:
        _execution_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - execution_id: Id of the retry execution, if any
        - module, function, line: Origin of the record
        - thread: Thread name, useful with threaded schedulers

    Any additional fields added via the ``extra`` parameter of logging
    calls are included as well.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from reattempt.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_logger")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt failed", extra={"attempt": 2})
        >>> '"attempt": 2' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        execution_id = get_execution_id()
        if execution_id is not None:
            log_data["execution_id"] = execution_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format timestamp as ISO 8601 with millisecond precision.

        Args:
            record: The log record.
            datefmt: Ignored, the output is always ISO 8601.

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    logger.log(level, message, extra=extra)
