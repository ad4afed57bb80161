r"""Utility functions shared by the retry engine.

This package provides helpers for chaining suppressed failures and for
structured logging of retry executions.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "add_suppressed",
    "bind_execution_id",
    "get_execution_id",
    "get_suppressed",
    "iter_suppressed",
    "log_structured",
    "new_execution_id",
]

from reattempt.utils.exceptions import add_suppressed, get_suppressed, iter_suppressed
from reattempt.utils.structured_logging import (
    StructuredFormatter,
    bind_execution_id,
    get_execution_id,
    log_structured,
    new_execution_id,
)
