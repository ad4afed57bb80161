r"""Schedulers running the attempts of retry executions.

This package provides the scheduling capability consumed by the retry
engine and three implementations of it: in the calling thread (the
default), on a thread pool, and on an asyncio event loop.
"""

from __future__ import annotations

__all__ = [
    "BaseScheduler",
    "EventLoopScheduler",
    "SameThreadScheduler",
    "ScheduledHandle",
    "ThreadPoolScheduler",
]

from reattempt.scheduler.base import BaseScheduler, ScheduledHandle
from reattempt.scheduler.event_loop import EventLoopScheduler
from reattempt.scheduler.same_thread import SameThreadScheduler
from reattempt.scheduler.thread_pool import ThreadPoolScheduler
