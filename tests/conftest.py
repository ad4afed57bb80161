from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from reattempt.scheduler import ThreadPoolScheduler

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def thread_pool_scheduler() -> Generator[ThreadPoolScheduler, None, None]:
    """Create a thread pool scheduler shut down after the test."""
    scheduler = ThreadPoolScheduler(max_workers=4, thread_name_prefix="test-reattempt")
    yield scheduler
    scheduler.shutdown(wait=True)


@pytest.fixture
def flaky_task() -> Mock:
    """Create a task failing twice with ``OSError`` then returning "ok".

    Returns:
        A Mock object usable as a task, whose calls can be inspected.

    Example:
        >>> def test_retry(flaky_task):
        ...     assert continuously().execute(flaky_task).result() == "ok"
        ...     assert flaky_task.call_count == 3
    """
    return Mock(side_effect=[OSError("first"), OSError("second"), "ok"])
