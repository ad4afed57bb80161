r"""Unit tests for EventLoopScheduler."""

from __future__ import annotations

import asyncio
import threading
from unittest.mock import Mock

import pytest

from reattempt.policy import every, none
from reattempt.scheduler import EventLoopScheduler


def test_event_loop_scheduler_requires_running_loop() -> None:
    with pytest.raises(RuntimeError):
        EventLoopScheduler()


def test_event_loop_scheduler_explicit_loop() -> None:
    loop = asyncio.new_event_loop()
    try:
        scheduler = EventLoopScheduler(loop)
        assert scheduler.loop is loop
        work = Mock()
        handle = scheduler.schedule(work, 0)
        loop.run_until_complete(asyncio.sleep(0))
        work.assert_called_once_with()
        assert handle.done()
    finally:
        loop.close()


@pytest.mark.asyncio
async def test_event_loop_scheduler_runs_on_loop_thread() -> None:
    threads = []
    handle = EventLoopScheduler().schedule(
        lambda: threads.append(threading.current_thread()), 0.01
    )
    await asyncio.sleep(0.05)
    assert handle.done()
    assert threads == [threading.current_thread()]


@pytest.mark.asyncio
async def test_event_loop_scheduler_cancel() -> None:
    work = Mock()
    handle = EventLoopScheduler().schedule(work, 0.01)
    assert handle.cancel()
    await asyncio.sleep(0.05)
    work.assert_not_called()


@pytest.mark.asyncio
async def test_event_loop_scheduler_retries() -> None:
    task = Mock(side_effect=[OSError(), OSError(), "done"])
    future = every(0.01).limit(5).execute(task, EventLoopScheduler())
    assert not future.done()
    assert await future == "done"
    assert task.call_count == 3


@pytest.mark.asyncio
async def test_event_loop_scheduler_exhaustion() -> None:
    future = none().execute(Mock(side_effect=ValueError("boom")), EventLoopScheduler())
    with pytest.raises(ValueError, match=r"boom"):
        await asyncio.wait_for(future, timeout=5)


@pytest.mark.asyncio
async def test_event_loop_scheduler_cancel_execution() -> None:
    task = Mock()
    future = every(10).execute(task, EventLoopScheduler())
    assert future.cancel()
    await asyncio.sleep(0)
    assert future.cancelled()
    task.assert_not_called()


@pytest.mark.asyncio
async def test_event_loop_scheduler_repr() -> None:
    assert repr(EventLoopScheduler()).startswith("EventLoopScheduler(loop=")


def test_event_loop_scheduler_cancel_outside_loop_thread() -> None:
    """Test that cancelling outside the loop thread goes through the loop."""
    loop = Mock(spec=asyncio.AbstractEventLoop)
    loop.is_closed.return_value = False
    handle = EventLoopScheduler(loop).schedule(Mock(), 1.0)
    timer = loop.call_later.return_value
    assert handle.cancel()
    loop.call_soon_threadsafe.assert_called_once_with(timer.cancel)
    timer.cancel.assert_not_called()


def test_event_loop_scheduler_cancel_closed_loop() -> None:
    loop = Mock(spec=asyncio.AbstractEventLoop)
    loop.is_closed.return_value = True
    handle = EventLoopScheduler(loop).schedule(Mock(), 0)
    assert handle.cancel()
    loop.call_soon_threadsafe.assert_not_called()


@pytest.mark.asyncio
async def test_event_loop_scheduler_cancel_from_other_thread() -> None:
    task = Mock()
    future = every(0.05).execute(task, EventLoopScheduler())
    thread = threading.Thread(target=future.cancel)
    thread.start()
    thread.join()
    await asyncio.sleep(0.1)
    assert future.cancelled()
    task.assert_not_called()
