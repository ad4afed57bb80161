from __future__ import annotations

import asyncio
import logging
import sys

import reattempt
from reattempt.utils.exceptions import iter_suppressed

logger: logging.Logger = logging.getLogger(__name__)


class Flaky:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            msg = f"failure {self.calls}"
            raise ConnectionError(msg)
        return "ok"


def check_same_thread() -> None:
    logger.info("Checking same thread execution...")
    task = Flaky(failures=2)
    future = reattempt.continuously().limit(3).execute(task)
    assert future.result() == "ok"
    assert task.calls == 3


def check_exhaustion() -> None:
    logger.info("Checking exhaustion...")
    future = reattempt.every(0.001).limit(2).execute(Flaky(failures=5))
    failure = future.exception()
    assert isinstance(failure, ConnectionError)
    assert len(list(iter_suppressed(failure))) == 2


def check_thread_pool() -> None:
    logger.info("Checking thread pool execution...")
    with reattempt.ThreadPoolScheduler(max_workers=2) as scheduler:
        future = reattempt.RetryConfig(period=0.001).build_policy().execute(Flaky(1), scheduler)
        assert future.result(timeout=5) == "ok"


def check_event_loop() -> None:
    logger.info("Checking event loop execution...")

    async def main() -> str:
        scheduler = reattempt.EventLoopScheduler()
        return await reattempt.every(0.001).limit(3).execute(Flaky(2), scheduler)

    assert asyncio.run(main()) == "ok"


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_same_thread()
        check_exhaustion()
        check_thread_pool()
        check_event_loop()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
