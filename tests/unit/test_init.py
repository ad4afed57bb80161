r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import reattempt


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(reattempt.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in reattempt.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in reattempt.__all__:
        assert hasattr(reattempt, name), f"{name} is in __all__ but not defined in module"


def test_top_level_execute() -> None:
    """Test the top-level API end to end."""
    future = reattempt.execute(lambda: "ok", reattempt.continuously().limit(1))
    assert isinstance(future, reattempt.RetryFuture)
    assert future.result() == "ok"


def test_default_scheduler_is_same_thread() -> None:
    executor = reattempt.RetryExecutor(reattempt.none(), lambda: None)
    assert executor.scheduler is reattempt.SameThreadScheduler.get()
