r"""Unit tests for the policy decorators ``limit`` and ``when``."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from reattempt.policy import (
    STOP,
    ContinuousPolicy,
    FilteredPolicy,
    FixedDelayPolicy,
    LimitedPolicy,
    continuously,
    every,
)

##################################
#     Tests for LimitedPolicy    #
##################################


def test_limited_policy_delegates_within_limit() -> None:
    """Test that the wrapped policy decides while attempts <= limit."""
    policy = every(2.0).limit(3)
    assert [policy.get_delay(attempts, None) for attempts in range(4)] == [2.0] * 4


@pytest.mark.parametrize("attempts", [4, 5, 100])
def test_limited_policy_stops_past_limit(attempts: int) -> None:
    """Test that retries stop once attempts exceeds the limit."""
    assert every(2.0).limit(3).get_delay(attempts, RuntimeError()) == STOP


def test_limited_policy_zero_limit() -> None:
    """Test that a zero limit still allows the first attempt."""
    policy = continuously().limit(0)
    assert policy.get_delay(0, None) == 0.0
    assert policy.get_delay(1, RuntimeError()) == STOP


def test_limited_policy_does_not_modify_wrapped_policy() -> None:
    """Test that limit returns a new policy."""
    base = continuously()
    limited = base.limit(1)
    assert isinstance(limited, LimitedPolicy)
    assert limited.policy is base
    assert base.get_delay(10, RuntimeError()) == 0.0


def test_limited_policy_stops_wrapped_stop() -> None:
    """Test that a STOP of the wrapped policy is kept within the limit."""
    policy = continuously().when(ValueError).limit(5)
    assert policy.get_delay(1, KeyError()) == STOP


@pytest.mark.parametrize("max_attempts", [-1, -10])
def test_limited_policy_negative_limit(max_attempts: int) -> None:
    """Test that negative limit raises ValueError."""
    with pytest.raises(ValueError, match=r"max_attempts must be >= 0"):
        continuously().limit(max_attempts)


def test_limited_policy_invalid_limit_type() -> None:
    """Test that a non-int limit raises TypeError."""
    with pytest.raises(TypeError, match=r"max_attempts must be an int"):
        continuously().limit(2.5)  # type: ignore[arg-type]


def test_limited_policy_repr() -> None:
    """Test LimitedPolicy representation."""
    assert repr(continuously().limit(3)) == "LimitedPolicy(ContinuousPolicy(), max_attempts=3)"


def test_limited_policy_equality() -> None:
    """Test that limited policies compare by value."""
    assert continuously().limit(3) == LimitedPolicy(ContinuousPolicy(), 3)
    assert continuously().limit(3) != continuously().limit(4)


###################################
#     Tests for FilteredPolicy    #
###################################


def test_filtered_policy_single_type() -> None:
    """Test filtering on a single exception type."""
    policy = continuously().when(ValueError)
    assert isinstance(policy, FilteredPolicy)
    assert policy.exception_types == (ValueError,)
    assert policy.get_delay(1, ValueError()) == 0.0
    assert policy.get_delay(1, TypeError()) == STOP


def test_filtered_policy_subclass() -> None:
    """Test that subclasses of the accepted types are accepted."""
    policy = continuously().when(OSError)
    assert policy.get_delay(1, ConnectionResetError()) == 0.0


def test_filtered_policy_tuple_of_types() -> None:
    """Test filtering on several exception types."""
    policy = continuously().when((TimeoutError, ConnectionError))
    assert policy.get_delay(1, TimeoutError()) == 0.0
    assert policy.get_delay(1, ConnectionRefusedError()) == 0.0
    assert policy.get_delay(1, ValueError()) == STOP


def test_filtered_policy_types_accept_no_cause() -> None:
    """Test that type filters do not reject the initial delay."""
    policy = every(1.5).when(ValueError)
    assert policy.get_delay(0, None) == 1.5


def test_filtered_policy_predicate() -> None:
    """Test filtering with a predicate."""
    policy = continuously().when(lambda cause: "transient" in str(cause))
    assert policy.exception_types is None
    assert policy.get_delay(1, RuntimeError("transient failure")) == 0.0
    assert policy.get_delay(1, RuntimeError("fatal failure")) == STOP


def test_filtered_policy_predicate_receives_cause() -> None:
    """Test that the predicate receives the cause, None at first."""
    predicate = Mock(return_value=True)
    policy = continuously().when(predicate)
    error = RuntimeError()
    policy.get_delay(0, None)
    policy.get_delay(1, error)
    assert [call.args for call in predicate.call_args_list] == [(None,), (error,)]


def test_filtered_policy_rejection_skips_wrapped_policy() -> None:
    """Test that the wrapped policy is not consulted after a rejection."""
    wrapped = Mock(spec=FixedDelayPolicy)
    FilteredPolicy(wrapped, ValueError).get_delay(1, KeyError())
    wrapped.get_delay.assert_not_called()


def test_filtered_policy_none_condition() -> None:
    """Test that a None condition raises TypeError."""
    with pytest.raises(TypeError, match=r"condition must be a predicate or exception types"):
        continuously().when(None)  # type: ignore[arg-type]


def test_filtered_policy_empty_tuple() -> None:
    """Test that an empty tuple of types raises TypeError."""
    with pytest.raises(TypeError, match=r"at least one type"):
        continuously().when(())


@pytest.mark.parametrize("condition", [int, (ValueError, str)])
def test_filtered_policy_non_exception_type(condition: object) -> None:
    """Test that non-exception types raise TypeError."""
    with pytest.raises(TypeError, match=r"expected an exception type"):
        continuously().when(condition)  # type: ignore[arg-type]


def test_filtered_policy_chained_filters() -> None:
    """Test that all chained filters must accept the failure."""
    policy = continuously().when(OSError).when(lambda cause: getattr(cause, "errno", 1) == 1)
    assert policy.get_delay(1, OSError(1, "retry me")) == 0.0
    assert policy.get_delay(1, OSError(2, "give up")) == STOP
    assert policy.get_delay(1, ValueError()) == STOP


def test_filtered_policy_repr() -> None:
    """Test FilteredPolicy representation."""
    policy = continuously().limit(2).when((TimeoutError, ValueError))
    assert repr(policy) == (
        "FilteredPolicy(LimitedPolicy(ContinuousPolicy(), max_attempts=2), "
        "when=TimeoutError, ValueError)"
    )
