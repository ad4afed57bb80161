r"""Unit tests for parameter validation functions."""

from __future__ import annotations

import pytest

from reattempt.validation import (
    validate_exception_types,
    validate_max_attempts,
    validate_period,
)

#####################################
#     Tests for validate_period     #
#####################################


@pytest.mark.parametrize("period", [0, 0.0, 0.5, 1, 100.0])
def test_validate_period_valid(period: float) -> None:
    validate_period(period)


@pytest.mark.parametrize("period", [-0.1, -1, -100.0])
def test_validate_period_negative(period: float) -> None:
    with pytest.raises(ValueError, match=r"period must be non-negative"):
        validate_period(period)


@pytest.mark.parametrize("period", ["1", None, True, [1]])
def test_validate_period_type(period: object) -> None:
    with pytest.raises(TypeError, match=r"period must be a number"):
        validate_period(period)  # type: ignore[arg-type]


###########################################
#     Tests for validate_max_attempts     #
###########################################


@pytest.mark.parametrize("max_attempts", [0, 1, 10, 1000])
def test_validate_max_attempts_valid(max_attempts: int) -> None:
    validate_max_attempts(max_attempts)


def test_validate_max_attempts_negative() -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 0, got -1"):
        validate_max_attempts(-1)


@pytest.mark.parametrize("max_attempts", [1.0, "3", False, None])
def test_validate_max_attempts_type(max_attempts: object) -> None:
    with pytest.raises(TypeError, match=r"max_attempts must be an int"):
        validate_max_attempts(max_attempts)  # type: ignore[arg-type]


##############################################
#     Tests for validate_exception_types     #
##############################################


def test_validate_exception_types_single() -> None:
    assert validate_exception_types(ValueError) == (ValueError,)


def test_validate_exception_types_tuple() -> None:
    assert validate_exception_types((OSError, KeyboardInterrupt)) == (
        OSError,
        KeyboardInterrupt,
    )


def test_validate_exception_types_none() -> None:
    with pytest.raises(TypeError, match=r"must not be None"):
        validate_exception_types(None)


def test_validate_exception_types_empty() -> None:
    with pytest.raises(TypeError, match=r"at least one type"):
        validate_exception_types(())


@pytest.mark.parametrize("types", [str, ValueError(), (ValueError, "OSError"), [ValueError]])
def test_validate_exception_types_invalid(types: object) -> None:
    with pytest.raises(TypeError, match=r"expected an exception type"):
        validate_exception_types(types)
