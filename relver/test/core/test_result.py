"""Tests for core/result.py."""

from __future__ import annotations

import pytest

from relver.core.result import Err, Ok, Result, is_err, is_ok


def _parse(text: str) -> Result[int, str]:
    if not text.isdigit():
        return Err(f"not a number: {text}")
    return Ok(int(text))


def test_ok() -> None:
    result = _parse("10")
    assert is_ok(result)
    assert result.unwrap() == 10
    assert result.unwrap_or(0) == 10
    assert result.map(lambda n: n + 1) == Ok(11)
    with pytest.raises(ValueError):
        result.unwrap_err()


def test_err() -> None:
    result = _parse("x")
    assert is_err(result)
    assert result.unwrap_err() == "not a number: x"
    assert result.unwrap_or(0) == 0
    assert result.map(lambda n: n + 1) == Err("not a number: x")
    with pytest.raises(ValueError):
        result.unwrap()


def test_pattern_matching() -> None:
    match _parse("7"):
        case Ok(value):
            assert value == 7
        case Err(_):
            pytest.fail("expected Ok")
