"""Tests for please.core.errors module."""

from __future__ import annotations

from please.core.errors import ErrorCode


def test_codes_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.ENV_ERROR) == 2
    assert int(ErrorCode.GIT_ERROR) == 3
    assert int(ErrorCode.IO_ERROR) == 5


def test_str_is_readable() -> None:
    assert str(ErrorCode.ENV_ERROR) == "env error"

