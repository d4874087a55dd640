"""Assertion helpers giving clearer failure messages for size and path comparisons."""

from __future__ import annotations


def assert_equal(actual, expected, *, message: str | None = None) -> None:
    """Assert actual == expected, reporting both values on failure."""
    assert actual == expected, message or f"Expected {expected!r} but received {actual!r}"
