"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from ubf import Array, Object, Value


def nest_objects(levels: int) -> Object:
    """Build a root object with ``levels`` objects nested beneath it.

    The returned tree has depth ``levels + 1`` (the root counts as 1).
    """
    root = Object()
    current = root
    for _ in range(levels):
        child = Object()
        current.put("child", Value.of_object(child))
        current = child
    current.put("leaf", Value.of_int(1))
    return root


@pytest.fixture
def nest() -> Callable[[int], Object]:
    """Factory for deeply nested objects."""
    return nest_objects


@pytest.fixture
def example_object() -> Object:
    """Object{"n": Int 42, "s": "héllo", "arr": [true, false]}."""
    arr = Array()
    arr.add(Value.of_boolean(True))
    arr.add(Value.of_boolean(False))

    obj = Object()
    obj.put("n", Value.of_int(42))
    obj.put("s", Value.of_string("héllo"))
    obj.put("arr", Value.of_array(arr))
    return obj


@pytest.fixture
def example_bytes() -> bytes:
    """Expected wire image of ``example_object``."""
    return (
        b"\x00\x00\x00\x03"
        # n: INT 42
        b"\x03" b"\x00\x00\x00\x01n" b"\x00\x00\x00\x2a"
        # s: STRING "héllo" (6 UTF-8 bytes)
        b"\x08" b"\x00\x00\x00\x01s" b"\x00\x00\x00\x06h\xc3\xa9llo"
        # arr: ARRAY [true, false]
        b"\x09" b"\x00\x00\x00\x03arr" b"\x00\x00\x00\x02" b"\x07\x01" b"\x07\x00"
    )
