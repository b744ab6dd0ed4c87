"""Ordered UBF containers.

Both containers are order-preserving: the wire format has no ordering field,
so entry order on the wire is exactly container iteration order, and decoding
rebuilds containers in read order.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional

from .exceptions import ContractViolationError
from .value import Value


def _check_value(value: Any) -> None:
    if not isinstance(value, Value):
        raise ContractViolationError(f"Entry must be a Value, got {type(value).__name__}")


class Array:
    """Ordered, index-addressable sequence of values.

    Example:
        >>> arr = Array()
        >>> arr.add(Value.of_boolean(True))
        >>> arr.add(Value.of_boolean(False))
        >>> len(arr)
        2
        >>> arr.get(5) is None
        True
    """

    __slots__ = ("_items",)

    def __init__(self, capacity: int = 0) -> None:
        """Create an empty array.

        Args:
            capacity: Expected number of entries. Accepted for symmetry with
                the decoder, which knows the count up front; it never limits
                how many entries can be added.
        """
        self._items: list[Value] = []

    @classmethod
    def from_python(cls, items: Iterable[Any]) -> Array:
        """Build an array from an iterable of plain Python values."""
        arr = cls()
        for item in items:
            arr.add(Value.from_python(item))
        return arr

    def add(self, value: Value) -> None:
        """Append a value at the end."""
        _check_value(value)
        self._items.append(value)

    def get(self, index: int) -> Optional[Value]:
        """Return the value at ``index``, or None when out of bounds."""
        if index < 0 or index >= len(self._items):
            return None
        return self._items[index]

    def length(self) -> int:
        return len(self._items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array({self._items!r})"


class Object:
    """Ordered mapping from string keys to values.

    Putting an existing key replaces its value in place; the key keeps its
    original position.

    Example:
        >>> obj = Object()
        >>> obj.put("a", Value.of_int(1))
        >>> obj.put("b", Value.of_int(2))
        >>> obj.put("a", Value.of_int(3))
        >>> list(obj.keys())
        ['a', 'b']
        >>> obj.get("a").get_int()
        3
    """

    __slots__ = ("_entries",)

    def __init__(self, capacity: int = 0) -> None:
        """Create an empty object. ``capacity`` is a sizing hint only."""
        # dict preserves insertion order and keeps position on overwrite
        self._entries: dict[str, Value] = {}

    @classmethod
    def from_python(cls, mapping: Mapping[str, Any]) -> Object:
        """Build an object from a mapping of plain Python values."""
        obj = cls()
        for key, item in mapping.items():
            obj.put(key, Value.from_python(item))
        return obj

    def put(self, key: str, value: Value) -> None:
        """Insert or overwrite the entry for ``key``."""
        if not isinstance(key, str):
            raise ContractViolationError(f"Object key must be str, got {type(key).__name__}")
        _check_value(value)
        self._entries[key] = value

    def get(self, key: str) -> Optional[Value]:
        """Return the value for ``key``, or None if missing."""
        return self._entries.get(key)

    def length(self) -> int:
        return len(self._entries)

    def keys(self) -> Iterator[str]:
        return iter(self._entries.keys())

    def items(self) -> Iterator[tuple[str, Value]]:
        """Iterate over ``(key, value)`` pairs in insertion order."""
        return iter(self._entries.items())

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self._entries.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        # Order is part of the wire image, so compare entry sequences
        return list(self._entries.items()) == list(other._entries.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Object({self._entries!r})"
