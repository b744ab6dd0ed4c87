"""Encoded size calculation.

This module provides functions to calculate the encoded size of a tree
without actually encoding it.
"""

from __future__ import annotations

from typing import Union

from ..containers import Array, Object
from ..exceptions import ContractViolationError, EncodeError
from ..types import FIXED_WIDTHS, UbfType
from ..value import Value

# Length prefix of strings and containers
_LENGTH_BYTES = 4
_TAG_BYTES = 1


def _value_size(value: Value, pending: list[Union[Array, Object]]) -> int:
    kind = value.get_type()
    if kind is None:
        raise EncodeError("Cannot size an empty value")
    if kind is UbfType.STRING:
        return _LENGTH_BYTES + len(value.get_string().encode("utf-8"))
    if kind is UbfType.ARRAY:
        pending.append(value.get_array())
        return 0
    if kind is UbfType.OBJECT:
        pending.append(value.get_object())
        return 0
    return FIXED_WIDTHS[kind]


def encoded_size(obj: Object) -> int:
    """Calculate the encoded size of an object in bytes.

    The result equals ``len(encode(obj))`` for any tree encode() accepts.
    Depth and length limits are not checked here.

    For a single int entry under key "n" that is 4 bytes of entry count,
    1 tag byte, 4 + 1 bytes for the key and 4 bytes of int payload.

    Args:
        obj: Root object

    Returns:
        Size in bytes

    Raises:
        ContractViolationError: If obj is not an Object
        EncodeError: If the tree contains an empty value

    Example:
        >>> obj = Object()
        >>> obj.put("n", Value.of_int(42))
        >>> encoded_size(obj)
        14
    """
    if not isinstance(obj, Object):
        raise ContractViolationError(f"Root must be an Object, got {type(obj).__name__}")

    total = 0
    pending: list[Union[Array, Object]] = [obj]
    while pending:
        container = pending.pop()
        total += _LENGTH_BYTES
        if isinstance(container, Object):
            for key, value in container.items():
                total += _TAG_BYTES + _LENGTH_BYTES + len(key.encode("utf-8"))
                total += _value_size(value, pending)
        else:
            for value in container:
                total += _TAG_BYTES + _value_size(value, pending)

    return total
