"""Type registry for the UBF wire format.

Every value on the wire is preceded by a single-byte type code. The table
below is the wire contract: codes are never reassigned or reused.

    BYTE    (0x01)  — signed 8-bit integer
    SHORT   (0x02)  — signed 16-bit integer, big-endian
    INT     (0x03)  — signed 32-bit integer, big-endian
    LONG    (0x04)  — signed 64-bit integer, big-endian
    FLOAT   (0x05)  — IEEE-754 binary32, big-endian
    DOUBLE  (0x06)  — IEEE-754 binary64, big-endian
    BOOLEAN (0x07)  — one byte, 0x00 or 0x01
    STRING  (0x08)  — int32 byte length + UTF-8 bytes
    ARRAY   (0x09)  — int32 count + (tag, value) entries
    OBJECT  (0x0A)  — int32 count + (tag, key, value) entries
"""

from __future__ import annotations

import enum

from .exceptions import UnknownTagError


@enum.unique
class UbfType(enum.IntEnum):
    """Kinds of value supported by the format, valued by their wire code."""

    BYTE = 0x01
    SHORT = 0x02
    INT = 0x03
    LONG = 0x04
    FLOAT = 0x05
    DOUBLE = 0x06
    BOOLEAN = 0x07
    STRING = 0x08
    ARRAY = 0x09
    OBJECT = 0x0A

    @property
    def is_container(self) -> bool:
        return self is UbfType.ARRAY or self is UbfType.OBJECT


_BY_CODE: dict[int, UbfType] = {member.value: member for member in UbfType}

# Payload widths of the fixed-size kinds, in bytes.
FIXED_WIDTHS: dict[UbfType, int] = {
    UbfType.BYTE: 1,
    UbfType.SHORT: 2,
    UbfType.INT: 4,
    UbfType.LONG: 8,
    UbfType.FLOAT: 4,
    UbfType.DOUBLE: 8,
    UbfType.BOOLEAN: 1,
}

# Signed ranges of the integer kinds.
INT_RANGES: dict[UbfType, tuple[int, int]] = {
    UbfType.BYTE: (-(2**7), 2**7 - 1),
    UbfType.SHORT: (-(2**15), 2**15 - 1),
    UbfType.INT: (-(2**31), 2**31 - 1),
    UbfType.LONG: (-(2**63), 2**63 - 1),
}


def type_of(code: int) -> UbfType:
    """Resolve a wire code to its type.

    Args:
        code: Type byte read from the stream (0-255)

    Returns:
        The matching UbfType

    Raises:
        UnknownTagError: If the code is not in the registry
    """
    try:
        return _BY_CODE[code]
    except KeyError:
        raise UnknownTagError(code) from None


def code_of(tag: UbfType) -> int:
    """Return the wire code of a type."""
    return int(tag)
