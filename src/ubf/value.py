"""Tagged value container.

A Value holds exactly one payload together with the kind of that payload.
Setters replace kind and payload together; getters of any other kind return
``None`` rather than raising, since asking a value "are you an int?" is an
ordinary question and not an error.

Example:
    >>> v = Value.of_int(42)
    >>> v.get_int()
    42
    >>> v.get_string() is None
    True
    >>> v.set_string("héllo")
    >>> v.get_type()
    <UbfType.STRING: 8>
"""

from __future__ import annotations

import math
import struct
from typing import TYPE_CHECKING, Any, Optional

from .exceptions import ContractViolationError
from .types import INT_RANGES, UbfType

if TYPE_CHECKING:
    from .containers import Array, Object


def _round_to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 single-precision value."""
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError as err:
        raise ContractViolationError(f"Value {value} overflows a 32-bit float") from err


class Value:
    """A single dynamically-typed UBF value.

    Attributes:
        _type: Kind of the current payload, or None for an empty value
        _payload: The payload itself
    """

    __slots__ = ("_type", "_payload")

    def __init__(self) -> None:
        """Create an empty value with no kind and no payload."""
        self._type: Optional[UbfType] = None
        self._payload: Any = None

    # ── Typed constructors ────────────────────────────────────

    @classmethod
    def of_byte(cls, value: int) -> Value:
        v = cls()
        v.set_byte(value)
        return v

    @classmethod
    def of_short(cls, value: int) -> Value:
        v = cls()
        v.set_short(value)
        return v

    @classmethod
    def of_int(cls, value: int) -> Value:
        v = cls()
        v.set_int(value)
        return v

    @classmethod
    def of_long(cls, value: int) -> Value:
        v = cls()
        v.set_long(value)
        return v

    @classmethod
    def of_float(cls, value: float) -> Value:
        v = cls()
        v.set_float(value)
        return v

    @classmethod
    def of_double(cls, value: float) -> Value:
        v = cls()
        v.set_double(value)
        return v

    @classmethod
    def of_boolean(cls, value: bool) -> Value:
        v = cls()
        v.set_boolean(value)
        return v

    @classmethod
    def of_string(cls, value: str) -> Value:
        v = cls()
        v.set_string(value)
        return v

    @classmethod
    def of_array(cls, value: Array) -> Value:
        v = cls()
        v.set_array(value)
        return v

    @classmethod
    def of_object(cls, value: Object) -> Value:
        v = cls()
        v.set_object(value)
        return v

    @classmethod
    def from_python(cls, obj: Any) -> Value:
        """Build a value tree from plain Python data.

        Mapping:
          - bool        → BOOLEAN
          - int         → INT if it fits 32 bits, else LONG
          - float       → DOUBLE
          - str         → STRING
          - list, tuple → ARRAY
          - dict        → OBJECT (keys must be str)
          - Value       → returned unchanged

        Raises:
            ContractViolationError: For None, unsupported types, non-string
                keys or integers outside the 64-bit range
        """
        if isinstance(obj, Value):
            return obj

        # bool before int: isinstance(True, int) is True
        if isinstance(obj, bool):
            return cls.of_boolean(obj)

        if isinstance(obj, int):
            lo, hi = INT_RANGES[UbfType.INT]
            if lo <= obj <= hi:
                return cls.of_int(obj)
            return cls.of_long(obj)

        if isinstance(obj, float):
            return cls.of_double(obj)

        if isinstance(obj, str):
            return cls.of_string(obj)

        # Import here to avoid circular dependency
        from .containers import Array, Object

        if isinstance(obj, (list, tuple)):
            return cls.of_array(Array.from_python(obj))

        if isinstance(obj, dict):
            return cls.of_object(Object.from_python(obj))

        raise ContractViolationError(f"Cannot convert {type(obj).__name__} to a UBF value")

    # ── Introspection ─────────────────────────────────────────

    def get_type(self) -> Optional[UbfType]:
        """Return the kind of the current payload (None if never set)."""
        return self._type

    def to_python(self) -> Any:
        """Convert back to plain Python data (Array → list, Object → dict)."""
        if self._type is UbfType.ARRAY or self._type is UbfType.OBJECT:
            return self._payload.to_python()
        return self._payload

    # ── Setters ───────────────────────────────────────────────

    def _set_integer(self, kind: UbfType, value: int) -> None:
        if value is None:
            raise ContractViolationError(f"{kind.name} payload must not be None")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ContractViolationError(
                f"{kind.name} payload must be int, got {type(value).__name__}"
            )
        lo, hi = INT_RANGES[kind]
        if value < lo or value > hi:
            raise ContractViolationError(
                f"{kind.name} payload {value} out of range [{lo}, {hi}]"
            )
        self._type = kind
        self._payload = value

    def _set_real(self, kind: UbfType, value: float) -> None:
        if value is None:
            raise ContractViolationError(f"{kind.name} payload must not be None")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ContractViolationError(
                f"{kind.name} payload must be float, got {type(value).__name__}"
            )
        try:
            real = float(value)
        except OverflowError as err:
            raise ContractViolationError(f"{kind.name} payload {value} overflows a float") from err
        if kind is UbfType.FLOAT:
            real = _round_to_float32(real)
        self._type = kind
        self._payload = real

    def set_byte(self, value: int) -> None:
        self._set_integer(UbfType.BYTE, value)

    def set_short(self, value: int) -> None:
        self._set_integer(UbfType.SHORT, value)

    def set_int(self, value: int) -> None:
        self._set_integer(UbfType.INT, value)

    def set_long(self, value: int) -> None:
        self._set_integer(UbfType.LONG, value)

    def set_float(self, value: float) -> None:
        """Set a single-precision payload.

        The value is rounded to binary32 on the way in, so the stored payload
        is exactly what the decoder will read back.
        """
        self._set_real(UbfType.FLOAT, value)

    def set_double(self, value: float) -> None:
        self._set_real(UbfType.DOUBLE, value)

    def set_boolean(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ContractViolationError(
                f"BOOLEAN payload must be bool, got {type(value).__name__}"
            )
        self._type = UbfType.BOOLEAN
        self._payload = value

    def set_string(self, value: str) -> None:
        if not isinstance(value, str):
            raise ContractViolationError(
                f"STRING payload must be str, got {type(value).__name__}"
            )
        self._type = UbfType.STRING
        self._payload = value

    def set_array(self, value: Array) -> None:
        # Import here to avoid circular dependency
        from .containers import Array

        if not isinstance(value, Array):
            raise ContractViolationError(
                f"ARRAY payload must be Array, got {type(value).__name__}"
            )
        self._type = UbfType.ARRAY
        self._payload = value

    def set_object(self, value: Object) -> None:
        from .containers import Object

        if not isinstance(value, Object):
            raise ContractViolationError(
                f"OBJECT payload must be Object, got {type(value).__name__}"
            )
        self._type = UbfType.OBJECT
        self._payload = value

    # ── Getters ───────────────────────────────────────────────

    def _get(self, kind: UbfType) -> Any:
        return self._payload if self._type is kind else None

    def get_byte(self) -> Optional[int]:
        return self._get(UbfType.BYTE)

    def get_short(self) -> Optional[int]:
        return self._get(UbfType.SHORT)

    def get_int(self) -> Optional[int]:
        return self._get(UbfType.INT)

    def get_long(self) -> Optional[int]:
        return self._get(UbfType.LONG)

    def get_float(self) -> Optional[float]:
        return self._get(UbfType.FLOAT)

    def get_double(self) -> Optional[float]:
        return self._get(UbfType.DOUBLE)

    def get_boolean(self) -> Optional[bool]:
        return self._get(UbfType.BOOLEAN)

    def get_string(self) -> Optional[str]:
        return self._get(UbfType.STRING)

    def get_array(self) -> Optional[Array]:
        return self._get(UbfType.ARRAY)

    def get_object(self) -> Optional[Object]:
        return self._get(UbfType.OBJECT)

    # ── Dunder ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._type is not other._type:
            return False
        if self._payload != other._payload:
            return False
        # -0.0 == 0.0 in Python but they differ on the wire
        if self._type in (UbfType.FLOAT, UbfType.DOUBLE) and self._payload == 0.0:
            return math.copysign(1.0, self._payload) == math.copysign(1.0, other._payload)
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._type is None:
            return "Value()"
        return f"Value({self._type.name}, {self._payload!r})"
