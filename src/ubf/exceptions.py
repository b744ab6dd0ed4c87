"""Exception hierarchy for ubf.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from UbfError for easy catching of any ubf-specific error.
"""

from __future__ import annotations


class UbfError(Exception):
    """Base exception for all ubf errors."""

    pass


class ContractViolationError(UbfError, TypeError):
    """Raised when a caller passes a missing or ill-typed required argument.

    Raised synchronously, before any state change or I/O.

    Examples:
        - ``None`` passed to ``Value.set_string``
        - A ``str`` passed to ``Value.set_int``
        - An integer outside the signed range of its kind
        - A non-``Object`` root passed to ``Encoder.convert``
    """

    pass


class DepthExceededError(UbfError):
    """Raised when container nesting passes the configured maximum depth.

    Raised by both the encoder and the decoder. The whole conversion is
    aborted; no partial output or tree is returned.
    """

    pass


class TransportError(UbfError):
    """Raised when the underlying byte channel fails to read or write."""

    pass


class EncodeError(UbfError):
    """Raised when a tree cannot be serialized."""

    pass


class DecodeError(UbfError):
    """Raised when decoding binary data fails.

    Examples:
        - Unknown type tag
        - Truncated data (insufficient bytes)
        - Negative or oversized length field
        - Invalid UTF-8 in a string payload
        - Duplicate key inside one object
    """

    pass


class UnknownTagError(DecodeError):
    """Raised when a type code is not present in the type registry."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Unknown type tag 0x{code:02x}")
        self.code = code


class TruncatedInputError(DecodeError):
    """Raised when the stream ends before a value is fully read."""

    pass


class InvalidLengthError(DecodeError):
    """Raised when a length is negative or exceeds the configured maximum.

    The decoder raises it before allocating anything for the payload. The
    encoder raises it for payloads the decoder would refuse.
    """

    def __init__(self, length: int, max_length: int, what: str) -> None:
        super().__init__(f"Invalid {what} length {length} (allowed: 0-{max_length})")
        self.length = length
        self.max_length = max_length


class DuplicateKeyError(DecodeError):
    """Raised when a decoded object carries the same key twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate object key {key!r}")
        self.key = key
