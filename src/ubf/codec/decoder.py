"""UBF decoder.

This module provides the Decoder class and the decode() convenience function,
which parse UBF binary data back into an Object tree.

Input is treated as untrusted. Every length is validated before anything is
allocated for it, nesting is capped by CodecConfig.max_depth using an
explicit stack (never the interpreter's recursion), and any failure aborts
the whole conversion without returning a partial tree.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Union

from ..config import DEFAULT_CONFIG, CodecConfig
from ..containers import Array, Object
from ..exceptions import (
    ContractViolationError,
    DecodeError,
    DepthExceededError,
    DuplicateKeyError,
    UbfError,
)
from ..log import get_logger
from ..types import UbfType, type_of
from ..value import Value
from .stream import StreamReader

logger = get_logger(__name__)

_NUMERIC_SETTERS: dict[UbfType, Callable[[Value, int | float], None]] = {
    UbfType.BYTE: Value.set_byte,
    UbfType.SHORT: Value.set_short,
    UbfType.INT: Value.set_int,
    UbfType.LONG: Value.set_long,
    UbfType.FLOAT: Value.set_float,
    UbfType.DOUBLE: Value.set_double,
}


@dataclass
class _Frame:
    """A container being filled, with the number of entries still to read."""

    kind: UbfType
    container: Union[Array, Object]
    remaining: int


class Decoder:
    """Parses UBF binary streams into Object trees.

    Like the Encoder, a Decoder holds only its configuration and may be
    reused for sequential conversions.

    Example:
        ```python
        from ubf import Decoder

        with open("state.ubf", "rb") as f:
            obj = Decoder().convert(f)
        print(obj.get("n").get_int())
        ```
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def convert(self, input: BinaryIO) -> Object:
        """Read one root Object from ``input``.

        Args:
            input: Readable binary stream positioned at the root object

        Returns:
            The decoded root Object

        Raises:
            ContractViolationError: If input is None
            UnknownTagError: If a type byte is not in the registry
            TruncatedInputError: If the stream ends mid-value
            InvalidLengthError: If a declared length is negative or too large
            DuplicateKeyError: If an object repeats a key
            DecodeError: For other corrupt input (bad UTF-8, bad boolean byte)
            DepthExceededError: If nesting exceeds config.max_depth
            TransportError: If reading from input fails
        """
        if input is None:
            raise ContractViolationError("input must not be None")

        reader = StreamReader(input)
        return self._convert(reader)

    def _convert(self, reader: StreamReader) -> Object:
        log = logger.new(max_depth=self.config.max_depth)
        log.debug("decode start")
        try:
            root = self._walk(reader)
        except UbfError as err:
            log.debug("decode failed", error=str(err), offset=reader.bytes_consumed())
            raise
        log.debug("decode done", nbytes=reader.bytes_consumed(), entries=len(root))
        return root

    def _read_text(self, reader: StreamReader) -> str:
        raw = reader.read_string(self.config.max_length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise DecodeError(f"Invalid UTF-8 in string: {err}") from err

    def _read_value(self, reader: StreamReader, tag: UbfType,
                    stack: list[_Frame]) -> Value:
        """Read one payload of kind ``tag``.

        Containers are created empty and pushed onto ``stack``; their entries
        are read by the main loop.
        """
        value = Value()

        if tag is UbfType.OBJECT or tag is UbfType.ARRAY:
            if len(stack) + 1 > self.config.max_depth:
                raise DepthExceededError(
                    f"Nesting depth exceeds max_depth={self.config.max_depth}"
                )
            length = reader.read_length(self.config.max_length, tag.name.lower())
            if tag is UbfType.OBJECT:
                child: Union[Array, Object] = Object(length)
                value.set_object(child)
            else:
                child = Array(length)
                value.set_array(child)
            stack.append(_Frame(tag, child, length))
            return value

        if tag is UbfType.STRING:
            value.set_string(self._read_text(reader))
            return value

        if tag is UbfType.BOOLEAN:
            flag = reader.read_fixed(tag)
            if flag not in (0, 1):
                raise DecodeError(f"Invalid boolean byte 0x{flag:02x}")
            value.set_boolean(flag == 1)
            return value

        _NUMERIC_SETTERS[tag](value, reader.read_fixed(tag))
        return value

    def _walk(self, reader: StreamReader) -> Object:
        root = Object()
        root_length = reader.read_length(self.config.max_length, "object")
        stack = [_Frame(UbfType.OBJECT, root, root_length)]

        while stack:
            frame = stack[-1]
            if frame.remaining == 0:
                stack.pop()
                continue
            frame.remaining -= 1

            tag = type_of(reader.read_tag_code())

            # A nested container is attached empty and filled by later iterations
            parent = frame.container
            if isinstance(parent, Object):
                key = self._read_text(reader)
                if key in parent:
                    raise DuplicateKeyError(key)
                parent.put(key, self._read_value(reader, tag, stack))
            else:
                parent.add(self._read_value(reader, tag, stack))

        return root


def decode(data: bytes, config: Optional[CodecConfig] = None, *,
           strict: bool = True) -> Object:
    """Decode UBF bytes into a root Object.

    Args:
        data: Bytes-like buffer holding one encoded root object
        config: Optional codec limits (defaults to DEFAULT_CONFIG)
        strict: If True, bytes left over after the root object are an error

    Returns:
        The decoded root Object

    Raises:
        Same as Decoder.convert(); additionally DecodeError for trailing
        data in strict mode
    """
    if data is None:
        raise ContractViolationError("data must not be None")

    reader = StreamReader(io.BytesIO(data))
    obj = Decoder(config)._convert(reader)

    if strict and not reader.at_eof():
        raise DecodeError(
            f"Trailing data after root object at offset {reader.bytes_consumed() - 1}"
        )

    return obj
