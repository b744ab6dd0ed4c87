"""UBF encoder.

This module provides the Encoder class and the encode() convenience function,
which serialize a root Object into the UBF wire format.

The walk is iterative: open containers live on an explicit stack, so nesting
depth is bounded by CodecConfig.max_depth and never by the interpreter's
recursion limit.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Iterator, Optional, Union

from ..config import DEFAULT_CONFIG, CodecConfig
from ..containers import Array, Object
from ..exceptions import (
    ContractViolationError,
    DepthExceededError,
    EncodeError,
    InvalidLengthError,
)
from ..log import get_logger
from ..types import FIXED_WIDTHS, UbfType
from ..value import Value
from .stream import StreamWriter

logger = get_logger(__name__)

# An open container: its kind and an iterator over the entries still to write.
_Frame = tuple[UbfType, Iterator[Union[tuple[str, Value], Value]]]


class Encoder:
    """Serializes Object trees to a binary stream.

    An Encoder holds only its configuration; each convert() call keeps its
    traversal state in local variables. Instances may be reused for
    sequential conversions but must not be shared between threads mid-call.

    Example:
        ```python
        from ubf import Encoder, Object, Value

        obj = Object()
        obj.put("n", Value.of_int(42))

        with open("state.ubf", "wb") as f:
            Encoder().convert(f, obj)
        ```
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def convert(self, output: BinaryIO, obj: Object) -> None:
        """Write ``obj`` to ``output`` in UBF format.

        Args:
            output: Writable binary stream
            obj: Root object (arrays and primitives cannot be top-level)

        Raises:
            ContractViolationError: If output is None or obj is not an Object
            DepthExceededError: If nesting exceeds config.max_depth
            InvalidLengthError: If a string or container exceeds config.max_length
            EncodeError: If a value is empty or a string is not encodable
            TransportError: If writing to output fails
        """
        if output is None:
            raise ContractViolationError("output must not be None")
        if not isinstance(obj, Object):
            raise ContractViolationError(
                f"Root must be an Object, got {type(obj).__name__}"
            )

        log = logger.new(max_depth=self.config.max_depth)
        log.debug("encode start", entries=len(obj))

        writer = StreamWriter(output)
        self._walk(writer, obj)

        log.debug("encode done", nbytes=writer.bytes_written())

    def _open(self, writer: StreamWriter, stack: list[_Frame], kind: UbfType,
              container: Union[Array, Object]) -> None:
        """Write a container's length and push it onto the stack."""
        if len(stack) + 1 > self.config.max_depth:
            raise DepthExceededError(
                f"Nesting depth exceeds max_depth={self.config.max_depth}"
            )
        length = len(container)
        if length > self.config.max_length:
            raise InvalidLengthError(length, self.config.max_length, kind.name.lower())

        writer.write_length(length)
        entries = container.items() if kind is UbfType.OBJECT else iter(container)
        stack.append((kind, entries))

    def _encode_string(self, text: str) -> bytes:
        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as err:
            raise EncodeError(f"String is not encodable as UTF-8: {err}") from err
        if len(raw) > self.config.max_length:
            raise InvalidLengthError(len(raw), self.config.max_length, "string")
        return raw

    def _walk(self, writer: StreamWriter, root: Object) -> None:
        stack: list[_Frame] = []
        self._open(writer, stack, UbfType.OBJECT, root)

        while stack:
            kind, entries = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            if kind is UbfType.OBJECT:
                key, value = entry
            else:
                key, value = None, entry

            value_type = value.get_type()
            if value_type is None:
                where = f"key {key!r}" if key is not None else "array entry"
                raise EncodeError(f"Cannot encode empty value at {where}")

            # Refuse before writing the entry header
            if value_type.is_container and len(stack) + 1 > self.config.max_depth:
                raise DepthExceededError(
                    f"Nesting depth exceeds max_depth={self.config.max_depth}"
                )

            raw_key = self._encode_string(key) if key is not None else None

            writer.write_tag(value_type)
            if raw_key is not None:
                writer.write_string(raw_key)

            if value_type is UbfType.OBJECT:
                self._open(writer, stack, value_type, value.get_object())
            elif value_type is UbfType.ARRAY:
                self._open(writer, stack, value_type, value.get_array())
            elif value_type is UbfType.STRING:
                writer.write_string(self._encode_string(value.get_string()))
            elif value_type in FIXED_WIDTHS:
                writer.write_fixed(value_type, value.to_python())
            else:
                raise EncodeError(f"Unsupported value type {value_type!r}")


def encode(obj: Object, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a root Object to bytes.

    Args:
        obj: Root object to encode
        config: Optional codec limits (defaults to DEFAULT_CONFIG)

    Returns:
        UBF binary representation

    Raises:
        Same as Encoder.convert(), except TransportError cannot occur

    Example:
        >>> obj = Object()
        >>> obj.put("ok", Value.of_boolean(True))
        >>> encode(obj)
        b'\\x00\\x00\\x00\\x01\\x07\\x00\\x00\\x00\\x02ok\\x01'
    """
    buf = io.BytesIO()
    Encoder(config).convert(buf, obj)
    return buf.getvalue()
