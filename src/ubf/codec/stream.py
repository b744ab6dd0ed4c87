"""Byte channel adapters.

This module wraps any binary file-like object (``io.BytesIO``, an open file,
``socket.makefile("rb")`` ...) with the big-endian primitive reads and writes
the codec needs. All operations are deterministic and big-endian.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from ..exceptions import InvalidLengthError, TransportError, TruncatedInputError
from ..types import UbfType

_FORMATS: dict[UbfType, struct.Struct] = {
    UbfType.BYTE: struct.Struct(">b"),
    UbfType.SHORT: struct.Struct(">h"),
    UbfType.INT: struct.Struct(">i"),
    UbfType.LONG: struct.Struct(">q"),
    UbfType.FLOAT: struct.Struct(">f"),
    UbfType.DOUBLE: struct.Struct(">d"),
    UbfType.BOOLEAN: struct.Struct(">B"),
}

_INT32 = _FORMATS[UbfType.INT]

# Upper bound on a single read() request, so a large declared length is
# consumed incrementally instead of in one allocation.
_READ_CHUNK = 64 * 1024


class StreamWriter:
    """Writes UBF primitives to a binary output stream.

    Example:
        >>> buf = io.BytesIO()
        >>> writer = StreamWriter(buf)
        >>> writer.write_tag(UbfType.INT)
        >>> writer.write_fixed(UbfType.INT, 42)
        >>> buf.getvalue()
        b'\\x03\\x00\\x00\\x00*'
    """

    def __init__(self, output: BinaryIO) -> None:
        self._output = output
        self._written = 0

    def bytes_written(self) -> int:
        return self._written

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes.

        Raises:
            TransportError: If the underlying stream fails
        """
        view = memoryview(data)
        while view:
            try:
                n = self._output.write(view)
            except OSError as err:
                raise TransportError(
                    f"Write failed after {self._written} bytes: {err}"
                ) from err
            # Raw streams may accept only part of the buffer; None means all of it
            n = len(view) if n is None else n
            if n == 0:
                raise TransportError(f"Stream accepted no data after {self._written} bytes")
            self._written += n
            view = view[n:]

    def write_tag(self, tag: UbfType) -> None:
        self.write_bytes(bytes((tag.value,)))

    def write_length(self, length: int) -> None:
        """Write a signed 32-bit length prefix."""
        self.write_bytes(_INT32.pack(length))

    def write_fixed(self, kind: UbfType, value: int | float | bool) -> None:
        """Write a fixed-width primitive payload."""
        if kind is UbfType.BOOLEAN:
            value = 1 if value else 0
        self.write_bytes(_FORMATS[kind].pack(value))

    def write_string(self, raw: bytes) -> None:
        """Write an already UTF-8 encoded string with its length prefix."""
        self.write_length(len(raw))
        self.write_bytes(raw)


class StreamReader:
    """Reads UBF primitives from a binary input stream.

    Every read is exact: a stream that ends early raises TruncatedInputError
    instead of returning short data.
    """

    def __init__(self, input: BinaryIO) -> None:
        self._input = input
        self._consumed = 0

    def bytes_consumed(self) -> int:
        return self._consumed

    def _read_some(self, n: int) -> bytes:
        try:
            chunk = self._input.read(n)
        except OSError as err:
            raise TransportError(f"Read failed after {self._consumed} bytes: {err}") from err
        if chunk is None:
            raise TransportError("Stream is non-blocking and has no data available")
        return chunk

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes.

        Raises:
            TruncatedInputError: If the stream ends first
            TransportError: If the underlying stream fails
        """
        if n == 0:
            return b""

        chunks: list[bytes] = []
        remaining = n
        while remaining > 0:
            chunk = self._read_some(min(remaining, _READ_CHUNK))
            if not chunk:
                raise TruncatedInputError(
                    f"Truncated data: need {n} bytes at offset {self._consumed}, "
                    f"got {n - remaining}"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
            self._consumed += len(chunk)

        return chunks[0] if len(chunks) == 1 else b"".join(chunks)

    def at_eof(self) -> bool:
        """Return True if the stream has no more bytes.

        Consumes one byte when it does not, so only call it once the
        interesting data has been read.
        """
        return not self._read_some(1)

    def read_tag_code(self) -> int:
        return self.read_exact(1)[0]

    def read_length(self, max_length: int, what: str) -> int:
        """Read a signed 32-bit length prefix and validate it.

        Raises:
            InvalidLengthError: If the length is negative or above max_length
        """
        (length,) = _INT32.unpack(self.read_exact(4))
        if length < 0 or length > max_length:
            raise InvalidLengthError(length, max_length, what)
        return length

    def read_fixed(self, kind: UbfType) -> int | float:
        fmt = _FORMATS[kind]
        (value,) = fmt.unpack(self.read_exact(fmt.size))
        return value

    def read_string(self, max_length: int) -> bytes:
        """Read a length-prefixed string and return its raw UTF-8 bytes."""
        length = self.read_length(max_length, "string")
        return self.read_exact(length)
