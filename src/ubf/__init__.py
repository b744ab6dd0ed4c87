"""ubf: compact binary format for trees of typed values

A Python library for the UBF wire format: a self-describing, big-endian
binary encoding of ordered objects and arrays holding bytes, shorts, ints,
longs, floats, doubles, booleans and UTF-8 strings.

Key Features:
- Tagged Value model with Optional-returning getters
- Order-preserving Array and Object containers
- Iterative encoder/decoder with depth and length limits for untrusted input
- Pydantic model adapter

Quick Start:
    >>> from ubf import Array, Object, Value, decode, encode
    >>>
    >>> arr = Array()
    >>> arr.add(Value.of_boolean(True))
    >>> arr.add(Value.of_boolean(False))
    >>>
    >>> obj = Object()
    >>> obj.put("n", Value.of_int(42))
    >>> obj.put("s", Value.of_string("héllo"))
    >>> obj.put("arr", Value.of_array(arr))
    >>>
    >>> data = encode(obj)
    >>> decoded = decode(data)
    >>> decoded.get("n").get_int()
    42
"""

from __future__ import annotations

from .codec import Decoder, Encoder, decode, encode
from .config import DEFAULT_CONFIG, CodecConfig
from .containers import Array, Object
from .exceptions import (
    ContractViolationError,
    DecodeError,
    DepthExceededError,
    DuplicateKeyError,
    EncodeError,
    InvalidLengthError,
    TransportError,
    TruncatedInputError,
    UbfError,
    UnknownTagError,
)
from .models import decode_model, encode_model, from_object, to_object
from .types import UbfType, code_of, type_of
from .utils import encoded_size
from .value import Value

__version__ = "0.1.0"

__all__ = [
    # Data model
    "UbfType",
    "type_of",
    "code_of",
    "Value",
    "Array",
    "Object",
    # Codec
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "UbfError",
    "ContractViolationError",
    "DepthExceededError",
    "TransportError",
    "EncodeError",
    "DecodeError",
    "UnknownTagError",
    "TruncatedInputError",
    "InvalidLengthError",
    "DuplicateKeyError",
    # Pydantic
    "to_object",
    "from_object",
    "encode_model",
    "decode_model",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
