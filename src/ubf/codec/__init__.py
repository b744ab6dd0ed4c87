"""Binary codec for ubf.

This module provides encoding and decoding between Object trees and the UBF
wire format.
"""

from __future__ import annotations

from .decoder import Decoder, decode
from .encoder import Encoder, encode
from .stream import StreamReader, StreamWriter

__all__ = [
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "StreamReader",
    "StreamWriter",
]
