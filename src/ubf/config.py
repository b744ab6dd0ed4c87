"""Codec limits.

This module provides the configuration dataclass shared by the encoder and
the decoder. Both sides must run with the same limits, otherwise the encoder
may emit trees the decoder refuses.
"""

from __future__ import annotations

from dataclasses import dataclass

# Maximum container nesting, root object included.
MAX_DEPTH: int = 64

# Maximum element count of a container, or byte length of a string (16 MiB).
MAX_LENGTH: int = 16 * 1024 * 1024

# Declared lengths are signed 32-bit on the wire.
INT32_MAX: int = 2**31 - 1


@dataclass(frozen=True)
class CodecConfig:
    """Limits applied during a conversion.

    Attributes:
        max_depth: Maximum container nesting depth (default 64).
            The root object counts as depth 1, so ``max_depth=1`` accepts a
            flat object and rejects any nested array or object.

        max_length: Maximum declared length (default 16 MiB).
            Applies to string byte lengths and to the entry count of arrays
            and objects. The decoder checks it before allocating.

    Examples:
        ```python
        from ubf import CodecConfig, Decoder

        # Untrusted input from the network: keep trees shallow and small
        config = CodecConfig(max_depth=16, max_length=65_536)
        obj = Decoder(config).convert(sock.makefile("rb"))
        ```
    """

    max_depth: int = MAX_DEPTH
    max_length: int = MAX_LENGTH

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

        if self.max_length < 0 or self.max_length > INT32_MAX:
            raise ValueError(f"max_length must be 0-{INT32_MAX}, got {self.max_length}")


DEFAULT_CONFIG = CodecConfig()
