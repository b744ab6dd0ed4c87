"""Tests for CodecConfig validation."""

from __future__ import annotations

import dataclasses

import pytest

from ubf import DEFAULT_CONFIG, CodecConfig


class TestCodecConfig:
    """Tests for CodecConfig validation."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = CodecConfig()

        assert config.max_depth == 64
        assert config.max_length == 16 * 1024 * 1024
        assert config == DEFAULT_CONFIG

    def test_custom_config(self) -> None:
        config = CodecConfig(max_depth=8, max_length=1024)

        assert config.max_depth == 8
        assert config.max_length == 1024

    def test_invalid_depth_raises(self) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            CodecConfig(max_depth=0)

    def test_invalid_length_raises(self) -> None:
        with pytest.raises(ValueError, match="max_length must be"):
            CodecConfig(max_length=-1)

        with pytest.raises(ValueError, match="max_length must be"):
            CodecConfig(max_length=2**31)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.max_depth = 1  # type: ignore[misc]
