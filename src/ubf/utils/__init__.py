"""Utility functions for ubf.

This module provides size calculation and other utilities.
"""

from __future__ import annotations

from .sizing import encoded_size

__all__ = [
    "encoded_size",
]
