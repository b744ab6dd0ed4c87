"""Inspect UBF files from the command line."""

from __future__ import annotations

import json
import math
from pathlib import Path

from ..codec.decoder import decode
from ..containers import Array, Object
from ..types import UbfType
from ..utils.sizing import encoded_size
from ..value import Value


# JSON has no literal for these; print them as strings instead
_NON_FINITE = {"nan": "NaN", "inf": "Infinity", "-inf": "-Infinity"}


def load_file(file_path: Path) -> Object:
    """Decode a UBF file, rejecting trailing bytes."""
    return decode(file_path.read_bytes())


def _json_safe(data: object) -> object:
    if isinstance(data, float) and not math.isfinite(data):
        return _NON_FINITE[repr(data)]
    if isinstance(data, list):
        return [_json_safe(item) for item in data]
    if isinstance(data, dict):
        return {key: _json_safe(item) for key, item in data.items()}
    return data


def _annotate(value: Value) -> object:
    """Plain JSON form that keeps each primitive's kind visible."""
    kind = value.get_type()
    if kind is UbfType.OBJECT:
        return _annotate_object(value.get_object())
    if kind is UbfType.ARRAY:
        return _annotate_array(value.get_array())
    return {kind.name.lower(): value.to_python()}


def _annotate_array(arr: Array) -> list[object]:
    return [_annotate(item) for item in arr]


def _annotate_object(obj: Object) -> dict[str, object]:
    return {key: _annotate(value) for key, value in obj.items()}


def dump_file(file_path: Path, typed: bool = False) -> None:
    """Print the decoded tree of a UBF file as indented JSON.

    Args:
        file_path: Path to the UBF file
        typed: If True, wrap every primitive as ``{"<kind>": value}``

    Non-finite floats are printed as the strings "NaN", "Infinity" and
    "-Infinity" so the output stays valid JSON.
    """
    obj = load_file(file_path)
    tree = _annotate_object(obj) if typed else obj.to_python()
    print(json.dumps(_json_safe(tree), indent=2, ensure_ascii=False, allow_nan=False))


def size_file(file_path: Path) -> None:
    """Print entry count and encoded size of a UBF file."""
    obj = load_file(file_path)
    print(f"{file_path.name}: {len(obj)} top-level entries, {encoded_size(obj)} bytes")
