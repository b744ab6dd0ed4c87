"""Pydantic model adapter.

This module maps Pydantic models onto UBF objects so typed application
messages can travel over the format without hand-building Value trees.

Example:
    >>> from pydantic import BaseModel, Field
    >>> class Status(BaseModel):
    ...     vehicle_id: int = Field(ge=0, le=255)
    ...     label: str
    ...     depths: list[float] = []
    >>> data = encode_model(Status(vehicle_id=42, label="héllo", depths=[1.5]))
    >>> decode_model(Status, data)
    Status(vehicle_id=42, label='héllo', depths=[1.5])

Field values are dumped in Pydantic's JSON mode (enums become their values,
datetimes become ISO strings) and ``None`` fields are omitted, since the
format has no null. On the way back, any nullable field missing from the
object is filled in as ``None`` before validation. Integers map to INT or
LONG and floats to DOUBLE.
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from .codec.decoder import decode
from .codec.encoder import encode
from .config import CodecConfig
from .containers import Object
from .exceptions import ContractViolationError, DecodeError, EncodeError

T = TypeVar("T", bound=BaseModel)

_NoneType = type(None)


def _accepts_none(annotation: Any) -> bool:
    if annotation is None or annotation is _NoneType or annotation is Any:
        return True
    origin = get_origin(annotation)
    if origin is Annotated:
        return _accepts_none(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return _NoneType in get_args(annotation)
    return False


def _restore_none(annotation: Any, data: Any) -> Any:
    """Put back the ``None`` fields that to_object() left out of ``data``."""
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return _restore_none(args[0], data)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not _NoneType]
        # Ambiguous unions are left for pydantic to sort out
        return _restore_none(members[0], data) if len(members) == 1 else data

    if isinstance(data, list):
        if origin in (list, set, frozenset) and len(args) == 1:
            return [_restore_none(args[0], item) for item in data]
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            return [_restore_none(args[0], item) for item in data]
        if origin is tuple and len(args) == len(data):
            return [_restore_none(arg, item) for arg, item in zip(args, data)]
        return data

    if not isinstance(data, dict):
        return data

    if origin is dict and len(args) == 2:
        return {key: _restore_none(args[1], item) for key, item in data.items()}

    if origin is None and isinstance(annotation, type) and issubclass(annotation, BaseModel):
        restored = dict(data)
        for name, field in annotation.model_fields.items():
            if name in restored:
                restored[name] = _restore_none(field.annotation, restored[name])
            elif _accepts_none(field.annotation):
                restored[name] = None
        return restored

    return data


def to_object(model: BaseModel) -> Object:
    """Convert a Pydantic model instance to a UBF Object.

    Raises:
        ContractViolationError: If model is not a BaseModel instance
        EncodeError: If a field holds a value the format cannot carry
    """
    if not isinstance(model, BaseModel):
        raise ContractViolationError(
            f"Expected a pydantic BaseModel instance, got {type(model).__name__}"
        )

    data = model.model_dump(mode="json", exclude_none=True)
    try:
        return Object.from_python(data)
    except ContractViolationError as err:
        raise EncodeError(f"{type(model).__name__}: {err}") from err


def from_object(model_class: type[T], obj: Object) -> T:
    """Validate a UBF Object into an instance of ``model_class``.

    Nullable fields absent from ``obj`` (including those of nested models)
    are passed to validation as ``None``, mirroring how to_object() drops
    them.

    Raises:
        ContractViolationError: If obj is not an Object
        DecodeError: If the object does not validate against the model
    """
    if not isinstance(obj, Object):
        raise ContractViolationError(f"Expected an Object, got {type(obj).__name__}")

    try:
        return model_class.model_validate(_restore_none(model_class, obj.to_python()))
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {model_class.__name__}: {e}") from e


def encode_model(model: BaseModel, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a Pydantic model instance to UBF bytes."""
    return encode(to_object(model), config)


def decode_model(model_class: type[T], data: bytes,
                 config: Optional[CodecConfig] = None) -> T:
    """Decode UBF bytes into an instance of ``model_class``."""
    return from_object(model_class, decode(data, config))
