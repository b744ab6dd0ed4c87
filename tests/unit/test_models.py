"""Tests for the Pydantic model adapter."""

from __future__ import annotations

import enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from ubf import (
    ContractViolationError,
    DecodeError,
    EncodeError,
    Object,
    UbfType,
    Value,
    decode,
    decode_model,
    encode_model,
    from_object,
    to_object,
)


class Priority(enum.Enum):
    """Test enum."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Position(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class StatusReport(BaseModel):
    """Message with nested and optional fields."""

    vehicle_id: int = Field(ge=0, le=255)
    callsign: str
    active: bool
    priority: Priority
    position: Position
    depths_cm: list[int] = []
    uptime_ms: int = 0
    note: Optional[str] = None


class Reading(BaseModel):
    """Required field that may be None."""

    sensor: str
    value: Optional[int]
    raw: int | None


class Setting(BaseModel):
    level: Optional[int] = 5


class Inner(BaseModel):
    tag: Optional[str]


class Outer(BaseModel):
    inner: Inner
    items: list[Inner] = []
    by_name: dict[str, Inner] = {}
    maybe: Optional[Inner] = None


@pytest.fixture
def report() -> StatusReport:
    return StatusReport(
        vehicle_id=42,
        callsign="héllo",
        active=True,
        priority=Priority.HIGH,
        position=Position(lat=44.5, lon=-63.25),
        depths_cm=[100, 250],
        uptime_ms=2**40,
    )


class TestToObject:
    """Model → Object mapping."""

    def test_field_kinds(self, report: StatusReport) -> None:
        obj = to_object(report)

        assert obj.get("vehicle_id").get_int() == 42
        assert obj.get("callsign").get_string() == "héllo"
        assert obj.get("active").get_boolean() is True
        assert obj.get("priority").get_int() == 3
        assert obj.get("position").get_type() is UbfType.OBJECT
        assert obj.get("position").get_object().get("lat").get_double() == 44.5
        assert obj.get("depths_cm").get_type() is UbfType.ARRAY
        assert obj.get("uptime_ms").get_long() == 2**40

    def test_field_order(self, report: StatusReport) -> None:
        assert list(to_object(report).keys()) == [
            "vehicle_id",
            "callsign",
            "active",
            "priority",
            "position",
            "depths_cm",
            "uptime_ms",
        ]

    def test_none_omitted(self, report: StatusReport) -> None:
        assert "note" not in to_object(report)

    def test_not_a_model(self) -> None:
        with pytest.raises(ContractViolationError):
            to_object({"a": 1})  # type: ignore[arg-type]

    def test_unrepresentable_value(self) -> None:
        class Huge(BaseModel):
            n: int

        with pytest.raises(EncodeError, match="Huge"):
            to_object(Huge(n=2**70))


class TestModelRoundtrip:
    """encode_model / decode_model."""

    def test_roundtrip(self, report: StatusReport) -> None:
        data = encode_model(report)
        decoded = decode_model(StatusReport, data)

        assert decoded == report

    def test_optional_present(self, report: StatusReport) -> None:
        report.note = "check sensor"
        assert decode_model(StatusReport, encode_model(report)).note == "check sensor"

    def test_bytes_are_plain_ubf(self, report: StatusReport) -> None:
        obj = decode(encode_model(report))
        assert obj.get("callsign").get_string() == "héllo"

    def test_validation_failure(self) -> None:
        obj = Object()
        obj.put("lat", Value.of_string("north"))
        obj.put("lon", Value.of_double(0.0))

        with pytest.raises(DecodeError, match="Failed to construct Position"):
            from_object(Position, obj)

    def test_out_of_bounds_on_decode(self) -> None:
        obj = Object.from_python({"lat": 91.0, "lon": 0.0})

        with pytest.raises(DecodeError):
            from_object(Position, obj)

    def test_from_object_requires_object(self) -> None:
        with pytest.raises(ContractViolationError):
            from_object(Position, {"lat": 1.0, "lon": 2.0})  # type: ignore[arg-type]

class TestNoneFields:
    """None is dropped on encode and restored on decode."""

    def test_required_optional_none(self) -> None:
        msg = Reading(sensor="temp", value=None, raw=None)

        obj = to_object(msg)
        assert "value" not in obj
        assert "raw" not in obj
        assert decode_model(Reading, encode_model(msg)) == msg

    def test_none_overrides_default(self) -> None:
        msg = Setting(level=None)
        assert decode_model(Setting, encode_model(msg)).level is None

    def test_absent_nullable_is_none(self) -> None:
        assert from_object(Setting, Object()).level is None

    def test_nested_model_none(self) -> None:
        msg = Outer(
            inner=Inner(tag=None),
            items=[Inner(tag="a"), Inner(tag=None)],
            by_name={"x": Inner(tag=None)},
            maybe=Inner(tag=None),
        )
        assert decode_model(Outer, encode_model(msg)) == msg

    def test_missing_required_still_fails(self) -> None:
        with pytest.raises(DecodeError, match="Failed to construct Reading"):
            from_object(Reading, Object.from_python({"value": 1, "raw": 2}))
