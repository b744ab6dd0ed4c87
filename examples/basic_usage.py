#!/usr/bin/env python3
"""Basic usage example for ubf.

This example demonstrates:
1. Building a tree of typed values
2. Encoding to UBF bytes
3. Decoding back and reading values
4. Round-tripping a Pydantic model
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ubf import Array, Object, Value, decode, decode_model, encode, encode_model, encoded_size


class StatusReport(BaseModel):
    """Vehicle status report."""

    vehicle_id: int = Field(ge=0, le=255, description="Vehicle ID (0-255)")
    depth_cm: int = Field(ge=0, le=10000, description="Depth in centimeters (0-100m)")
    battery_pct: int = Field(ge=0, le=100, description="Battery percentage (0-100)")
    active: bool = Field(description="Vehicle active flag")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("ubf Basic Usage Example")
    print("=" * 60)
    print()

    # Build a tree
    print("1. Building a tree...")
    flags = Array()
    flags.add(Value.of_boolean(True))
    flags.add(Value.of_boolean(False))

    obj = Object()
    obj.put("n", Value.of_int(42))
    obj.put("s", Value.of_string("héllo"))
    obj.put("arr", Value.of_array(flags))
    print(f"   {obj.to_python()}")
    print(f"   Encoded size: {encoded_size(obj)} bytes")
    print()

    # Encode
    print("2. Encoding...")
    data = encode(obj)
    print(f"   {len(data)} bytes: {data.hex()}")
    print()

    # Decode
    print("3. Decoding...")
    decoded = decode(data)
    print(f"   Keys: {list(decoded.keys())}")
    print(f"   n as int:    {decoded.get('n').get_int()}")
    print(f"   n as string: {decoded.get('n').get_string()}  (wrong kind: absent)")
    print(f"   s:           {decoded.get('s').get_string()}")
    print(f"   Round-trip equal: {decoded == obj}")
    print()

    # Pydantic
    print("4. Pydantic model...")
    msg = StatusReport(vehicle_id=42, depth_cm=2500, battery_pct=87, active=True)
    model_data = encode_model(msg)
    print(f"   {len(model_data)} bytes")
    print(f"   Decoded: {decode_model(StatusReport, model_data)}")


if __name__ == "__main__":
    main()
