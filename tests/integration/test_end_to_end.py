"""End-to-end integration tests."""

from __future__ import annotations

import io
import socket
import threading

from pydantic import BaseModel, Field

from ubf import (
    Array,
    CodecConfig,
    Decoder,
    Encoder,
    Object,
    Value,
    decode,
    decode_model,
    encode,
    encode_model,
    encoded_size,
)


class SensorReading(BaseModel):
    """Single sensor sample."""

    sensor: str
    values: list[float]
    ok: bool = True


class Snapshot(BaseModel):
    """Batch of readings from one node."""

    node_id: int = Field(ge=0)
    readings: list[SensorReading]
    tags: dict[str, str] = {}


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_hand_built_tree(self) -> None:
        """Build, size, encode, decode and inspect a mixed tree."""
        # 1. Build tree
        matrix = Array()
        for row in ([1, 2], [3, 4]):
            matrix.add(Value.of_array(Array.from_python(row)))

        meta = Object()
        meta.put("version", Value.of_short(3))
        meta.put("ratio", Value.of_float(0.5))
        meta.put("id", Value.of_long(9_000_000_000))

        root = Object()
        root.put("meta", Value.of_object(meta))
        root.put("matrix", Value.of_array(matrix))
        root.put("flag", Value.of_byte(-1))

        # 2. Check encoded size
        size = encoded_size(root)

        # 3. Encode
        data = encode(root)
        assert len(data) == size

        # 4. Decode
        decoded = decode(data)
        assert decoded == root

        # 5. Inspect
        assert list(decoded.keys()) == ["meta", "matrix", "flag"]
        meta_out = decoded.get("meta").get_object()
        assert meta_out.get("version").get_short() == 3
        assert meta_out.get("ratio").get_float() == 0.5
        assert meta_out.get("id").get_long() == 9_000_000_000
        rows = decoded.get("matrix").get_array()
        assert rows.get(1).get_array().get(0).get_int() == 3
        assert decoded.get("flag").get_byte() == -1

    def test_model_workflow(self) -> None:
        """Pydantic model → bytes → model."""
        snapshot = Snapshot(
            node_id=7,
            readings=[
                SensorReading(sensor="temp", values=[21.5, 21.75]),
                SensorReading(sensor="press", values=[], ok=False),
            ],
            tags={"site": "nord", "rack": "B2"},
        )

        data = encode_model(snapshot)
        assert decode_model(Snapshot, data) == snapshot

    def test_multiple_roots_on_one_stream(self) -> None:
        """Several root objects written back to back decode in order."""
        stream = io.BytesIO()
        encoder = Encoder()
        for i in range(3):
            encoder.convert(stream, Object.from_python({"seq": i}))

        stream.seek(0)
        decoder = Decoder()
        seqs = [decoder.convert(stream).get("seq").get_int() for _ in range(3)]
        assert seqs == [0, 1, 2]
        assert stream.read() == b""

    def test_over_socket(self, example_object: Object) -> None:
        """Stream a tree through a socket pair."""
        left, right = socket.socketpair()
        received: list[Object] = []

        def reader() -> None:
            with right.makefile("rb") as f:
                received.append(Decoder().convert(f))

        thread = threading.Thread(target=reader)
        thread.start()
        with left.makefile("wb") as f:
            Encoder().convert(f, example_object)
        thread.join(timeout=5)
        left.close()
        right.close()

        assert received == [example_object]

    def test_limits_agree_between_sides(self) -> None:
        """Whatever the encoder accepts, a decoder with the same config accepts."""
        config = CodecConfig(max_depth=3, max_length=8)
        root = Object.from_python({"a": [[1, 2, 3]], "s": "12345678"})

        assert decode(encode(root, config), config) == root
