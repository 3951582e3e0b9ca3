"""End-to-end integration tests."""

from __future__ import annotations

import math
import struct
from pathlib import Path

import pytest

from portarch import (
    ArchiveConfig,
    ArchiveError,
    ArchiveReader,
    ArchiveWriter,
    BadStreamHeaderError,
    ErrorKind,
    IllegalFloatValueError,
    IntegerOverflowError,
    decode,
    encode,
    encoded_size,
)


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_mixed_values_roundtrip(self) -> None:
        """int32 -5, uint8 255 and float64 pi survive a session unchanged."""
        pi = 3.14159265358979

        writer = ArchiveWriter()
        writer.write_int32(-5)
        writer.write_uint8(255)
        writer.write_float64(pi)
        data = writer.getvalue()

        reader = ArchiveReader(data)
        assert reader.read_int32() == -5
        assert reader.read_uint8() == 255
        decoded = reader.read_float64()
        assert struct.pack(">d", decoded) == struct.pack(">d", pi)
        assert reader.at_end()

        # header + 2 + 2 + 8
        assert len(data) == 3 + 2 + 2 + 8

    def test_int64_into_int8_overflows(self) -> None:
        """int64 300 read back as int8 is exactly an integer overflow."""
        writer = ArchiveWriter()
        writer.write_int64(300)

        with pytest.raises(IntegerOverflowError) as exc_info:
            ArchiveReader(writer.getvalue()).read_int8()

        assert exc_info.value.kind is ErrorKind.INTEGER_OVERFLOW
        assert type(exc_info.value) is IntegerOverflowError

    def test_file_session(self, tmp_path: Path) -> None:
        """Test a session through real files."""
        path = tmp_path / "archive.bin"
        samples = [i * 0.25 for i in range(-100, 100)]

        with path.open("wb") as sink, ArchiveWriter(sink) as writer:
            writer.write_uint64(len(samples))
            for sample in samples:
                writer.write_float64(sample)
            writer.write_str("done")

        with path.open("rb") as source:
            reader = ArchiveReader(source)
            count = reader.read_uint64()
            decoded = [reader.read_float64() for _ in range(count)]
            assert reader.read_str() == "done"
            assert reader.at_end()

        assert decoded == samples

    def test_counter_compactness(self) -> None:
        """Small counters cost far less than their declared width."""
        counters = list(range(100))
        kinds = ["uint64"] * len(counters)

        size = encoded_size(kinds, counters)
        assert size == len(encode(kinds, counters))
        assert size < 8 * len(counters) / 3

    def test_infnan_policy_end_to_end(self) -> None:
        """Infinity round-trips by default and is rejected under no_infnan."""
        assert decode("float64", encode("float64", [math.inf])) == [math.inf]

        strict = ArchiveConfig(no_infnan=True)
        with pytest.raises(IllegalFloatValueError):
            encode("float64", [math.inf], config=strict)

    def test_corrupted_stream(self) -> None:
        """Flipping the magic byte is caught before any value is decoded."""
        data = bytearray(encode("int32,float32", [1, 2.0]))
        data[0] ^= 0xFF

        with pytest.raises(BadStreamHeaderError):
            decode("int32,float32", bytes(data))

    def test_misaligned_reads_fail(self) -> None:
        """Reading with the wrong kinds is reported, not silently accepted."""
        data = encode("float64", [1e300])

        with pytest.raises(ArchiveError):
            decode("int8,int8,int8,int8", data)

    def test_flags_interoperate(self) -> None:
        """A flag word configures both ends identically."""
        config = ArchiveConfig.from_flags(65)
        data = encode("int16,float32", [-2, 0.5], config=config)

        assert data == bytes.fromhex("ff02" "3f000000")
        assert decode("int16,float32", data, config=config) == [-2, 0.5]
