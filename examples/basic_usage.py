#!/usr/bin/env python3
"""Basic usage example for portarch.

This example demonstrates:
1. Writing a sequence of primitive values to a file
2. Reading them back in the same order
3. Comparing the encoded size with a fixed-width dump
4. Rejecting a value read into a type that is too narrow
"""

from __future__ import annotations

import struct
import tempfile
from pathlib import Path

from portarch import ArchiveReader, ArchiveWriter, IntegerOverflowError, encoded_size


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("portarch Basic Usage Example")
    print("=" * 60)
    print()

    counters = [0, 1, 5, 300, 70000]
    readings = [3.14159265358979, -0.5, 1e-300]

    path = Path(tempfile.gettempdir()) / "portarch_example.bin"

    # Write the values
    print("1. Writing values...")
    with path.open("wb") as sink, ArchiveWriter(sink) as writer:
        writer.write_uint32(len(counters))
        for counter in counters:
            writer.write_int64(counter)
        for reading in readings:
            writer.write_float64(reading)
    print(f"   Wrote {path.stat().st_size} bytes to {path}")
    print()

    # Read them back in the same order
    print("2. Reading values back...")
    with path.open("rb") as source:
        reader = ArchiveReader(source)
        count = reader.read_uint32()
        decoded_counters = [reader.read_int64() for _ in range(count)]
        decoded_readings = [reader.read_float64() for _ in readings]
    print(f"   Archive version: {reader.version}")
    print(f"   Counters: {decoded_counters}")
    print(f"   Readings: {decoded_readings}")
    assert decoded_counters == counters
    assert decoded_readings == readings
    print()

    # Size comparison
    print("3. Size comparison...")
    kinds = ["uint32"] + ["int64"] * len(counters) + ["float64"] * len(readings)
    portable = encoded_size(kinds, [len(counters), *counters, *readings])
    native = struct.calcsize(f"<I{len(counters)}q{len(readings)}d")
    print(f"   portarch: {portable} bytes (header included)")
    print(f"   fixed-width dump: {native} bytes")
    print()

    # Overflow detection
    print("4. Reading 300 into an int8...")
    writer = ArchiveWriter()
    writer.write_int64(300)
    try:
        ArchiveReader(writer.getvalue()).read_int8()
    except IntegerOverflowError as e:
        print(f"   Rejected: {e}")
    print()

    path.unlink()


if __name__ == "__main__":
    main()
