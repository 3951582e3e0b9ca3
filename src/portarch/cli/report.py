"""Stream inspection CLI commands."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

from ..codec.decoder import ArchiveReader
from ..codec.schema import parse_kinds
from ..config import ArchiveConfig
from ..exceptions import MalformedValueError


def inspect_file(file_path: Path, config: ArchiveConfig) -> None:
    """Validate the header of a stream file and print a summary.

    Args:
        file_path: Path to the encoded stream
        config: Session settings (magic and newest accepted version)
    """
    total = file_path.stat().st_size
    with file_path.open("rb") as source:
        reader = ArchiveReader(source, config=config)
        header_bytes = reader.position

    print("|" * 7, "portarch: Portable Binary Archive", "|" * 7)
    print(f"File{'.' * 34}{file_path.name}")
    if reader.header is None:
        print(f"Header{'.' * 32}none (assuming version {reader.version})")
    else:
        print(f"Magic byte{'.' * 28}{reader.header.magic} (0x{reader.header.magic & 0xFF:02x})")
        print(f"Archive version{'.' * 23}{reader.header.version}")
    print(f"Header size{'.' * 27}{header_bytes} bytes")
    print(f"Payload size{'.' * 26}{total - header_bytes} bytes")


def decode_file(file_path: Path, types: str, config: ArchiveConfig) -> None:
    """Decode a stream file with an explicit list of kinds and print each value.

    Args:
        file_path: Path to the encoded stream
        types: Comma-separated primitive kinds, in stream order
        config: Session settings
    """
    kinds = parse_kinds(types)
    with file_path.open("rb") as source:
        reader = ArchiveReader(source, config=config)
        for i, kind in enumerate(kinds, 1):
            value = reader.read(kind)
            print(f"{i}. {kind.value}: {_format_value(value)}")
        if not reader.at_end():
            raise MalformedValueError(f"trailing data after {len(kinds)} values")


def _format_value(value: Any) -> str:
    # repr() keeps floats exact and shows bytes unambiguously
    if isinstance(value, float) and math.isfinite(value):
        return f"{value!r} ({value.hex()})"
    return repr(value)
