"""Archive writer.

This module provides ArchiveWriter, the narrow write_<T>() interface an object
traversal framework calls once per primitive field, and the encode() shortcut
for a flat, ordered sequence of values.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, BinaryIO, Optional, Sequence

from ..config import DEFAULT_CONFIG, ArchiveConfig
from ..exceptions import EncodeError
from .floating import FLOAT32, FLOAT64, FloatFormat, encode_float
from .header import begin_write
from .integer import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntegerType,
    encode_integer,
)
from .schema import KindLike, Primitive, parse_kinds
from .stream import OutputStream

LENGTH_TYPE = UINT64


class ArchiveWriter:
    """Writes primitive values to a byte sink in portable form.

    The stream header is written when the writer is created. Values must then
    be written in the order the reader will request them.

    Example:
        >>> writer = ArchiveWriter()
        >>> writer.write_int32(-5)
        >>> writer.write_uint8(255)
        >>> writer.write_float64(3.14159265358979)
        >>> data = writer.getvalue()
    """

    def __init__(
        self, sink: Optional[BinaryIO] = None, config: Optional[ArchiveConfig] = None
    ) -> None:
        """Open a writer and write the stream header.

        Args:
            sink: Writable binary file object, or None to collect bytes in memory
            config: Session settings, defaults to ArchiveConfig()
        """
        self.config = config or DEFAULT_CONFIG
        self._stream = OutputStream(sink)
        self.header = begin_write(self._stream, self.config)

    def __enter__(self) -> ArchiveWriter:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            self.flush()

    @property
    def position(self) -> int:
        """Number of bytes written, header included."""
        return self._stream.position()

    def flush(self) -> None:
        self._stream.flush()

    def getvalue(self) -> bytes:
        """Return the bytes written so far (in-memory writers only)."""
        return self._stream.to_bytes()

    def write_int(self, value: int, int_type: IntegerType) -> None:
        encode_integer(self._stream, value, int_type)

    def write_int8(self, value: int) -> None:
        self.write_int(value, INT8)

    def write_uint8(self, value: int) -> None:
        self.write_int(value, UINT8)

    def write_int16(self, value: int) -> None:
        self.write_int(value, INT16)

    def write_uint16(self, value: int) -> None:
        self.write_int(value, UINT16)

    def write_int32(self, value: int) -> None:
        self.write_int(value, INT32)

    def write_uint32(self, value: int) -> None:
        self.write_int(value, UINT32)

    def write_int64(self, value: int) -> None:
        self.write_int(value, INT64)

    def write_uint64(self, value: int) -> None:
        self.write_int(value, UINT64)

    def write_bool(self, value: bool) -> None:
        """Write a boolean as the uint8 wire integer 0 or 1."""
        if not isinstance(value, bool):
            raise EncodeError(f"expected bool, got {type(value).__name__}")
        encode_integer(self._stream, int(value), UINT8)

    def write_float(self, value: float, fmt: FloatFormat) -> None:
        encode_float(self._stream, value, fmt, no_infnan=self.config.no_infnan)

    def write_float32(self, value: float) -> None:
        self.write_float(value, FLOAT32)

    def write_float64(self, value: float) -> None:
        self.write_float(value, FLOAT64)

    def write_bytes(self, data: bytes) -> None:
        """Write a byte string as a uint64 length followed by the raw bytes."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise EncodeError(f"expected bytes, got {type(data).__name__}")
        data = bytes(data)
        encode_integer(self._stream, len(data), LENGTH_TYPE)
        self._stream.write_bytes(data)

    def write_str(self, text: str) -> None:
        """Write text as UTF-8 bytes."""
        if not isinstance(text, str):
            raise EncodeError(f"expected str, got {type(text).__name__}")
        self.write_bytes(text.encode("utf-8"))

    def write(self, kind: KindLike, value: Any) -> None:
        """Write value as the given primitive kind."""
        kind = Primitive.coerce(kind)
        int_type = kind.integer_type
        if int_type is not None:
            self.write_int(value, int_type)
            return
        fmt = kind.float_format
        if fmt is not None:
            self.write_float(value, fmt)
            return
        if kind is Primitive.BOOL:
            self.write_bool(value)
        elif kind is Primitive.BYTES:
            self.write_bytes(value)
        elif kind is Primitive.STR:
            self.write_str(value)
        else:
            raise EncodeError(f"unsupported primitive kind {kind}")


def encode(
    kinds: Sequence[KindLike] | str,
    values: Sequence[Any],
    *,
    config: Optional[ArchiveConfig] = None,
) -> bytes:
    """Encode an ordered sequence of values to a complete stream.

    Args:
        kinds: Primitive kind of each value, or a comma-separated string of kinds
        values: Values to encode, in order
        config: Session settings, defaults to ArchiveConfig()

    Returns:
        Header followed by the encoded values

    Raises:
        EncodeError: If kinds and values differ in length or a value has the wrong type
        ArchiveError: If a value cannot be represented in its kind

    Example:
        >>> data = encode(["int32", "uint8", "float64"], [-5, 255, 3.14159265358979])
        >>> data[:3].hex()
        '7f0101'
    """
    parsed = parse_kinds(kinds)
    if len(parsed) != len(values):
        raise EncodeError(f"got {len(parsed)} kinds but {len(values)} values")

    writer = ArchiveWriter(config=config)
    for kind, value in zip(parsed, values):
        writer.write(kind, value)
    return writer.getvalue()
