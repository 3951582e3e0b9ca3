"""Archive reader.

This module provides ArchiveReader, the read_<T>() counterpart of ArchiveWriter,
and the decode() shortcut for a flat, ordered sequence of values.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, ArchiveConfig
from ..exceptions import EncodeError, MalformedValueError
from .floating import FLOAT32, FLOAT64, FloatFormat, decode_float
from .header import begin_read
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
    decode_integer,
)
from .schema import KindLike, Primitive, parse_kinds
from .stream import InputStream, Source

LENGTH_TYPE = UINT64


class ArchiveReader:
    """Reads primitive values written by ArchiveWriter.

    The stream header is read and validated when the reader is created. Values
    must be requested in the order they were written; the stream carries no
    type tags. After any ArchiveError the reader must be abandoned.

    Example:
        >>> reader = ArchiveReader(data)
        >>> reader.read_int32()
        -5
        >>> reader.read_uint8()
        255
    """

    def __init__(self, source: Source, config: Optional[ArchiveConfig] = None) -> None:
        """Open a reader and validate the stream header.

        Args:
            source: Bytes to decode, or a readable binary file object
            config: Session settings, defaults to ArchiveConfig()

        Raises:
            BadStreamHeaderError: If the header is missing or not supported
        """
        self.config = config or DEFAULT_CONFIG
        self._stream = InputStream(source)
        self.header = begin_read(self._stream, self.config)

    @property
    def version(self) -> int:
        """Archive version of the stream being read."""
        if self.header is None:
            return self.config.version
        return self.header.version

    @property
    def position(self) -> int:
        """Number of bytes consumed, header included."""
        return self._stream.position()

    def at_end(self, consume: bool = False) -> bool:
        """Return True if every byte of the source has been consumed.

        Sources that can neither seek nor peek are checked by reading one byte,
        which is only done when consume is True. The reader must not be used
        for further reads after such a check.

        Raises:
            TypeError: If the source cannot be checked and consume is False
        """
        return self._stream.is_empty(consume=consume)

    def read_int(self, int_type: IntegerType) -> int:
        return decode_integer(self._stream, int_type)

    def read_int8(self) -> int:
        return self.read_int(INT8)

    def read_uint8(self) -> int:
        return self.read_int(UINT8)

    def read_int16(self) -> int:
        return self.read_int(INT16)

    def read_uint16(self) -> int:
        return self.read_int(UINT16)

    def read_int32(self) -> int:
        return self.read_int(INT32)

    def read_uint32(self) -> int:
        return self.read_int(UINT32)

    def read_int64(self) -> int:
        return self.read_int(INT64)

    def read_uint64(self) -> int:
        return self.read_int(UINT64)

    def read_bool(self) -> bool:
        """Read a boolean.

        Raises:
            MalformedValueError: If the encoded integer is neither 0 nor 1
        """
        value = decode_integer(self._stream, UINT8)
        if value not in (0, 1):
            raise MalformedValueError(f"{value} is not a valid boolean")
        return value == 1

    def read_float(self, fmt: FloatFormat) -> float:
        return decode_float(self._stream, fmt, no_infnan=self.config.no_infnan)

    def read_float32(self) -> float:
        return self.read_float(FLOAT32)

    def read_float64(self) -> float:
        return self.read_float(FLOAT64)

    def read_bytes(self) -> bytes:
        length = decode_integer(self._stream, LENGTH_TYPE)
        return self._stream.read_bytes(length)

    def read_str(self) -> str:
        """Read UTF-8 text.

        Raises:
            MalformedValueError: If the bytes are not valid UTF-8
        """
        raw_bytes = self.read_bytes()
        try:
            return raw_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedValueError(f"invalid UTF-8 encoding: {e}") from e

    def read(self, kind: KindLike) -> Any:
        """Read a value of the given primitive kind."""
        kind = Primitive.coerce(kind)
        int_type = kind.integer_type
        if int_type is not None:
            return self.read_int(int_type)
        fmt = kind.float_format
        if fmt is not None:
            return self.read_float(fmt)
        if kind is Primitive.BOOL:
            return self.read_bool()
        if kind is Primitive.BYTES:
            return self.read_bytes()
        if kind is Primitive.STR:
            return self.read_str()
        raise EncodeError(f"unsupported primitive kind {kind}")


def decode(
    kinds: Sequence[KindLike] | str,
    data: Source,
    *,
    config: Optional[ArchiveConfig] = None,
    exact: bool = True,
) -> List[Any]:
    """Decode an ordered sequence of values from a complete stream.

    Args:
        kinds: Primitive kind of each value, or a comma-separated string of kinds
        data: Encoded stream, header included
        config: Session settings, defaults to ArchiveConfig()
        exact: If True, reject bytes left over after the last value

    Returns:
        Decoded values, in order

    Raises:
        ArchiveError: If the stream is corrupt or incompatible

    Example:
        >>> decode("int32,uint8,float64", encode("int32,uint8,float64", [-5, 255, 0.5]))
        [-5, 255, 0.5]
    """
    parsed = parse_kinds(kinds)
    reader = ArchiveReader(data, config=config)
    values = [reader.read(kind) for kind in parsed]

    if exact and not reader.at_end(consume=True):
        raise MalformedValueError(f"trailing data after {len(values)} values")
    return values
