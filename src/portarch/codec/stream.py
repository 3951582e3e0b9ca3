"""Byte-level output and input cursors.

This module provides the thin layer between the transcoders and the byte
sink or source of a session. Writes go straight to the sink; nothing is
buffered beyond what the sink itself buffers.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Optional, Union

from ..exceptions import TruncatedStreamError

Source = Union[bytes, bytearray, memoryview, BinaryIO]

# Upper bound for a single read() call; a corrupt length prefix must not
# turn into one huge allocation.
READ_CHUNK_SIZE = 64 * 1024


class OutputStream:
    """Writes bytes to a binary sink.

    When no sink is given the bytes are collected in memory and can be
    retrieved with to_bytes().

    Example:
        >>> out = OutputStream()
        >>> out.write_signed_byte(-2)
        >>> out.write_bytes(b"\\x01\\x2c")
        >>> out.to_bytes()
        b'\\xfe\\x01,'
    """

    def __init__(self, sink: Optional[BinaryIO] = None) -> None:
        """Initialize the stream.

        Args:
            sink: Writable binary file object, or None for an in-memory buffer
        """
        self._owned = sink is None
        self._sink: BinaryIO = io.BytesIO() if sink is None else sink
        self._position = 0

    def write_byte(self, value: int) -> None:
        """Write one unsigned byte (0-255).

        Raises:
            ValueError: If value is out of range
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value must be 0-255, got {value}")
        self.write_bytes(bytes((value,)))

    def write_signed_byte(self, value: int) -> None:
        """Write one signed byte (-128 to 127) in two's complement.

        Raises:
            ValueError: If value is out of range
        """
        if not -0x80 <= value <= 0x7F:
            raise ValueError(f"signed byte value must be -128 to 127, got {value}")
        self.write_bytes(value.to_bytes(1, "big", signed=True))

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._sink.write(data)
        self._position += len(data)

    def position(self) -> int:
        """Return the number of bytes written so far."""
        return self._position

    def flush(self) -> None:
        """Flush the underlying sink."""
        self._sink.flush()

    def to_bytes(self) -> bytes:
        """Return everything written to the in-memory buffer.

        Raises:
            TypeError: If the stream writes to an external sink
        """
        if not self._owned:
            raise TypeError("to_bytes() is only available for in-memory streams")
        assert isinstance(self._sink, io.BytesIO)
        return self._sink.getvalue()


class InputStream:
    """Reads bytes from a binary source.

    The source can be a bytes-like object or a readable binary file object.
    Reading past the end raises TruncatedStreamError.

    Example:
        >>> stream = InputStream(b"\\xfe\\x01,")
        >>> stream.read_signed_byte()
        -2
        >>> stream.read_bytes(2)
        b'\\x01,'
    """

    def __init__(self, source: Source) -> None:
        """Initialize the stream.

        Args:
            source: Bytes to decode, or a readable binary file object
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._source: BinaryIO = io.BytesIO(bytes(source))
        else:
            self._source = source
        self._position = 0

    def read_byte(self) -> int:
        """Read one unsigned byte."""
        return self.read_bytes(1)[0]

    def read_signed_byte(self) -> int:
        """Read one signed byte."""
        return int.from_bytes(self.read_bytes(1), "big", signed=True)

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes bytes.

        Raises:
            ValueError: If num_bytes is negative
            TruncatedStreamError: If the source ends first
        """
        if num_bytes < 0:
            raise ValueError(f"num_bytes cannot be negative, got {num_bytes}")
        if num_bytes == 0:
            return b""

        data = bytearray()
        # Files and pipes may return short reads before the real end
        while len(data) < num_bytes:
            chunk = self._source.read(min(READ_CHUNK_SIZE, num_bytes - len(data)))
            if not chunk:
                self._position += len(data)
                raise TruncatedStreamError(num_bytes, len(data))
            data += chunk

        self._position += num_bytes
        return bytes(data)

    def is_empty(self, consume: bool = False) -> bool:
        """Return True if no byte is left to read.

        Bytes-like sources, seekable files and buffered readers (peek()) are
        checked without consuming data. Other sources can only be checked by
        reading one byte, which happens only when consume is True.

        Raises:
            TypeError: If the source cannot be checked and consume is False
        """
        if self._source.seekable():
            here = self._source.tell()
            has_more = bool(self._source.read(1))
            self._source.seek(here)
            return not has_more

        peek = getattr(self._source, "peek", None)
        if peek is not None:
            return not peek(1)

        if not consume:
            raise TypeError("cannot check for remaining data on a non-seekable source")
        extra = self._source.read(1)
        self._position += len(extra)
        return not extra

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position
