"""portarch: Portable Binary Archive Codec

A Python library for writing primitive values into a compact binary stream that
reads back identically on any machine, whatever its byte order, word size or
native floating point layout.

Key Features:
- Variable-width integers: small values cost one or two bytes whatever the declared type
- Overflow and sign checks when reading into a narrower or unsigned type
- IEEE-754 floats split into sign/exponent/mantissa and written in a fixed layout
- Explicit inf/NaN and denormal policies
- Magic byte and version header validated before any value is read

Quick Start:
    >>> from portarch import ArchiveReader, ArchiveWriter
    >>>
    >>> writer = ArchiveWriter()
    >>> writer.write_int32(-5)
    >>> writer.write_uint8(255)
    >>> writer.write_float64(3.14159265358979)
    >>> data = writer.getvalue()
    >>>
    >>> reader = ArchiveReader(data)
    >>> reader.read_int32(), reader.read_uint8(), reader.read_float64()
    (-5, 255, 3.14159265358979)

The stream is not self-describing: the reader must request the same kinds in the
same order as they were written.
"""

from __future__ import annotations

from .codec import (
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    ArchiveReader,
    ArchiveWriter,
    FloatFormat,
    IntegerType,
    Primitive,
    StreamHeader,
    decode,
    encode,
)
from .config import ARCHIVE_VERSION, MAGIC_BYTE, ArchiveConfig, ArchiveFlags
from .exceptions import (
    AbnormalValue,
    ArchiveError,
    BadStreamHeaderError,
    EncodeError,
    ErrorKind,
    IllegalFloatValueError,
    IntegerOverflowError,
    MalformedValueError,
    NegativeIntoUnsignedError,
    PortarchError,
    Precision,
    TruncatedStreamError,
)
from .utils import encoded_size, header_size, integer_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "ArchiveWriter",
    "ArchiveReader",
    "encode",
    "decode",
    "Primitive",
    "StreamHeader",
    # Types
    "IntegerType",
    "FloatFormat",
    "INT8",
    "UINT8",
    "INT16",
    "UINT16",
    "INT32",
    "UINT32",
    "INT64",
    "UINT64",
    "FLOAT32",
    "FLOAT64",
    # Configuration
    "ArchiveConfig",
    "ArchiveFlags",
    "ARCHIVE_VERSION",
    "MAGIC_BYTE",
    # Exceptions
    "PortarchError",
    "EncodeError",
    "ArchiveError",
    "ErrorKind",
    "BadStreamHeaderError",
    "IntegerOverflowError",
    "NegativeIntoUnsignedError",
    "IllegalFloatValueError",
    "TruncatedStreamError",
    "MalformedValueError",
    "AbnormalValue",
    "Precision",
    # Sizing
    "encoded_size",
    "header_size",
    "integer_size",
    # Version
    "__version__",
]
