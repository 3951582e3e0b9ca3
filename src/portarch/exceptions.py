"""Exception hierarchy for portarch.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from PortarchError for easy catching of any portarch-specific error.

Codec failures derive from ArchiveError and carry an ErrorKind tag. Every ArchiveError
is fatal to the session that raised it: the stream cursor is left at an unspecified
position and the writer/reader must be abandoned.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import ClassVar, Optional


class ErrorKind(enum.Enum):
    """Tag identifying the cause of an ArchiveError."""

    BAD_STREAM_HEADER = "bad_stream_header"
    INTEGER_OVERFLOW = "integer_overflow"
    NEGATIVE_INTO_UNSIGNED = "negative_into_unsigned"
    ILLEGAL_FLOAT_VALUE = "illegal_float_value"
    TRUNCATED_STREAM = "truncated_stream"
    MALFORMED_VALUE = "malformed_value"


class Precision(enum.Enum):
    """Floating point precision of an abnormal value."""

    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class AbnormalValue:
    """An inf, NaN or denormalized value rejected by the float transcoder.

    Attributes:
        precision: Precision of the format the value was encoded in or decoded from
        value: The value as a Python float
        bits: Raw IEEE-754 bit pattern, when known
    """

    precision: Precision
    value: float
    bits: Optional[int] = None

    def __str__(self) -> str:
        if math.isnan(self.value):
            return "nan"
        if math.isinf(self.value):
            return "-inf" if self.value < 0 else "inf"
        return repr(self.value)


class PortarchError(Exception):
    """Base exception for all portarch errors."""

    pass


class EncodeError(PortarchError):
    """Raised when a Python value cannot be handed to the codec at all.

    Examples:
        - Field type mismatch (str passed to write_int32)
        - Number of kinds and values differ in encode()
        - Unknown primitive kind
    """

    pass


class ArchiveError(PortarchError):
    """Base class for tagged codec failures."""

    kind: ClassVar[ErrorKind]


class BadStreamHeaderError(ArchiveError):
    """Raised when the stream header is missing, mismatched or from the future.

    Examples:
        - First byte is not the magic byte
        - Archive version newer than this implementation understands
        - Stream ends inside the header
    """

    kind = ErrorKind.BAD_STREAM_HEADER


class IntegerOverflowError(ArchiveError):
    """Raised when an integer does not fit the declared type.

    ``size`` is the number of magnitude bytes the value occupies on the wire and
    ``width`` the declared byte width of the target type. A value whose magnitude
    fits ``width`` bytes but not the type's range (200 read as int8) reports
    ``size <= width``.
    """

    kind = ErrorKind.INTEGER_OVERFLOW

    def __init__(self, size: int, width: Optional[int] = None) -> None:
        self.size = size
        self.width = width
        super().__init__(f"requested integer size exceeds type size: {size}")


class NegativeIntoUnsignedError(ArchiveError):
    """Raised when a negative integer meets an unsigned type."""

    kind = ErrorKind.NEGATIVE_INTO_UNSIGNED

    def __init__(self) -> None:
        super().__init__("cannot read a negative number into an unsigned type")


class IllegalFloatValueError(ArchiveError):
    """Raised for inf/NaN under the no_infnan policy, or unsupported denormals."""

    kind = ErrorKind.ILLEGAL_FLOAT_VALUE

    def __init__(self, abnormal: AbnormalValue) -> None:
        self.abnormal = abnormal
        super().__init__(f"serialization of illegal floating point value: {abnormal}")


class TruncatedStreamError(ArchiveError):
    """Raised when the byte source ends before a value is complete."""

    kind = ErrorKind.TRUNCATED_STREAM

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(f"Not enough bytes: need {needed}, have {available}")


class MalformedValueError(ArchiveError):
    """Raised when decoded bytes are not a valid value of the requested kind.

    Examples:
        - Boolean encoded as an integer other than 0 or 1
        - Text that is not valid UTF-8
        - Trailing bytes after the last expected value
    """

    kind = ErrorKind.MALFORMED_VALUE
