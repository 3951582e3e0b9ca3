"""Variable-width integer transcoder.

An integer of declared byte width W (1, 2, 4 or 8) is written as one signed
size-prefix byte followed by the minimal big-endian magnitude:

- the absolute value of the prefix is the number of magnitude bytes
- the sign of the prefix is the sign of the value
- zero is the single byte 0x00

Small values cost one or two bytes whatever the declared width, and no host
byte order ever reaches the stream.

>>> out = OutputStream()
>>> encode_integer(out, 0, INT64)  # writes 00
>>> encode_integer(out, 5, INT64)  # writes 01 05
>>> encode_integer(out, -300, INT32)  # writes fe 01 2c
>>> out.to_bytes().hex()
'000105fe012c'

>>> stream = InputStream(bytes.fromhex('000105fe012c'))
>>> decode_integer(stream, INT8)
0
>>> decode_integer(stream, UINT16)
5
>>> decode_integer(stream, INT16)
-300
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import EncodeError, IntegerOverflowError, NegativeIntoUnsignedError
from .stream import InputStream, OutputStream

SUPPORTED_WIDTHS = (1, 2, 4, 8)


@dataclass(frozen=True)
class IntegerType:
    """Declared width and signedness of an integer.

    Attributes:
        width: Size of the type in bytes (1, 2, 4 or 8)
        signed: Whether the type holds negative values
    """

    width: int
    signed: bool

    def __post_init__(self) -> None:
        if self.width not in SUPPORTED_WIDTHS:
            raise ValueError(f"integer width must be one of {SUPPORTED_WIDTHS}, got {self.width}")

    @property
    def name(self) -> str:
        return f"{'' if self.signed else 'u'}int{self.width * 8}"

    @property
    def min_value(self) -> int:
        return -(1 << (self.width * 8 - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        bits = self.width * 8 - 1 if self.signed else self.width * 8
        return (1 << bits) - 1

    def __str__(self) -> str:
        return self.name


INT8 = IntegerType(1, True)
UINT8 = IntegerType(1, False)
INT16 = IntegerType(2, True)
UINT16 = IntegerType(2, False)
INT32 = IntegerType(4, True)
UINT32 = IntegerType(4, False)
INT64 = IntegerType(8, True)
UINT64 = IntegerType(8, False)


def magnitude_size(value: int) -> int:
    """Return the number of bytes needed for the magnitude of value.

    Zero needs no byte at all.

    >>> magnitude_size(0), magnitude_size(255), magnitude_size(-256)
    (0, 1, 2)
    """
    return (abs(value).bit_length() + 7) // 8


def encode_integer(stream: OutputStream, value: int, int_type: IntegerType) -> None:
    """Encode an integer of the given declared type.

    This module's docstring has more details and examples.

    Raises:
        EncodeError: If value is not an int
        NegativeIntoUnsignedError: If value is negative and the type unsigned
        IntegerOverflowError: If value is outside the type's range
    """
    # bool is an int subclass but has its own encoding
    if not isinstance(value, int) or isinstance(value, bool):
        raise EncodeError(f"expected int for {int_type}, got {type(value).__name__}")
    if value < 0 and not int_type.signed:
        raise NegativeIntoUnsignedError()

    size = magnitude_size(value)
    if not int_type.min_value <= value <= int_type.max_value:
        raise IntegerOverflowError(size, int_type.width)

    stream.write_signed_byte(-size if value < 0 else size)
    if size:
        stream.write_bytes(abs(value).to_bytes(size, "big"))


def decode_integer(stream: InputStream, int_type: IntegerType) -> int:
    """Decode an integer into the given declared type.

    This module's docstring has more details and examples.

    Raises:
        NegativeIntoUnsignedError: If the prefix is negative and the type unsigned
        IntegerOverflowError: If the encoded value does not fit the type
        TruncatedStreamError: If the stream ends inside the value
    """
    prefix = stream.read_signed_byte()
    if prefix < 0 and not int_type.signed:
        raise NegativeIntoUnsignedError()

    size = abs(prefix)
    if size > int_type.width:
        raise IntegerOverflowError(size, int_type.width)
    if size == 0:
        return 0

    magnitude = int.from_bytes(stream.read_bytes(size), "big")
    value = -magnitude if prefix < 0 else magnitude

    # Fits the byte width but not the range, e.g. 200 into int8
    if not int_type.min_value <= value <= int_type.max_value:
        raise IntegerOverflowError(size, int_type.width)
    return value
