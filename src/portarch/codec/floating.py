"""Portable floating point transcoder.

A float is split into its sign, biased exponent and mantissa fields for the
declared precision, then the fields are reassembled into a fixed-size word
written big-endian:

- single precision: 1 sign bit, 8 exponent bits, 23 mantissa bits, 4 bytes
- double precision: 1 sign bit, 11 exponent bits, 52 mantissa bits, 8 bytes

The struct module's standard formats (``>f``, ``>d``) always use the IEEE-754
interchange layout, whatever the host's native representation, so they are
used to obtain and rebuild the bit pattern. NaN is always written in one
canonical form (sign 0, exponent and mantissa all ones).

>>> out = OutputStream()
>>> encode_float(out, 1.0, FLOAT32)
>>> encode_float(out, -2.5, FLOAT64)
>>> out.to_bytes().hex()
'3f800000c004000000000000'
"""

from __future__ import annotations

import dataclasses
import enum
import math
import struct
from dataclasses import dataclass

from ..exceptions import AbnormalValue, EncodeError, IllegalFloatValueError, Precision
from .stream import InputStream, OutputStream


class FloatClass(enum.Enum):
    """Classification of a floating point bit pattern."""

    ZERO = "zero"
    NORMAL = "normal"
    DENORMAL = "denormal"
    INFINITE = "infinite"
    NAN = "nan"


@dataclass(frozen=True)
class FloatFormat:
    """Layout and capabilities of a floating point target type.

    Attributes:
        name: Type name used in messages
        exponent_bits: Width of the biased exponent field
        mantissa_bits: Width of the mantissa field (without the implicit bit)
        has_denorm: Whether the target type can hold denormalized values
    """

    name: str
    exponent_bits: int
    mantissa_bits: int
    has_denorm: bool = True

    @property
    def width(self) -> int:
        """Encoded size in bytes."""
        return (1 + self.exponent_bits + self.mantissa_bits) // 8

    @property
    def precision(self) -> Precision:
        return Precision.SINGLE if self.width == 4 else Precision.DOUBLE

    @property
    def struct_format(self) -> str:
        return ">f" if self.precision is Precision.SINGLE else ">d"

    @property
    def max_exponent(self) -> int:
        """Biased exponent value reserved for inf and NaN."""
        return (1 << self.exponent_bits) - 1

    @property
    def mantissa_mask(self) -> int:
        return (1 << self.mantissa_bits) - 1

    def without_denormals(self) -> FloatFormat:
        """Return the same layout for a target type lacking denormal support."""
        return dataclasses.replace(self, name=f"{self.name}_ftz", has_denorm=False)


FLOAT32 = FloatFormat("float32", exponent_bits=8, mantissa_bits=23)
FLOAT64 = FloatFormat("float64", exponent_bits=11, mantissa_bits=52)


@dataclass(frozen=True)
class FloatFields:
    """Sign, biased exponent and mantissa of a float in a given format."""

    sign: int
    exponent: int
    mantissa: int

    @classmethod
    def from_bits(cls, bits: int, fmt: FloatFormat) -> FloatFields:
        return cls(
            sign=bits >> (fmt.exponent_bits + fmt.mantissa_bits),
            exponent=(bits >> fmt.mantissa_bits) & fmt.max_exponent,
            mantissa=bits & fmt.mantissa_mask,
        )

    @classmethod
    def from_float(cls, value: float, fmt: FloatFormat) -> FloatFields:
        """Split a Python float into the fields of fmt.

        Raises:
            OverflowError: If a finite value is out of range for fmt
        """
        if math.isnan(value):
            return cls(sign=0, exponent=fmt.max_exponent, mantissa=fmt.mantissa_mask)
        bits = int.from_bytes(struct.pack(fmt.struct_format, value), "big")
        return cls.from_bits(bits, fmt)

    def to_bits(self, fmt: FloatFormat) -> int:
        return (
            (self.sign << (fmt.exponent_bits + fmt.mantissa_bits))
            | (self.exponent << fmt.mantissa_bits)
            | self.mantissa
        )

    def to_float(self, fmt: FloatFormat) -> float:
        data = self.to_bits(fmt).to_bytes(fmt.width, "big")
        return struct.unpack(fmt.struct_format, data)[0]

    def classify(self, fmt: FloatFormat) -> FloatClass:
        if self.exponent == fmt.max_exponent:
            return FloatClass.NAN if self.mantissa else FloatClass.INFINITE
        if self.exponent == 0:
            return FloatClass.DENORMAL if self.mantissa else FloatClass.ZERO
        return FloatClass.NORMAL


def encode_float(
    stream: OutputStream, value: float, fmt: FloatFormat, *, no_infnan: bool = False
) -> None:
    """Encode a float in the given format.

    Args:
        stream: Stream to write to
        value: Value to encode (ints are converted)
        fmt: Target format
        no_infnan: Reject infinite and NaN values

    Raises:
        EncodeError: If value is not a number
        IllegalFloatValueError: If value is inf/NaN under no_infnan, or out of range for fmt
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise EncodeError(f"expected float for {fmt.name}, got {type(value).__name__}")
    try:
        value = float(value)
        if no_infnan and not math.isfinite(value):
            raise IllegalFloatValueError(AbnormalValue(fmt.precision, value))
        fields = FloatFields.from_float(value, fmt)
    except OverflowError as e:
        raise IllegalFloatValueError(AbnormalValue(fmt.precision, value)) from e

    stream.write_bytes(fields.to_bits(fmt).to_bytes(fmt.width, "big"))


def decode_float(stream: InputStream, fmt: FloatFormat, *, no_infnan: bool = False) -> float:
    """Decode a float from the given format.

    Args:
        stream: Stream to read from
        fmt: Format the value was written in and the target type's capabilities
        no_infnan: Reject infinite and NaN bit patterns

    Raises:
        IllegalFloatValueError: If the pattern is inf/NaN under no_infnan, or a
            denormal for a format without denormal support
        TruncatedStreamError: If the stream ends inside the value
    """
    bits = int.from_bytes(stream.read_bytes(fmt.width), "big")
    fields = FloatFields.from_bits(bits, fmt)
    float_class = fields.classify(fmt)
    value = fields.to_float(fmt)

    if no_infnan and float_class in (FloatClass.INFINITE, FloatClass.NAN):
        raise IllegalFloatValueError(AbnormalValue(fmt.precision, value, bits))
    if float_class is FloatClass.DENORMAL and not fmt.has_denorm:
        raise IllegalFloatValueError(AbnormalValue(fmt.precision, value, bits))
    return value


def classify_float(value: float, fmt: FloatFormat = FLOAT64) -> FloatClass:
    """Classify a Python float as it would be encoded in fmt.

    >>> classify_float(5e-324)
    <FloatClass.DENORMAL: 'denormal'>
    >>> classify_float(5e-324, FLOAT32)
    <FloatClass.ZERO: 'zero'>
    """
    return FloatFields.from_float(value, fmt).classify(fmt)
