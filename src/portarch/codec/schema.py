"""Primitive kinds understood by the codec.

The wire format is not self-describing: both ends agree out-of-band on the
order and kinds of the values exchanged. A list of Primitive members is that
agreement in its simplest form and is what encode()/decode() and the CLI take.
"""

from __future__ import annotations

import enum
from typing import Iterable, List, Optional, Union

from ..exceptions import EncodeError
from .floating import FLOAT32, FLOAT64, FloatFormat
from .integer import INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64, IntegerType

KindLike = Union["Primitive", str]


class Primitive(enum.Enum):
    """A primitive value kind."""

    BOOL = "bool"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BYTES = "bytes"
    STR = "str"

    @property
    def integer_type(self) -> Optional[IntegerType]:
        """Declared integer type, or None for non-integer kinds."""
        return _INTEGER_TYPES.get(self)

    @property
    def float_format(self) -> Optional[FloatFormat]:
        """Declared float format, or None for non-float kinds."""
        return _FLOAT_FORMATS.get(self)

    @classmethod
    def coerce(cls, kind: KindLike) -> Primitive:
        """Return kind as a Primitive, accepting its string name.

        Raises:
            EncodeError: If kind names no primitive
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).strip().lower())
        except ValueError as err:
            supported = ", ".join(p.value for p in cls)
            raise EncodeError(f"unknown primitive kind {kind!r}. Supported: {supported}") from err


_INTEGER_TYPES = {
    Primitive.INT8: INT8,
    Primitive.UINT8: UINT8,
    Primitive.INT16: INT16,
    Primitive.UINT16: UINT16,
    Primitive.INT32: INT32,
    Primitive.UINT32: UINT32,
    Primitive.INT64: INT64,
    Primitive.UINT64: UINT64,
}

_FLOAT_FORMATS = {
    Primitive.FLOAT32: FLOAT32,
    Primitive.FLOAT64: FLOAT64,
}


def parse_kinds(kinds: Union[str, Iterable[KindLike]]) -> List[Primitive]:
    """Parse a comma-separated string or an iterable into a list of kinds.

    >>> parse_kinds("int32, uint8,float64")
    [<Primitive.INT32: 'int32'>, <Primitive.UINT8: 'uint8'>, <Primitive.FLOAT64: 'float64'>]
    """
    if isinstance(kinds, str):
        kinds = [part for part in kinds.split(",") if part.strip()]
    return [Primitive.coerce(kind) for kind in kinds]
