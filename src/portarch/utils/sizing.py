"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..codec.floating import FloatFormat
from ..codec.integer import magnitude_size
from ..codec.schema import KindLike, Primitive, parse_kinds
from ..config import DEFAULT_CONFIG, ArchiveConfig
from ..exceptions import EncodeError


def header_size(config: Optional[ArchiveConfig] = None) -> int:
    """Calculate the size of the stream header in bytes.

    Example:
        >>> header_size()
        3  # magic byte + version prefix + 1 version byte
        >>> header_size(ArchiveConfig(no_header=True))
        0
    """
    config = config or DEFAULT_CONFIG
    if config.no_header:
        return 0
    return 1 + integer_size(config.version)


def integer_size(value: int) -> int:
    """Calculate the encoded size of an integer in bytes, size prefix included.

    The size does not depend on the declared type.

    Example:
        >>> integer_size(0), integer_size(5), integer_size(-300)
        (1, 2, 3)
    """
    return 1 + magnitude_size(value)


def float_size(fmt: FloatFormat) -> int:
    """Return the encoded size of a float in the given format."""
    return fmt.width


def value_size(kind: KindLike, value: Any) -> int:
    """Calculate the encoded size of a single value of the given kind.

    Raises:
        EncodeError: If value has the wrong type for kind
    """
    kind = Primitive.coerce(kind)
    if kind is Primitive.BOOL:
        if not isinstance(value, bool):
            raise EncodeError(f"expected bool, got {type(value).__name__}")
        return integer_size(int(value))
    if kind.integer_type is not None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"expected int for {kind.value}, got {type(value).__name__}")
        return integer_size(value)
    fmt = kind.float_format
    if fmt is not None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise EncodeError(f"expected float for {fmt.name}, got {type(value).__name__}")
        return float_size(fmt)
    if kind is Primitive.STR:
        if not isinstance(value, str):
            raise EncodeError(f"expected str, got {type(value).__name__}")
        value = value.encode("utf-8")
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EncodeError(f"expected bytes for {kind.value}, got {type(value).__name__}")
    return integer_size(len(value)) + len(value)


def encoded_size(
    kinds: Sequence[KindLike] | str,
    values: Sequence[Any],
    *,
    config: Optional[ArchiveConfig] = None,
) -> int:
    """Calculate the size of the stream encode() would produce, in bytes.

    Example:
        >>> encoded_size("int64,float32", [5, 1.0])
        9  # 3 header + 2 int64 + 4 float32
    """
    parsed = parse_kinds(kinds)
    if len(parsed) != len(values):
        raise EncodeError(f"got {len(parsed)} kinds but {len(values)} values")
    return header_size(config) + sum(value_size(kind, value) for kind, value in zip(parsed, values))
