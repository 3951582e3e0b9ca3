"""Portable binary codec for portarch.

This module provides the writer/reader pair and the integer, float and header
transcoders they delegate to.
"""

from __future__ import annotations

from .decoder import ArchiveReader, decode
from .encoder import ArchiveWriter, encode
from .floating import FLOAT32, FLOAT64, FloatClass, FloatFormat, classify_float
from .header import StreamHeader, begin_read, begin_write
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
    encode_integer,
)
from .schema import Primitive, parse_kinds
from .stream import InputStream, OutputStream

__all__ = [
    "ArchiveWriter",
    "ArchiveReader",
    "encode",
    "decode",
    "Primitive",
    "parse_kinds",
    "StreamHeader",
    "begin_write",
    "begin_read",
    "IntegerType",
    "encode_integer",
    "decode_integer",
    "INT8",
    "UINT8",
    "INT16",
    "UINT16",
    "INT32",
    "UINT32",
    "INT64",
    "UINT64",
    "FloatFormat",
    "FloatClass",
    "classify_float",
    "FLOAT32",
    "FLOAT64",
    "InputStream",
    "OutputStream",
]
