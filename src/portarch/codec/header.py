"""Stream header written once at the start of every session.

The header is the magic byte, written raw, followed by the archive version as
a uint16 wire integer. A reader rejects the stream before any value is decoded
when the magic does not match or the version is one it cannot understand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from structlog import get_logger

from ..config import MIN_ARCHIVE_VERSION, ArchiveConfig
from ..exceptions import (
    BadStreamHeaderError,
    IntegerOverflowError,
    NegativeIntoUnsignedError,
    TruncatedStreamError,
)
from .integer import UINT16, decode_integer, encode_integer
from .stream import InputStream, OutputStream

logger = get_logger()

VERSION_TYPE = UINT16


@dataclass(frozen=True)
class StreamHeader:
    """Magic byte and archive version of a stream."""

    magic: int
    version: int


def begin_write(stream: OutputStream, config: ArchiveConfig) -> Optional[StreamHeader]:
    """Write the stream header.

    Sink errors propagate unchanged.

    Returns:
        The header written, or None if the config disables headers
    """
    if config.no_header:
        return None

    stream.write_signed_byte(config.magic)
    encode_integer(stream, config.version, VERSION_TYPE)
    logger.debug("stream header written", magic=config.magic, version=config.version)
    return StreamHeader(config.magic, config.version)


def begin_read(stream: InputStream, config: ArchiveConfig) -> Optional[StreamHeader]:
    """Read and validate the stream header.

    Versions from MIN_ARCHIVE_VERSION up to config.version are accepted.

    Returns:
        The header read, or None if the config disables headers

    Raises:
        BadStreamHeaderError: If the magic byte mismatches, the version is
            unsupported or malformed, or the stream ends inside the header
    """
    if config.no_header:
        return None

    try:
        magic = stream.read_signed_byte()
    except TruncatedStreamError as e:
        raise BadStreamHeaderError("stream is empty, expected a header") from e
    if magic != config.magic:
        logger.warn("bad magic byte", magic=magic, expected=config.magic)
        raise BadStreamHeaderError(f"invalid magic byte: {magic} (expected {config.magic})")

    try:
        version = decode_integer(stream, VERSION_TYPE)
    except (IntegerOverflowError, NegativeIntoUnsignedError, TruncatedStreamError) as e:
        raise BadStreamHeaderError(f"malformed archive version: {e}") from e

    if version > config.version:
        logger.warn("archive version from the future", version=version, supported=config.version)
        raise BadStreamHeaderError(
            f"unsupported archive version: {version} (newest supported: {config.version})"
        )
    if version < MIN_ARCHIVE_VERSION:
        raise BadStreamHeaderError(f"unsupported archive version: {version}")
    if version < config.version:
        logger.info(
            "reading archive written by an older version", version=version, current=config.version
        )

    logger.debug("stream header read", magic=magic, version=version)
    return StreamHeader(magic, version)
