"""Archive session configuration.

The encoding policy of a session (magic byte, archive version and the
no_infnan / no_header flags) is an explicit value passed to the writer and
reader rather than a process-wide constant.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

# This value is written to the top of the stream
MAGIC_BYTE = 127

# Newest archive version this implementation reads and the one it writes
ARCHIVE_VERSION = 1

# Oldest archive version ever produced
MIN_ARCHIVE_VERSION = 1


class ArchiveFlags(enum.IntFlag):
    """Flag word accepted by ArchiveConfig.from_flags().

    Values are fixed on the wire protocol level: existing flag words keep
    their meaning across releases.
    """

    NONE = 0
    NO_HEADER = 1
    NO_INFNAN = 64


class ArchiveConfig(BaseModel):
    """Settings shared by both ends of an archive session.

    Attributes:
        magic: Sentinel written as the first byte of every stream (-128 to 127)
        version: Archive version written by a writer; newest version accepted by a reader
        no_infnan: Reject infinite and NaN floats in both directions
        no_header: Neither write nor expect the magic byte and version

    Example:
        >>> config = ArchiveConfig(no_infnan=True)
        >>> config.flags
        <ArchiveFlags.NO_INFNAN: 64>
        >>> ArchiveConfig.from_flags(ArchiveFlags.NO_HEADER | ArchiveFlags.NO_INFNAN).no_header
        True
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    magic: int = Field(default=MAGIC_BYTE, ge=-128, le=127)
    version: int = Field(default=ARCHIVE_VERSION, ge=MIN_ARCHIVE_VERSION, le=0xFFFF)
    no_infnan: bool = False
    no_header: bool = False

    @classmethod
    def from_flags(cls, flags: int, **kwargs: int) -> ArchiveConfig:
        """Build a config from an integer flag word.

        Args:
            flags: Combination of ArchiveFlags values
            **kwargs: Other fields (magic, version) passed through unchanged

        Returns:
            New ArchiveConfig
        """
        flags = ArchiveFlags(flags)
        return cls(
            no_header=bool(flags & ArchiveFlags.NO_HEADER),
            no_infnan=bool(flags & ArchiveFlags.NO_INFNAN),
            **kwargs,
        )

    @property
    def flags(self) -> ArchiveFlags:
        """Return the flag word equivalent of this config."""
        flags = ArchiveFlags.NONE
        if self.no_header:
            flags |= ArchiveFlags.NO_HEADER
        if self.no_infnan:
            flags |= ArchiveFlags.NO_INFNAN
        return flags


DEFAULT_CONFIG = ArchiveConfig()
