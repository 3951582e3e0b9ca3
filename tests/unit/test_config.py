"""Unit tests for archive configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from portarch import ARCHIVE_VERSION, MAGIC_BYTE, ArchiveConfig, ArchiveFlags


class TestArchiveConfig:
    """Test ArchiveConfig."""

    def test_defaults(self) -> None:
        """Test default settings."""
        config = ArchiveConfig()

        assert config.magic == MAGIC_BYTE == 127
        assert config.version == ARCHIVE_VERSION == 1
        assert config.no_infnan is False
        assert config.no_header is False
        assert config.flags == ArchiveFlags.NONE

    def test_from_flags(self) -> None:
        """Flag values are stable."""
        assert ArchiveFlags.NO_HEADER == 1
        assert ArchiveFlags.NO_INFNAN == 64

        config = ArchiveConfig.from_flags(65)
        assert config.no_header is True
        assert config.no_infnan is True
        assert config.flags == ArchiveFlags.NO_HEADER | ArchiveFlags.NO_INFNAN

    def test_from_flags_with_fields(self) -> None:
        """Other fields pass through from_flags()."""
        config = ArchiveConfig.from_flags(ArchiveFlags.NO_INFNAN, magic=5, version=3)

        assert config.magic == 5
        assert config.version == 3
        assert config.no_header is False

    def test_invalid_magic(self) -> None:
        """The magic must fit a signed byte."""
        with pytest.raises(ValidationError):
            ArchiveConfig(magic=200)

    def test_invalid_version(self) -> None:
        """Versions start at 1 and fit a uint16."""
        with pytest.raises(ValidationError):
            ArchiveConfig(version=0)

        with pytest.raises(ValidationError):
            ArchiveConfig(version=70000)

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown settings."""
        with pytest.raises(ValidationError):
            ArchiveConfig(endianness="little")

    def test_frozen(self) -> None:
        """Configs cannot change once a session uses them."""
        config = ArchiveConfig()

        with pytest.raises(ValidationError):
            config.no_infnan = True  # type: ignore[misc]
