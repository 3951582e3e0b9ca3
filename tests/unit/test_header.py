"""Unit tests for the stream header."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from portarch import ArchiveConfig, ArchiveReader, ArchiveWriter
from portarch.codec.header import StreamHeader, begin_read, begin_write
from portarch.codec.stream import InputStream, OutputStream
from portarch.exceptions import BadStreamHeaderError, ErrorKind


class TestBeginWrite:
    """Test header writing."""

    def test_default_header(self, header: bytes) -> None:
        """Magic byte 127 followed by version 1 as a uint16 wire integer."""
        out = OutputStream()
        written = begin_write(out, ArchiveConfig())

        assert out.to_bytes() == header
        assert written == StreamHeader(magic=127, version=1)

    def test_custom_magic_and_version(self) -> None:
        """Test explicit magic and version settings."""
        out = OutputStream()
        begin_write(out, ArchiveConfig(magic=-2, version=300))

        assert out.to_bytes() == b"\xfe\x02\x01\x2c"

    def test_no_header(self, headerless_config: ArchiveConfig) -> None:
        """Test header disabled by config."""
        out = OutputStream()

        assert begin_write(out, headerless_config) is None
        assert out.to_bytes() == b""


class TestBeginRead:
    """Test header validation."""

    def test_valid_header(self, header: bytes) -> None:
        """Test reading a default header."""
        stream = InputStream(header + b"\x00")

        assert begin_read(stream, ArchiveConfig()) == StreamHeader(127, 1)
        assert stream.position() == 3

    def test_bad_magic(self) -> None:
        """A wrong first byte is rejected before any value byte is read."""
        stream = InputStream(b"\x00\x01\x01\x01\x05")

        with pytest.raises(BadStreamHeaderError) as exc_info:
            begin_read(stream, ArchiveConfig())

        assert exc_info.value.kind is ErrorKind.BAD_STREAM_HEADER
        assert "magic" in str(exc_info.value)
        assert stream.position() == 1

    def test_empty_stream(self) -> None:
        """Test a stream with no byte at all."""
        with pytest.raises(BadStreamHeaderError, match="empty"):
            begin_read(InputStream(b""), ArchiveConfig())

    def test_truncated_version(self) -> None:
        """Test a stream ending inside the version."""
        with pytest.raises(BadStreamHeaderError, match="malformed"):
            begin_read(InputStream(b"\x7f\x01"), ArchiveConfig())

    def test_malformed_version(self) -> None:
        """A negative or oversized version field is a header error."""
        with pytest.raises(BadStreamHeaderError, match="malformed"):
            begin_read(InputStream(b"\x7f\xff\x01"), ArchiveConfig())

        with pytest.raises(BadStreamHeaderError, match="malformed"):
            begin_read(InputStream(b"\x7f\x03\x01\x00\x00"), ArchiveConfig())

    def test_version_zero(self) -> None:
        """Versions below the oldest known version are rejected."""
        with pytest.raises(BadStreamHeaderError, match="unsupported"):
            begin_read(InputStream(b"\x7f\x00"), ArchiveConfig())

    def test_future_version(self) -> None:
        """A stream from a newer implementation is rejected."""
        data = ArchiveWriter(config=ArchiveConfig(version=2)).getvalue()

        with capture_logs() as log_list:
            with pytest.raises(BadStreamHeaderError, match="unsupported archive version: 2"):
                ArchiveReader(data)

        assert any(log["event"] == "archive version from the future" for log in log_list)

    def test_older_version_accepted(self) -> None:
        """A stream from an older version is read and the fallback logged."""
        writer = ArchiveWriter(config=ArchiveConfig(version=1))
        writer.write_int32(7)

        with capture_logs() as log_list:
            reader = ArchiveReader(writer.getvalue(), config=ArchiveConfig(version=2))

        assert reader.version == 1
        assert reader.read_int32() == 7
        event = "reading archive written by an older version"
        older = [log for log in log_list if log["event"] == event]
        assert len(older) == 1
        assert older[0]["log_level"] == "info"
        assert older[0]["version"] == 1

    def test_custom_magic_must_match(self) -> None:
        """Both ends must agree on the magic byte."""
        data = ArchiveWriter(config=ArchiveConfig(magic=42)).getvalue()

        assert ArchiveReader(data, config=ArchiveConfig(magic=42)).header == StreamHeader(42, 1)
        with pytest.raises(BadStreamHeaderError):
            ArchiveReader(data)

    def test_no_header(self, headerless_config: ArchiveConfig) -> None:
        """Nothing is read when headers are disabled."""
        stream = InputStream(b"\x01\x05")

        assert begin_read(stream, headerless_config) is None
        assert stream.position() == 0
