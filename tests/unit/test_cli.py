"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from portarch import ArchiveConfig, encode


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "portarch.cli.main", *args],
        capture_output=True,
        text=True,
    )


@pytest.fixture
def stream_file(tmp_path: Path) -> Path:
    """A stream holding int32 -5, uint8 255 and float64 3.14159265358979."""
    path = tmp_path / "values.bin"
    path.write_bytes(encode("int32,uint8,float64", [-5, 255, 3.14159265358979]))
    return path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = _run("--help")
    assert result.returncode == 0
    assert "portarch: Portable Binary Archive" in result.stdout
    assert "--inspect" in result.stdout
    assert "--decode" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = _run("--version")
    assert result.returncode == 0
    assert "portarch 0.1.0" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = _run()
    assert result.returncode == 0
    assert "portarch: Portable Binary Archive" in result.stdout


def test_cli_inspect(stream_file: Path) -> None:
    """Test CLI --inspect on a valid stream."""
    result = _run("--inspect", str(stream_file))
    assert result.returncode == 0
    assert "Magic byte" in result.stdout
    assert "127 (0x7f)" in result.stdout
    assert "Archive version" in result.stdout
    assert "Payload size" in result.stdout


def test_cli_inspect_bad_header(tmp_path: Path) -> None:
    """Test CLI --inspect on a stream with a wrong magic byte."""
    path = tmp_path / "bad.bin"
    path.write_bytes(b"\x00\x01\x01")

    result = _run("--inspect", str(path))
    assert result.returncode == 1
    assert "invalid magic byte" in result.stderr


def test_cli_decode(stream_file: Path) -> None:
    """Test CLI --decode with matching types."""
    result = _run("--decode", str(stream_file), "--types", "int32,uint8,float64")
    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "1. int32: -5"
    assert lines[1] == "2. uint8: 255"
    assert lines[2].startswith("3. float64: 3.14159265358979")


def test_cli_decode_wrong_types(stream_file: Path) -> None:
    """Reading -5 as an unsigned type fails."""
    result = _run("--decode", str(stream_file), "--types", "uint32")
    assert result.returncode == 1
    assert "negative number" in result.stderr


def test_cli_decode_requires_types(stream_file: Path) -> None:
    """Test CLI --decode without --types."""
    result = _run("--decode", str(stream_file))
    assert result.returncode == 1
    assert "--types" in result.stderr


def test_cli_decode_no_header(tmp_path: Path) -> None:
    """Test CLI --decode on a headerless stream."""
    path = tmp_path / "raw.bin"
    path.write_bytes(encode("int8", [5], config=ArchiveConfig(no_header=True)))

    result = _run("--decode", str(path), "--types", "int8", "--no-header")
    assert result.returncode == 0
    assert "1. int8: 5" in result.stdout


def test_cli_missing_file() -> None:
    """Test CLI --inspect with missing file."""
    result = _run("--inspect", "nonexistent.bin")
    assert result.returncode == 1
    assert "Error" in result.stderr or "not found" in result.stderr.lower()


def test_cli_decode_corrupt_length(tmp_path: Path) -> None:
    """A corrupt byte-string length is reported, not a traceback."""
    path = tmp_path / "corrupt.bin"
    path.write_bytes(b"\x7f\x01\x01\x08" + b"\xff" * 8 + b"abc")

    result = _run("--decode", str(path), "--types", "bytes")
    assert result.returncode == 1
    assert "Not enough bytes" in result.stderr
    assert "Traceback" not in result.stderr
