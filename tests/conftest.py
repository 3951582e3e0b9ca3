"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from portarch import ArchiveConfig

HEADER = bytes.fromhex("7f0101")


@pytest.fixture
def header() -> bytes:
    """Header written by a default writer: magic 127, version 1."""
    return HEADER


@pytest.fixture
def strict_config() -> ArchiveConfig:
    """Config rejecting infinities and NaNs."""
    return ArchiveConfig(no_infnan=True)


@pytest.fixture
def headerless_config() -> ArchiveConfig:
    """Config with no stream header."""
    return ArchiveConfig(no_header=True)
