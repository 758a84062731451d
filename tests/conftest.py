"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fsobjects.testing import InMemoryFileSystem, create_mock

from .models import CONFIG_FILE_NAME


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Create an empty in-memory filesystem."""
    return InMemoryFileSystem()


@pytest.fixture
def fs_mock() -> MagicMock:
    """Create a strict FileSystem mock.

    Every path touched by the code under test must be set up first.
    """
    return create_mock()


@pytest.fixture
def object_dir() -> Path:
    """Path of a configured directory used with in-memory and mock filesystems."""
    return Path("/data/objects/first")


@pytest.fixture
def config_path(object_dir: Path) -> Path:
    """Path of the configuration file inside object_dir."""
    return object_dir / CONFIG_FILE_NAME
