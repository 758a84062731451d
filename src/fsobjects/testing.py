"""Test doubles for code written against the FileSystem protocol.

Two flavours are provided:

- ``create_mock()`` and the ``setup_*`` helpers build a strict
  ``MagicMock``: every path the code under test touches must be set up
  beforehand, and any other access fails the test with AssertionError.
- ``InMemoryFileSystem`` is a working dict-backed file system that counts
  reads and writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from unittest.mock import MagicMock

from fsobjects.protocols import FileSystem

__all__ = [
    "InMemoryFileSystem",
    "PathExistence",
    "assert_file_written",
    "create_mock",
    "setup_creatable_dir",
    "setup_existence",
    "setup_list_dir",
    "setup_text_file",
    "setup_writable_file",
]


class PathExistence(Enum):
    """What a mocked path points to."""

    DOESNT_EXIST = "doesnt_exist"
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class _MockState:
    existence: dict[Path, PathExistence] = field(default_factory=dict)
    listings: dict[Path, list[Path]] = field(default_factory=dict)
    contents: dict[Path, str] = field(default_factory=dict)
    writable: dict[Path, str] = field(default_factory=dict)
    creatable: set[Path] = field(default_factory=set)

    def lookup(self, operation: str, path: Path) -> PathExistence:
        path = Path(path)
        if path not in self.existence:
            raise AssertionError(f"Unexpected {operation}({path}): path was not set up")
        return self.existence[path]


def _state(fs_mock: MagicMock) -> _MockState:
    return fs_mock._fs_state


def create_mock() -> MagicMock:
    """Create a strict FileSystem mock.

    Returns:
        MagicMock specced on FileSystem. Calls for paths that were not set
        up raise AssertionError.
    """
    fs_mock = MagicMock(spec=FileSystem)
    state = _MockState()
    fs_mock._fs_state = state

    def read_text(path: Path) -> str:
        path = Path(path)
        if path not in state.contents:
            raise AssertionError(f"Unexpected read_text({path}): path was not set up")
        return state.contents[path]

    def write_text(path: Path, content: str) -> None:
        path = Path(path)
        if path not in state.writable:
            raise AssertionError(f"Unexpected write_text({path}): path was not set up")
        setup_text_file(fs_mock, path, state.writable[path])

    def list_dir(path: Path) -> list[Path]:
        path = Path(path)
        if path not in state.listings:
            raise AssertionError(f"Unexpected list_dir({path}): path was not set up")
        return list(state.listings[path])

    def mkdir(path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        path = Path(path)
        if path not in state.creatable:
            raise AssertionError(f"Unexpected mkdir({path}): path was not set up")
        setup_existence(fs_mock, path, PathExistence.DIRECTORY)

    fs_mock.exists.side_effect = (
        lambda path: state.lookup("exists", path) is not PathExistence.DOESNT_EXIST
    )
    fs_mock.is_file.side_effect = lambda path: state.lookup("is_file", path) is PathExistence.FILE
    fs_mock.is_dir.side_effect = (
        lambda path: state.lookup("is_dir", path) is PathExistence.DIRECTORY
    )
    fs_mock.read_text.side_effect = read_text
    fs_mock.write_text.side_effect = write_text
    fs_mock.list_dir.side_effect = list_dir
    fs_mock.mkdir.side_effect = mkdir
    return fs_mock


def setup_existence(fs_mock: MagicMock, path: Path, existence: PathExistence) -> None:
    """Answer exists/is_file/is_dir for a path."""
    _state(fs_mock).existence[Path(path)] = existence


def setup_list_dir(fs_mock: MagicMock, path: Path, *children: str) -> None:
    """Make a path a directory whose listing contains the given names."""
    path = Path(path)
    setup_existence(fs_mock, path, PathExistence.DIRECTORY)
    _state(fs_mock).listings[path] = [path / child for child in children]


def setup_text_file(fs_mock: MagicMock, path: Path, data: str) -> None:
    """Make a path a readable file with the given content."""
    path = Path(path)
    setup_existence(fs_mock, path, PathExistence.FILE)
    _state(fs_mock).contents[path] = data


def setup_writable_file(
    fs_mock: MagicMock, path: Path, expected: str, exists: bool = False
) -> None:
    """Allow writes to a path.

    After a write the path becomes a file that reads back as ``expected``.
    Use assert_file_written() to verify what was actually written.

    Args:
        fs_mock: Mock created by create_mock().
        path: Path that may be written.
        expected: Content the path holds after the write.
        exists: Whether the file already exists before the write.
    """
    path = Path(path)
    setup_existence(
        fs_mock, path, PathExistence.FILE if exists else PathExistence.DOESNT_EXIST
    )
    _state(fs_mock).writable[path] = expected


def setup_creatable_dir(fs_mock: MagicMock, path: Path) -> None:
    """Make a path a missing directory that mkdir may create."""
    path = Path(path)
    setup_existence(fs_mock, path, PathExistence.DOESNT_EXIST)
    _state(fs_mock).creatable.add(path)


def assert_file_written(fs_mock: MagicMock, path: Path, expected_data: str) -> None:
    """Assert that the mock received a write of the given content."""
    fs_mock.write_text.assert_any_call(Path(path), expected_data)


class InMemoryFileSystem:
    """Dict-backed filesystem for tests.

    Satisfies the FileSystem protocol structurally. Mirrors the errors of
    pathlib for missing paths and wrong entity kinds.
    """

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()
        self.read_count = 0
        self.write_count = 0

    @staticmethod
    def _is_root(path: Path) -> bool:
        return path == path.parent

    def exists(self, path: Path) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def is_file(self, path: Path) -> bool:
        return Path(path) in self.files

    def is_dir(self, path: Path) -> bool:
        path = Path(path)
        return path in self.dirs or self._is_root(path)

    def list_dir(self, path: Path) -> list[Path]:
        path = Path(path)
        if self.is_file(path):
            raise NotADirectoryError(str(path))
        if not self.is_dir(path):
            raise FileNotFoundError(str(path))
        entries = [p for p in (*self.files, *self.dirs) if p.parent == path and p != path]
        return sorted(entries)

    def read_text(self, path: Path) -> str:
        path = Path(path)
        if self.is_dir(path):
            raise IsADirectoryError(str(path))
        if path not in self.files:
            raise FileNotFoundError(str(path))
        self.read_count += 1
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        path = Path(path)
        if self.is_dir(path):
            raise IsADirectoryError(str(path))
        if self.is_file(path.parent):
            raise NotADirectoryError(str(path.parent))
        if not self.is_dir(path.parent):
            raise FileNotFoundError(str(path.parent))
        self.write_count += 1
        self.files[path] = content

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        path = Path(path)
        if self.exists(path):
            if exist_ok and self.is_dir(path):
                return
            raise FileExistsError(str(path))
        if self.is_file(path.parent):
            raise NotADirectoryError(str(path.parent))
        if not self.is_dir(path.parent):
            if not parents:
                raise FileNotFoundError(str(path.parent))
            self.mkdir(path.parent, parents=True, exist_ok=True)
        self.dirs.add(path)
