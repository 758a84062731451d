"""Error taxonomy for file-system based objects.

Every error derives from FileSystemObjectError and from the closest
built-in OSError/ValueError subclass, so callers can catch either.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfigurationSerializationError",
    "DirectoryExpectedError",
    "FileExpectedError",
    "FileSystemObjectError",
    "PathNotFoundError",
]


class FileSystemObjectError(Exception):
    """Base error for file-system based objects."""

    pass


class PathNotFoundError(FileSystemObjectError, FileNotFoundError):
    """A path that was expected to exist does not."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class DirectoryExpectedError(FileSystemObjectError, NotADirectoryError):
    """A path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Expected a directory: {path}")
        self.path = path


class FileExpectedError(FileSystemObjectError, IsADirectoryError):
    """A path exists but is not a regular file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Expected a file: {path}")
        self.path = path


class ConfigurationSerializationError(FileSystemObjectError, ValueError):
    """Structured content could not be parsed into the configuration type."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid configuration in {path}: {reason}")
        self.path = path
        self.reason = reason
