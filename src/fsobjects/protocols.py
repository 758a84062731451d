"""Protocol definitions for core abstractions.

Designing to interfaces lets tests substitute in-memory or mock
file systems for the real one. Implementations satisfy these protocols
structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    Paths are joined with pathlib; implementations only answer for
    the paths they are given.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file.

        Args:
            path: Path to check.

        Returns:
            True if path is a file, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def list_dir(self, path: Path) -> list[Path]:
        """List the entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Full paths of the directory entries.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.

        Returns:
            File content as string.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file, creating or overwriting it.

        Args:
            path: Path to the file.
            content: Content to write.
        """
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...
