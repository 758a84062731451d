"""Directory-based objects with a YAML configuration file."""

__version__ = "0.1.0"

from fsobjects.errors import (
    ConfigurationSerializationError,
    DirectoryExpectedError,
    FileExpectedError,
    FileSystemObjectError,
    PathNotFoundError,
)
from fsobjects.filesystem import RealFileSystem
from fsobjects.objects import ConfiguredDirectory, DirectoryLocation
from fsobjects.protocols import FileSystem

__all__ = [
    "__version__",
    "ConfigurationSerializationError",
    "ConfiguredDirectory",
    "DirectoryExpectedError",
    "DirectoryLocation",
    "FileExpectedError",
    "FileSystem",
    "FileSystemObjectError",
    "PathNotFoundError",
    "RealFileSystem",
]
