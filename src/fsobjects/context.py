"""Application context for dependency injection.

This module separates object creation from object use so CLI commands
can be tested with an in-memory or mock filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fsobjects.protocols import FileSystem

# Default configuration file name of a configured directory
DEFAULT_CONFIG_FILE_NAME = "config.yaml"

# Environment variable overriding the default configuration file name
CONFIG_FILE_ENV_VAR = "FSOBJECTS_CONFIG_FILE"


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from fsobjects.filesystem import RealFileSystem
    return RealFileSystem()


def default_config_file_name() -> str:
    """Get the configuration file name from the environment or the default."""
    return os.environ.get(CONFIG_FILE_ENV_VAR) or DEFAULT_CONFIG_FILE_NAME


@dataclass
class AppContext:
    """Container for application dependencies.

    The filesystem is typed with the FileSystem protocol, so test doubles
    can be injected without inheritance.
    """

    config_file_name: str = field(default_factory=default_config_file_name)
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(config_file_name: str | None = None) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        config_file_name: Override the configuration file name.

    Returns:
        Configured AppContext.
    """
    from fsobjects.filesystem import RealFileSystem

    return AppContext(
        config_file_name=config_file_name or default_config_file_name(),
        filesystem=RealFileSystem(),
    )
