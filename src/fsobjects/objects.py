"""Objects whose persistent state is a directory on a file system.

A ConfiguredDirectory owns a directory that holds a single YAML
configuration file at its root. The configuration is loaded on
construction, mutated in memory by subclasses and written back on save
only when it was marked dirty (or when the save is forced).

Instances are not thread-safe. Callers sharing one instance, or one
backing directory, across threads or processes must synchronize
externally.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from fsobjects.errors import DirectoryExpectedError
from fsobjects.filesystem import (
    assert_dir,
    assert_file,
    assert_file_or_not_exists,
    read_yaml,
    write_yaml,
)
from fsobjects.protocols import FileSystem

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class DirectoryLocation:
    """A directory on a file system, verified to exist on construction."""

    __slots__ = ("filesystem", "path")

    def __init__(self, filesystem: FileSystem, path: Path, auto_init: bool = False) -> None:
        """Bind to a directory, optionally creating it.

        Args:
            filesystem: Filesystem the directory lives on.
            path: Path to the directory.
            auto_init: Create the directory (recursively) if it is missing.

        Raises:
            ValueError: If filesystem or path is None.
            PathNotFoundError: If the directory is missing and auto_init is False.
            DirectoryExpectedError: If the path is not a directory, or an
                ancestor that has to be created is not a directory.
        """
        if filesystem is None:
            raise ValueError("filesystem must not be None")
        if path is None:
            raise ValueError("path must not be None")

        self.filesystem = filesystem
        self.path = Path(path)

        if auto_init and not filesystem.exists(self.path):
            logger.debug("Creating directory %s", self.path)
            try:
                filesystem.mkdir(self.path, parents=True, exist_ok=True)
            except (FileExistsError, NotADirectoryError) as e:
                raise DirectoryExpectedError(self.path) from e

        assert_dir(filesystem, self.path)

    def join(self, name: str) -> Path:
        """Get the path of an entry inside the directory."""
        return self.path / name

    def __repr__(self) -> str:
        return f"DirectoryLocation({str(self.path)!r})"


class ConfiguredDirectory(Generic[ConfigT]):
    """A directory-based object with a YAML configuration file at its root.

    Subclasses declare the configuration model with the ``config_type``
    class attribute (or pass ``config_type`` to the constructor). The model
    must be constructible without arguments; that instance is the default
    configuration written on auto-init.

    Example:
        >>> class ProjectConfig(BaseModel):
        ...     name: str = ""
        >>> class Project(ConfiguredDirectory[ProjectConfig]):
        ...     config_type = ProjectConfig
        ...     def rename(self, name: str) -> None:
        ...         self.configuration.name = name
        ...         self.mark_dirty()
    """

    config_type: type[BaseModel] | None = None

    def __init__(
        self,
        filesystem: FileSystem,
        path: Path,
        config_file_name: str,
        auto_init: bool = False,
        config_type: type[ConfigT] | None = None,
    ) -> None:
        """Open (or with auto_init, create) a configured directory.

        If auto_init is True, a missing directory is created recursively and
        a missing configuration file is written with the default
        configuration. Otherwise both must already exist. The configuration
        is then read from disk in both cases.

        Args:
            filesystem: Filesystem to use.
            path: Path to the directory the object is based on.
            config_file_name: File name of the configuration file, relative
                to the directory root.
            auto_init: Initialize the directory if not already initialized.
            config_type: Configuration model. Defaults to the class attribute.

        Raises:
            ValueError: If a required argument is missing or empty.
            PathNotFoundError: If the directory or the configuration file is
                missing and auto_init is False.
            DirectoryExpectedError: If the path is not a directory.
            FileExpectedError: If the configuration path is not a file.
            ConfigurationSerializationError: If the configuration file does
                not parse into the configuration model.
        """
        if not config_file_name:
            raise ValueError("config_file_name must not be empty")

        resolved_type = config_type or type(self).config_type
        if resolved_type is None:
            raise ValueError(f"{type(self).__name__} does not declare a config_type")

        self._directory = DirectoryLocation(filesystem, path, auto_init)
        self._config_file_name = config_file_name
        self._config_type: type[ConfigT] = resolved_type  # type: ignore[assignment]

        if auto_init and not filesystem.exists(self.configuration_path):
            logger.debug("Writing default configuration to %s", self.configuration_path)
            self._configuration = self._config_type()
            self._write_configuration()

        self._read_configuration()
        self._dirty = False

    @staticmethod
    def is_path_to_such_object(
        filesystem: FileSystem, path: Path, config_file_name: str
    ) -> bool:
        """Check whether a path points to a configured directory.

        Args:
            filesystem: Filesystem to use.
            path: Path to check.
            config_file_name: File name of the configuration file.

        Returns:
            True if path is a directory containing the configuration file.

        Raises:
            ValueError: If filesystem is None or config_file_name is empty.
                Missing or wrong-kind paths never raise, they return False.
        """
        if filesystem is None:
            raise ValueError("filesystem must not be None")
        if not config_file_name:
            raise ValueError("config_file_name must not be empty")

        path = Path(path)
        if not filesystem.is_dir(path):
            return False
        return filesystem.is_file(path / config_file_name)

    @staticmethod
    def find_in(
        filesystem: FileSystem, parent: Path, config_file_name: str
    ) -> list[Path]:
        """Find the configured directories directly under a parent directory.

        Args:
            filesystem: Filesystem to use.
            parent: Directory to scan.
            config_file_name: File name of the configuration file.

        Returns:
            Sorted paths of the children that are configured directories.

        Raises:
            PathNotFoundError: If parent does not exist.
            DirectoryExpectedError: If parent is not a directory.
        """
        parent = Path(parent)
        assert_dir(filesystem, parent)
        return sorted(
            child
            for child in filesystem.list_dir(parent)
            if ConfiguredDirectory.is_path_to_such_object(filesystem, child, config_file_name)
        )

    @property
    def filesystem(self) -> FileSystem:
        """The filesystem the object lives on."""
        return self._directory.filesystem

    @property
    def path(self) -> Path:
        """The directory the object is based on."""
        return self._directory.path

    @property
    def config_file_name(self) -> str:
        """File name of the configuration file."""
        return self._config_file_name

    @property
    def configuration_path(self) -> Path:
        """The path to the configuration file."""
        return self._directory.join(self._config_file_name)

    @property
    def configuration(self) -> ConfigT:
        """The current in-memory configuration.

        Call mark_dirty() after mutating it so that save() persists it.
        """
        return self._configuration

    @property
    def dirty(self) -> bool:
        """True if the configuration has unsaved changes."""
        return self._dirty

    def mark_dirty(self) -> None:
        """Mark the current configuration as changed."""
        self._dirty = True

    def save(self, force: bool = False) -> None:
        """Write the configuration to the file system if dirty.

        The dirty flag is always cleared after a successful call. If the
        write fails the flag keeps its previous value.

        Args:
            force: Write even if the configuration is not dirty.
        """
        if force or self._dirty:
            self._write_configuration()
        else:
            logger.debug("Configuration %s unchanged, skipping save", self.configuration_path)
        self._dirty = False

    def reload(self) -> None:
        """Re-read the configuration file, discarding unsaved changes."""
        self._read_configuration()
        self._dirty = False

    def _read_configuration(self) -> None:
        configuration_path = self.configuration_path

        assert_file(self.filesystem, configuration_path)
        self._configuration = read_yaml(self.filesystem, configuration_path, self._config_type)

    def _write_configuration(self) -> None:
        configuration_path = self.configuration_path

        assert_file_or_not_exists(self.filesystem, configuration_path)
        write_yaml(self.filesystem, configuration_path, self._configuration)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class FreeformConfiguration(BaseModel):
    """Configuration model accepting any mapping.

    Used where the configuration schema is not known in advance.
    """

    model_config = ConfigDict(extra="allow")
    yaml_dump_mode: ClassVar[str] = "python"

    def as_dict(self) -> dict[str, Any]:
        """Get the configuration content as a plain mapping."""
        return self.model_dump(mode="python")
