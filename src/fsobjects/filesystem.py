"""Filesystem abstraction for testability.

This module provides the RealFileSystem implementation of the FileSystem
protocol, path assertions shared by file-system based objects, and the
YAML codec used to persist configuration models.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from fsobjects.errors import (
    ConfigurationSerializationError,
    DirectoryExpectedError,
    FileExpectedError,
    PathNotFoundError,
)
from fsobjects.protocols import FileSystem

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file."""
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def list_dir(self, path: Path) -> list[Path]:
        """List the entries of a directory."""
        return sorted(path.iterdir())

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        path.write_text(content, encoding="utf-8")

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)


# ============================================================================
# Path Assertions
# ============================================================================


def assert_exists(fs: FileSystem, path: Path) -> None:
    """Raise PathNotFoundError unless the path exists."""
    if not fs.exists(path):
        raise PathNotFoundError(path)


def assert_dir(fs: FileSystem, path: Path) -> None:
    """Assert that a path is an existing directory.

    Raises:
        PathNotFoundError: If the path does not exist.
        DirectoryExpectedError: If the path is not a directory.
    """
    assert_exists(fs, path)
    if not fs.is_dir(path):
        raise DirectoryExpectedError(path)


def assert_file(fs: FileSystem, path: Path) -> None:
    """Assert that a path is an existing regular file.

    Raises:
        PathNotFoundError: If the path does not exist.
        FileExpectedError: If the path is not a file.
    """
    assert_exists(fs, path)
    if not fs.is_file(path):
        raise FileExpectedError(path)


def assert_file_or_not_exists(fs: FileSystem, path: Path) -> None:
    """Assert that a path is either absent or a regular file.

    Raises:
        FileExpectedError: If the path exists but is not a file.
    """
    if fs.exists(path) and not fs.is_file(path):
        raise FileExpectedError(path)


# ============================================================================
# YAML Codec
# ============================================================================


def read_yaml(fs: FileSystem, path: Path, model_type: type[ModelT]) -> ModelT:
    """Read a YAML file into a pydantic model.

    An empty document is read as an empty mapping, so models whose fields
    all have defaults load from an empty file.

    Args:
        fs: Filesystem to read through.
        path: Path to the YAML file.
        model_type: Model class to validate the content against.

    Returns:
        Parsed model instance.

    Raises:
        ConfigurationSerializationError: If the content is not UTF-8, not
            valid YAML, or does not match the model.
    """
    logger.debug("Reading YAML from %s", path)
    try:
        text = fs.read_text(path)
    except UnicodeDecodeError as e:
        raise ConfigurationSerializationError(path, str(e)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationSerializationError(path, str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationSerializationError(
            path, f"expected a mapping, got {type(data).__name__}"
        )

    try:
        return model_type.model_validate(data)
    except ValidationError as e:
        raise ConfigurationSerializationError(path, str(e)) from e


def write_yaml(fs: FileSystem, path: Path, model: BaseModel) -> None:
    """Serialize a pydantic model to a YAML file.

    Models are dumped in JSON mode unless they set ``yaml_dump_mode`` to
    ``"python"``, which keeps YAML-native scalars such as dates.

    Args:
        fs: Filesystem to write through.
        path: Path to the YAML file. Created or overwritten.
        model: Model to serialize.
    """
    logger.debug("Writing YAML to %s", path)
    data = model.model_dump(mode=getattr(model, "yaml_dump_mode", "json"), by_alias=True)
    fs.write_text(path, yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
