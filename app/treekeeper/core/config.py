"""treekeeper configuration and settings.

This module provides the configuration model and I/O functions for
the command-line interface: the pending-deletion suffix, default
enumeration pattern, default retention count, and extra protected
paths.

Configuration is stored in ~/.config/treekeeper/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treekeeper.core.paths import get_config_path
from treekeeper.filesystem.operator import DEFAULT_DELETING_SUFFIX, validate_deleting_suffix


class TreekeeperConfig(BaseModel):
    """Configuration for treekeeper commands.

    Attributes:
        deleting_suffix: Suffix for entries left pending deletion.
        default_pattern: File pattern used by ``files`` when none is given.
        retention_keep: Default number of subdirectories ``prune`` keeps.
        extra_protected: Additional glob patterns that ``clean`` and
            ``prune`` refuse to touch.
    """

    model_config = ConfigDict(extra="forbid")

    deleting_suffix: Annotated[
        str,
        Field(description="Suffix for entries left pending deletion"),
    ] = DEFAULT_DELETING_SUFFIX
    default_pattern: Annotated[
        str,
        Field(min_length=1, description="Default file pattern for enumeration"),
    ] = "*"
    retention_keep: Annotated[
        int,
        Field(ge=0, description="Default number of subdirectories to keep"),
    ] = 5
    extra_protected: Annotated[
        list[str],
        Field(description="Additional protected path patterns"),
    ] = []

    @field_validator("deleting_suffix")
    @classmethod
    def check_deleting_suffix(cls, v: str) -> str:
        """Validate that the suffix can be appended to file names."""
        return validate_deleting_suffix(v)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> TreekeeperConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TreekeeperConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TreekeeperConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def get_effective_config(path: Path | None = None) -> TreekeeperConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        The loaded config, or a default TreekeeperConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return TreekeeperConfig()


def save_config(config: TreekeeperConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TreekeeperConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
