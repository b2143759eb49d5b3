"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from treekeeper.core.config import ConfigError, TreekeeperConfig, get_effective_config
from treekeeper.filesystem.protected import is_protected_path
from treekeeper.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for file listings."""

    PLAIN = "plain"
    JSON = "json"


def require_config() -> TreekeeperConfig:
    """Load the effective configuration or exit with an error.

    Returns:
        The user configuration, or defaults when no config file exists.

    Raises:
        typer.Exit: If the config file exists but is invalid.
    """
    try:
        return get_effective_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def reject_protected(path: Path, config: TreekeeperConfig) -> None:
    """Exit with an error if a path must not be cleaned or pruned.

    Args:
        path: Target path given on the command line.
        config: Effective configuration supplying extra protected patterns.

    Raises:
        typer.Exit: If the path is protected.
    """
    if is_protected_path(path, config.extra_protected):
        print_error(f"Refusing to operate on protected path: {path}")
        raise typer.Exit(code=1)
