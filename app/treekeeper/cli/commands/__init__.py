"""CLI commands for treekeeper.

This package contains all subcommand implementations.
"""

from treekeeper.cli.commands import clean, config, copy, files, prune

__all__ = ["clean", "config", "copy", "files", "prune"]
