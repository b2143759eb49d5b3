"""Copy command for directory copies.

This module provides the `treekeeper copy` command.
"""

from pathlib import Path
from typing import Annotated

import typer

from treekeeper.cli.types import require_config
from treekeeper.filesystem.copier import copy_directory
from treekeeper.filesystem.operator import ForceOperator
from treekeeper.utils.formatting import print_error, print_info, print_success


def copy(
    source: Annotated[
        Path,
        typer.Argument(help="Directory to copy from."),
    ],
    target: Annotated[
        Path,
        typer.Argument(help="Directory to copy into (created if missing)."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", help="Copy subdirectories too."),
    ] = True,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be copied."),
    ] = False,
) -> None:
    """Copy a directory, replacing files that already exist in the target.

    Examples:
        treekeeper copy ./dist /srv/app
        treekeeper copy ./conf /etc/app --no-recursive
    """
    config = require_config()

    if not source.is_dir():
        print_error(f"Not a directory: {source}")
        raise typer.Exit(code=1)

    operator = ForceOperator(dry_run=dry_run, deleting_suffix=config.deleting_suffix)
    try:
        copied = copy_directory(source, target, recursive=recursive, operator=operator)
    except OSError as e:
        print_error(f"Copy failed: {e}")
        raise typer.Exit(code=1) from e

    if dry_run:
        print_info(f"Dry run: {copied} file(s) would be copied to {target}.")
        return

    print_success(f"Copied {copied} file(s) to {target}.")
