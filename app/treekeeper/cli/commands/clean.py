"""Clean command for resilient recursive deletion.

This module provides the `treekeeper clean` command, which deletes a
directory tree as far as possible and reports how many entries could
not be removed.
"""

from pathlib import Path
from typing import Annotated

import typer

from treekeeper.cli.types import reject_protected, require_config
from treekeeper.filesystem.cleaner import RecursiveCleaner
from treekeeper.filesystem.operator import ForceOperator
from treekeeper.utils.formatting import print_info, print_success, print_warning


def clean(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to delete."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a directory tree, leaving locked files pending deletion.

    Files that cannot be deleted are renamed to '<name>.<N>.deleting'
    and counted. Directories are removed once everything beneath them
    is gone.

    Examples:
        treekeeper clean ./build
        treekeeper clean /data/scratch --dry-run
    """
    config = require_config()
    reject_protected(path, config)

    if not path.is_dir():
        print_info(f"Nothing to clean: {path} is not a directory.")
        return

    if not dry_run and not yes:
        confirmed = typer.confirm(f"Delete {path} and everything in it?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = ForceOperator(dry_run=dry_run, deleting_suffix=config.deleting_suffix)
    failures = RecursiveCleaner(operator).clean(path)

    if dry_run:
        print_info(f"Dry run: {path} would be deleted.")
        return

    if failures:
        print_warning(
            f"{failures} entries could not be removed from {path} "
            f"(files left as '*{config.deleting_suffix}')."
        )
        raise typer.Exit(code=1)

    print_success(f"Deleted {path}.")
