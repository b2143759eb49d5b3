"""Prune command for retention-based cleanup.

This module provides the `treekeeper prune` command, which keeps the
most recently modified subdirectories of a directory and removes the
rest.
"""

from pathlib import Path
from typing import Annotated

import typer

from treekeeper.cli.types import reject_protected, require_config
from treekeeper.filesystem.cleaner import RecursiveCleaner
from treekeeper.filesystem.operator import ForceOperator
from treekeeper.filesystem.retention import RetentionPruner
from treekeeper.utils.formatting import (
    console,
    create_results_table,
    print_error,
    print_info,
    print_success,
)


def prune(
    path: Annotated[
        Path,
        typer.Argument(help="Directory whose subdirectories are pruned."),
    ],
    keep: Annotated[
        int | None,
        typer.Option(
            "--keep",
            "-k",
            min=0,
            help="Number of newest subdirectories to keep (default from config).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Keep the newest subdirectories and remove the rest.

    Subdirectories are ranked by last-modified time. Removal uses the
    same resilient deletion as 'treekeeper clean'.

    Examples:
        treekeeper prune ~/backups --keep 3
        treekeeper prune /var/builds -k 10 --dry-run
    """
    config = require_config()
    reject_protected(path, config)
    keep_count = config.retention_keep if keep is None else keep

    if not path.is_dir():
        print_info(f"Nothing to prune: {path} is not a directory.")
        return

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"Remove all but the {keep_count} newest subdirectories of {path}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = ForceOperator(dry_run=dry_run, deleting_suffix=config.deleting_suffix)
    pruner = RetentionPruner(RecursiveCleaner(operator))
    try:
        result = pruner.prune(path, keep_count)
    except OSError as e:
        print_error(f"Cannot prune {path}: {e}")
        raise typer.Exit(code=1) from e

    if not result.results:
        print_info(f"Nothing to prune: {len(result.kept)} subdirectories, keeping {keep_count}.")
        return

    title = "Pruned Subdirectories (Dry Run)" if dry_run else "Pruned Subdirectories"
    console.print(create_results_table(list(result.results), title=title))
    console.print(f"[muted]Kept {len(result.kept)} newest subdirectories.[/]")

    if not result.success:
        print_error(f"{len(result.failed)} subdirectories could not be removed.")
        raise typer.Exit(code=1)

    if not dry_run:
        print_success(f"Removed {len(result.removed)} subdirectories.")
