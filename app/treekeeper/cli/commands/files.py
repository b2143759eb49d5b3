"""Files command for ordered file enumeration.

This module provides the `treekeeper files` command, which streams the
files of a directory tree in a stable order without listing the whole
tree up front.
"""

import json
from itertools import islice
from pathlib import Path
from typing import Annotated

import typer

from treekeeper.cli.types import OutputFormat, require_config
from treekeeper.filesystem.enumerator import OrderedTreeEnumerator
from treekeeper.filesystem.listing import get_relative_path
from treekeeper.utils.formatting import print_error, print_warning


def files(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to enumerate."),
    ],
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Wildcard for file names (default from config, usually '*').",
        ),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Descend into subdirectories."),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=1, help="Stop after this many files."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format (json emits one object per line).",
            case_sensitive=False,
        ),
    ] = OutputFormat.PLAIN,
) -> None:
    """List files in a stable, case-insensitive order.

    Files of a directory come first, then each subdirectory in turn.
    Unreadable directories are reported and skipped.

    Examples:
        treekeeper files ./logs -p '*.log'
        treekeeper files /data -r --limit 100
        treekeeper files /data -r --format json
    """
    config = require_config()

    if not path.is_dir():
        print_error(f"Not a directory: {path}")
        raise typer.Exit(code=1)

    def _report(error: OSError) -> None:
        print_warning(f"Skipping unreadable directory {error.filename}: {error.strerror}")

    enumerator = OrderedTreeEnumerator(on_error=_report)
    paths = enumerator.iter_files(path, pattern or config.default_pattern, recursive)
    base = str(path)

    for file_path in islice(paths, limit):
        if output_format == OutputFormat.JSON:
            record = {"path": file_path, "relative": get_relative_path(file_path, base)}
            typer.echo(json.dumps(record))
        else:
            typer.echo(file_path)
