"""Main CLI application entry point.

Defines the Typer application, global options, and logging setup.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from treekeeper import __version__
from treekeeper.cli.commands import clean, config, copy, files, prune
from treekeeper.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="treekeeper",
    help="Resilient, order-deterministic directory tree utilities.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"treekeeper version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route treekeeper log records to the stderr console.

    Args:
        verbose: Log everything down to DEBUG.
        quiet: Log errors only.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger("treekeeper")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """treekeeper - resilient directory tree utilities.

    Clean trees that contain locked files, enumerate huge trees in a
    stable order, copy directories, and prune old subdirectories.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="clean")(clean.clean)
app.command(name="files")(files.files)
app.command(name="copy")(copy.copy)
app.command(name="prune")(prune.prune)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
