"""Configuration commands.

Provides commands to show, initialise, and locate the treekeeper
configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from treekeeper.cli.types import require_config
from treekeeper.core.config import ConfigError, TreekeeperConfig, save_config
from treekeeper.core.paths import ensure_config_dir, get_config_path
from treekeeper.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and manage configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration as TOML."""
    config = require_config()
    if not get_config_path().exists():
        print_info("No config file found, showing defaults.")
    console.print(tomli_w.dumps(config.model_dump()), markup=False, highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        save_config(TreekeeperConfig(), config_path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {config_path}")


@app.command()
def path() -> None:
    """Print the config file path."""
    typer.echo(str(get_config_path()))
