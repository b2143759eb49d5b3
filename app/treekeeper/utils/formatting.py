"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from treekeeper.filesystem.models import EntryResult

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "removed": "#f53263",
        "kept": "#69B9A1",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_results_table(results: list[EntryResult], title: str = "Results") -> Table:
    """Create a Rich table displaying per-entry results.

    Successful results show "OK" (or "DRY" for dry-run) status; failed
    results show "FAIL" with the error message.

    Args:
        results: List of entry results to display.
        title: Table title.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Message", style="muted")

    for result in results:
        if not result.success:
            status = "[error]FAIL[/]"
        elif result.dry_run:
            status = "[info]DRY[/]"
        else:
            status = "[success]OK[/]"
        table.add_row(status, result.path, result.error or "")

    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
