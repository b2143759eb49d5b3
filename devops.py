"""DevOps tasks for treekeeper.

Usage: uv run devops.py <task>
Tasks: fmt, test, clean
"""

import subprocess
import sys
from pathlib import Path

ARTIFACTS = (".pytest_cache", ".ruff_cache", "build", "dist")


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of shell commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run(
        [
            ["echo", "🎨 [Native Task] Formatting with Ruff...\n"],
            ["ruff", "format", "."],
            ["ruff", "check", "--fix", "."],
        ]
    )


def test() -> None:
    """Run tests with PyTest."""
    _run(
        [
            ["echo", "🧪 [Native Task] Testing with PyTest...\n"],
            ["uv", "run", "pytest", "-q"],
        ]
    )


def clean() -> None:
    """Remove caches and build artifacts with the treekeeper CLI."""
    root = Path(__file__).parent
    targets = [root / name for name in ARTIFACTS]
    targets += [p for p in root.rglob("__pycache__") if p.is_dir()]

    _run(
        [
            ["echo", "🧹 [Native Task] Cleaning the Project...\n"],
            *(
                ["uv", "run", "treekeeper", "clean", str(target), "--yes"]
                for target in targets
                if target.is_dir()
            ),
            ["echo", "\n🟢 Caches & Artifacts → ✅ All fresh now"],
        ]
    )


TASKS = {"fmt": format_code, "test": test, "clean": clean}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
