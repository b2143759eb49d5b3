"""Protected filesystem paths that must never be cleaned or pruned.

The command-line interface refuses to run destructive commands
against these targets. Library calls are not restricted.
"""

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    # Roots
    "/",
    "~",
    # Home essentials
    "~/.ssh",
    "~/.gnupg",
    "~/.config",
    "~/.local",
    "~/.local/share",
    "~/Desktop",
    "~/Documents",
    # System trees
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/lib64",
    "/opt",
    "/proc",
    "/root",
    "/sbin",
    "/srv",
    "/sys",
    "/tmp",
    "/usr",
    "/usr/*",
    "/var",
    "/var/lib",
]


def is_protected_path(path: str | os.PathLike[str], extra_patterns: Iterable[str] = ()) -> bool:
    """Check if a path is protected from cleaning and pruning.

    The path is made absolute and normalised before matching, so ``~/``
    and ``/home/user/./`` both match ``~``. Its resolved form is checked
    too, so a symlink pointing at a protected directory is protected.

    Args:
        path: Filesystem path to check.
        extra_patterns: Additional glob patterns, e.g. from the user config.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())
    expanded_path = os.path.expanduser(os.fspath(path))
    candidates = {
        os.path.normpath(os.path.abspath(expanded_path)),
        os.path.realpath(expanded_path),
    }

    for pattern in (*PROTECTED_PATH_PATTERNS, *extra_patterns):
        expanded = home + pattern[1:] if pattern.startswith("~") else pattern
        normalised = os.path.normpath(expanded)

        if any(fnmatch.fnmatchcase(candidate, normalised) for candidate in candidates):
            return True

    return False
