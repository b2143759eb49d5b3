"""Directory listing primitives.

Every tree-level operation lists directories through this module, so
sibling order is the same everywhere: names are compared
case-insensitively with the exact name as tie-breaker. Listings are
always read fully and the underlying scandir handle closed before
returning.
"""

import os
from dataclasses import dataclass

from treekeeper.filesystem.base import StrPath


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """Sorted names of the immediate entries of one directory.

    Attributes:
        files: Names of regular files, including symlinks to regular files.
        others: Names of remaining non-directory entries (symlinks to
            directories, dead symlinks, sockets, FIFOs).
        subdirectories: Names of real subdirectories (never symlinks).
    """

    files: tuple[str, ...]
    others: tuple[str, ...]
    subdirectories: tuple[str, ...]

    @property
    def non_directories(self) -> tuple[str, ...]:
        """Names of every entry that is not a real directory, sorted."""
        return tuple(sorted(self.files + self.others, key=sort_key))


def sort_key(name: str) -> tuple[str, str]:
    """Collation key for sibling entries.

    Args:
        name: Entry name (or path; only siblings are ever compared).

    Returns:
        Key ordering names case-insensitively, ties broken by exact name.
    """
    return (name.casefold(), name)


def scan_directory(path: StrPath) -> DirectoryListing:
    """List the immediate entries of a directory in one pass.

    Args:
        path: Directory to list.

    Returns:
        DirectoryListing with sorted file and subdirectory names.

    Raises:
        OSError: If the directory cannot be listed.
    """
    files: list[str] = []
    others: list[str] = []
    subdirectories: list[str] = []
    with os.scandir(path) as entries:
        for entry in entries:
            if _is_real_dir(entry):
                subdirectories.append(entry.name)
            elif _is_file(entry):
                files.append(entry.name)
            else:
                others.append(entry.name)
    files.sort(key=sort_key)
    others.sort(key=sort_key)
    subdirectories.sort(key=sort_key)
    return DirectoryListing(
        files=tuple(files),
        others=tuple(others),
        subdirectories=tuple(subdirectories),
    )


def list_files(path: StrPath) -> list[str]:
    """List full paths of the regular files of a directory.

    Raises:
        OSError: If the directory cannot be listed.
    """
    directory = os.fspath(path)
    return [os.path.join(directory, name) for name in scan_directory(directory).files]


def list_subdirectories(path: StrPath) -> list[str]:
    """List full paths of the real subdirectories of a directory.

    Raises:
        OSError: If the directory cannot be listed.
    """
    directory = os.fspath(path)
    return [os.path.join(directory, name) for name in scan_directory(directory).subdirectories]


def get_mtime(path: StrPath) -> int:
    """Get the last-modified time of an entry in nanoseconds.

    Raises:
        OSError: If the entry cannot be stat'ed.
    """
    return os.stat(path).st_mtime_ns


def get_relative_path(full_path: str, base: str) -> str:
    """Strip a base directory prefix from a path.

    Leading separators left over after the prefix are removed too, so
    both ``/data`` and ``/data/`` turn ``/data/a/b.txt`` into ``a/b.txt``.

    Args:
        full_path: Path that starts with ``base``.
        base: Directory prefix to strip. An empty base returns ``full_path``.

    Returns:
        The path relative to ``base``.

    Raises:
        ValueError: If ``base`` is not a prefix of ``full_path``.
    """
    if not base:
        return full_path
    if not full_path.startswith(base):
        msg = f"Directory {base!r} is not a prefix of {full_path!r}"
        raise ValueError(msg)

    separators = {os.sep, "/"}
    if os.altsep:
        separators.add(os.altsep)

    end = len(base)
    while end < len(full_path) and full_path[end] in separators:
        end += 1
    return full_path[end:]


def _is_real_dir(entry: os.DirEntry[str]) -> bool:
    """Check whether a scandir entry is a directory and not a symlink."""
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _is_file(entry: os.DirEntry[str]) -> bool:
    """Check whether a scandir entry is, or links to, a regular file."""
    try:
        return entry.is_file()
    except OSError:
        return False
