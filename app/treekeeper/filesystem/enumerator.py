"""Lazy, deterministically ordered file enumeration.

Yields the files of a directory tree depth-first: the matching files
of a directory first, then each subdirectory in turn. Nothing is
listed until the consumer pulls the first path, and only one listing
per depth level is held at any time, so enumerating very large trees
needs memory proportional to their depth rather than their size.
"""

import fnmatch
import logging
import os
from collections.abc import Callable, Iterator

from treekeeper.filesystem.base import StrPath
from treekeeper.filesystem.listing import scan_directory

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[OSError], None]


class OrderedTreeEnumerator:
    """Enumerates files of a directory tree in a stable order.

    Files and subdirectories are both ordered case-insensitively, ties
    broken by exact name. Symlinks to files are yielded as files;
    symlinks to directories are neither yielded nor followed.

    A directory that disappears before it is listed contributes nothing.
    Any other listing error is passed to ``on_error``, which may re-raise
    to abort the traversal; without a handler the error is logged and
    that branch is skipped.

    Args:
        on_error: Optional callback receiving listing errors.
    """

    def __init__(self, on_error: ErrorHandler | None = None) -> None:
        self._on_error = on_error

    def iter_files(
        self,
        directory: StrPath,
        pattern: str = "*",
        recursive: bool = False,
    ) -> Iterator[str]:
        """Lazily yield file paths under a directory.

        Each call starts a fresh, independent traversal.

        Args:
            directory: Directory to enumerate.
            pattern: Shell-style wildcard matched case-insensitively
                against file names. Never applied to directories.
            recursive: If True, descend into subdirectories.

        Yields:
            Paths of matching files, joined onto ``directory``.
        """
        yield from self._walk(os.fspath(directory), pattern.casefold(), recursive)

    def _walk(self, directory: str, pattern: str, recursive: bool) -> Iterator[str]:
        try:
            listing = scan_directory(directory)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Directory vanished before listing: %s", directory)
            return
        except OSError as e:
            self._handle_error(e)
            return

        files = [name for name in listing.files if fnmatch.fnmatchcase(name.casefold(), pattern)]
        subdirectories = listing.subdirectories if recursive else ()
        del listing

        for name in files:
            yield os.path.join(directory, name)
        del files

        for name in subdirectories:
            yield from self._walk(os.path.join(directory, name), pattern, recursive)

    def _handle_error(self, error: OSError) -> None:
        if self._on_error is not None:
            self._on_error(error)
            return
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error)


def get_files(
    directory: StrPath,
    pattern: str = "*",
    recursive: bool = False,
    *,
    on_error: ErrorHandler | None = None,
) -> Iterator[str]:
    """Lazily yield file paths under a directory in a stable order.

    Convenience wrapper around :meth:`OrderedTreeEnumerator.iter_files`.

    Example:
        >>> for path in get_files("/var/log", "*.log", recursive=True):
        ...     print(path)

    Args:
        directory: Directory to enumerate.
        pattern: Shell-style wildcard for file names (``*``, ``?``).
        recursive: If True, descend into subdirectories.
        on_error: Optional callback receiving listing errors.

    Returns:
        Iterator over matching file paths.
    """
    return OrderedTreeEnumerator(on_error=on_error).iter_files(directory, pattern, recursive)
