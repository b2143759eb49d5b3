"""Resilient recursive directory deletion.

The cleaner removes a directory tree bottom-up. Files that cannot be
deleted are left under a pending-deletion name by the entry operator
and counted; a directory is only removed once everything beneath it
is gone. The result is a failure count rather than an exception, so
callers decide whether a nonzero count warrants a retry.
"""

import logging
import os

from treekeeper.filesystem.base import EntryOperator, StrPath
from treekeeper.filesystem.listing import scan_directory
from treekeeper.filesystem.operator import ForceOperator

logger = logging.getLogger(__name__)


class RecursiveCleaner:
    """Deletes directory trees, tolerating failures on individual entries.

    Args:
        operator: Entry operator used for file deletion and the final
            directory removal. Defaults to a ForceOperator.
    """

    def __init__(self, operator: EntryOperator | None = None) -> None:
        self._operator = operator if operator is not None else ForceOperator()

    @property
    def operator(self) -> EntryOperator:
        """Entry operator used by this cleaner."""
        return self._operator

    def clean(self, directory: StrPath) -> int:
        """Delete a directory tree as far as possible.

        Every file is handed to the operator's ``force_delete``; every
        subdirectory is cleaned recursively. A directory whose subtree
        came out clean is removed itself. A directory with anything left
        beneath it is kept and counted once more, so a nonzero count
        always reaches the top.

        A symlink to a directory is unlinked, never followed, so its
        target is untouched.

        Args:
            directory: Directory to delete. A missing directory is already clean.

        Returns:
            Number of entries (files and directories) that could not be removed.
        """
        failures = self._clean(os.fspath(directory))
        logger.info("Cleaned %s: %d failure(s)", directory, failures)
        return failures

    def _clean(self, directory: str) -> int:
        # A link to a directory is removed as a link, never emptied through
        if os.path.islink(directory) and os.path.isdir(directory):
            return 0 if self._operator.force_delete(directory) else 1
        if not os.path.isdir(directory):
            return 0

        try:
            names = scan_directory(directory).non_directories
        except (FileNotFoundError, NotADirectoryError):
            return 0
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            # One for the unreadable listing, one for the directory left behind
            return 2

        failures = 0
        for name in names:
            path = os.path.join(directory, name)
            if not self._operator.force_delete(path):
                logger.debug("Could not delete %s", path)
                failures += 1

        # Listed again: the filesystem is the source of truth
        try:
            subdirectories = scan_directory(directory).subdirectories
        except (FileNotFoundError, NotADirectoryError):
            subdirectories = ()
        except OSError as e:
            logger.warning("Cannot list subdirectories of %s: %s", directory, e)
            subdirectories = ()
            failures += 1

        for name in subdirectories:
            failures += self._clean(os.path.join(directory, name))

        if failures == 0:
            try:
                self._operator.remove_tree(directory)
            except OSError as e:
                logger.warning("Could not remove directory %s: %s", directory, e)
                failures += 1
        else:
            failures += 1

        return failures


def clean(directory: StrPath, operator: EntryOperator | None = None) -> int:
    """Delete a directory tree as far as possible.

    Convenience wrapper around :meth:`RecursiveCleaner.clean`.

    Args:
        directory: Directory to delete.
        operator: Entry operator to use. Defaults to a ForceOperator.

    Returns:
        Number of entries that could not be removed.
    """
    return RecursiveCleaner(operator).clean(directory)
