"""Retention pruning of subdirectories.

Keeps the most recently modified subdirectories of a directory and
removes the rest with the recursive cleaner, oldest first. Each
removal is independent: one failure never stops the others.
"""

import logging
import os

from treekeeper.filesystem.base import StrPath
from treekeeper.filesystem.cleaner import RecursiveCleaner
from treekeeper.filesystem.listing import get_mtime, list_subdirectories, sort_key
from treekeeper.filesystem.models import EntryResult, RetentionResult

logger = logging.getLogger(__name__)


class RetentionPruner:
    """Removes the oldest subdirectories of a directory.

    Args:
        cleaner: Cleaner used to remove each pruned subdirectory.
            Defaults to a RecursiveCleaner with a ForceOperator.
    """

    def __init__(self, cleaner: RecursiveCleaner | None = None) -> None:
        self._cleaner = cleaner if cleaner is not None else RecursiveCleaner()

    def prune(self, directory: StrPath, keep_count: int) -> RetentionResult:
        """Remove all but the ``keep_count`` newest subdirectories.

        Subdirectories are ordered by last-modified time, ties broken by
        name. A subdirectory counts as removed only if the cleaner
        reports no failures for it. Subdirectories that vanish before
        their timestamp is read are ignored.

        Args:
            directory: Directory whose immediate subdirectories are pruned.
            keep_count: Number of newest subdirectories to keep.

        Returns:
            RetentionResult describing kept and removed subdirectories.

        Raises:
            ValueError: If keep_count is negative.
            OSError: If the directory exists but cannot be listed.
        """
        if keep_count < 0:
            msg = f"keep_count must be >= 0, got {keep_count}"
            raise ValueError(msg)

        path = os.fspath(directory)
        if not os.path.isdir(path):
            return RetentionResult(path=path)

        try:
            subdirectories = list_subdirectories(path)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Directory vanished before pruning: %s", path)
            return RetentionResult(path=path)

        dated: list[tuple[int, tuple[str, str], str]] = []
        for subdirectory in subdirectories:
            try:
                mtime = get_mtime(subdirectory)
            except FileNotFoundError:
                logger.debug("Subdirectory vanished before pruning: %s", subdirectory)
                continue
            dated.append((mtime, sort_key(os.path.basename(subdirectory)), subdirectory))

        dated.sort()
        excess = max(len(dated) - keep_count, 0)
        expired = [entry[2] for entry in dated[:excess]]
        kept = tuple(entry[2] for entry in reversed(dated[excess:]))

        dry_run = self._cleaner.operator.dry_run
        results: list[EntryResult] = []
        for subdirectory in expired:
            failures = self._cleaner.clean(subdirectory)
            if failures == 0:
                results.append(EntryResult(path=subdirectory, success=True, dry_run=dry_run))
            else:
                logger.warning("Could not prune %s: %d failure(s)", subdirectory, failures)
                results.append(
                    EntryResult(
                        path=subdirectory,
                        success=False,
                        error=f"{failures} entries could not be removed",
                        dry_run=dry_run,
                    )
                )

        return RetentionResult(path=path, kept=kept, results=tuple(results))

    def delete_oldest(self, directory: StrPath, keep_count: int) -> bool:
        """Remove all but the ``keep_count`` newest subdirectories.

        Args:
            directory: Directory whose immediate subdirectories are pruned.
            keep_count: Number of newest subdirectories to keep.

        Returns:
            True if there were no errors removing subdirectories.
        """
        return self.prune(directory, keep_count).success


def delete_oldest(directory: StrPath, keep_count: int, cleaner: RecursiveCleaner | None = None) -> bool:
    """Remove all but the ``keep_count`` newest subdirectories of a directory.

    Convenience wrapper around :meth:`RetentionPruner.delete_oldest`.
    """
    return RetentionPruner(cleaner).delete_oldest(directory, keep_count)
