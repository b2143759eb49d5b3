"""Abstract base class for filesystem entry operators.

This module defines the EntryOperator interface: the delete, copy and
tree-removal primitives that the cleaner, copier and retention pruner
are built on. Keeping them behind an interface lets callers inject a
fault-injecting operator in tests.
"""

import os
from abc import ABC, abstractmethod

StrPath = str | os.PathLike[str]


class EntryOperator(ABC):
    """Abstract base class for all entry operators.

    Operators perform single-entry filesystem mutations on behalf of the
    tree-level algorithms. ``force_delete`` reports failure through its
    return value and never raises for ordinary filesystem errors;
    ``force_copy`` and ``remove_tree`` raise ``OSError`` on failure.

    Attributes:
        dry_run: If True, only simulate mutations without executing them.

    Example:
        >>> operator = ForceOperator(dry_run=True)
        >>> operator.force_delete("/tmp/build/output.log")
        True
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate mutations without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def force_delete(self, path: StrPath) -> bool:
        """Delete a single entry, renaming it aside if it cannot be removed.

        Args:
            path: Path of the file (or directory) to delete.

        Returns:
            True if the entry no longer exists, False if it was left behind.
        """

    @abstractmethod
    def force_copy(self, source: StrPath, destination: StrPath) -> None:
        """Copy a single file, replacing the destination if it exists.

        Args:
            source: File to copy.
            destination: Target file path.

        Raises:
            OSError: If the copy fails.
        """

    @abstractmethod
    def remove_tree(self, directory: StrPath) -> None:
        """Recursively remove a directory.

        A directory that no longer exists is not an error.

        Args:
            directory: Directory to remove.

        Raises:
            OSError: If the directory cannot be removed.
        """
