"""Filesystem result models.

Immutable records describing the outcome of tree operations that act
on several entries, such as retention pruning.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EntryResult:
    """Result of removing a single directory entry.

    Attributes:
        path: Path that was operated on.
        success: Whether the entry was fully removed.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class RetentionResult:
    """Outcome of pruning the subdirectories of one directory.

    Attributes:
        path: Directory whose subdirectories were pruned.
        kept: Subdirectories that were retained, newest first.
        results: One EntryResult per subdirectory selected for removal,
            oldest first.
    """

    path: str
    kept: tuple[str, ...] = ()
    results: tuple[EntryResult, ...] = ()

    @property
    def removed(self) -> tuple[str, ...]:
        """Paths that were removed."""
        return tuple(r.path for r in self.results if r.success)

    @property
    def failed(self) -> tuple[str, ...]:
        """Paths that could not be removed."""
        return tuple(r.path for r in self.results if not r.success)

    @property
    def success(self) -> bool:
        """True if every selected subdirectory was removed."""
        return not self.failed
