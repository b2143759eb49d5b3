"""Best-effort filesystem entry operator.

Deletes single entries, falling back to a pending-deletion name when
an entry cannot be removed, and copies single files over existing
destinations. Supports dry-run mode.

An entry that cannot be deleted is renamed to ``<path>.<N>.deleting``
where ``N`` is the first free index. This frees the original name
immediately and leaves the entry in a state that a later pass can
recognise and retry.
"""

import logging
import os
import shutil
import stat

from treekeeper.filesystem.base import EntryOperator, StrPath

logger = logging.getLogger(__name__)

DEFAULT_DELETING_SUFFIX = ".deleting"


class ForceOperator(EntryOperator):
    """Default entry operator backed by the local filesystem.

    Attributes:
        _dry_run: If True, report what would happen without touching the filesystem.
        _suffix: Suffix marking entries that are pending deletion.
    """

    def __init__(
        self,
        dry_run: bool = False,
        deleting_suffix: str = DEFAULT_DELETING_SUFFIX,
    ) -> None:
        """Initialize the ForceOperator.

        Args:
            dry_run: If True, report what would be done without doing it.
            deleting_suffix: Suffix for entries left pending deletion.

        Raises:
            ValueError: If the suffix does not start with '.' or contains a separator.
        """
        super().__init__(dry_run=dry_run)
        validate_deleting_suffix(deleting_suffix)
        self._suffix = deleting_suffix

    @property
    def deleting_suffix(self) -> str:
        """Suffix marking entries that are pending deletion."""
        return self._suffix

    def force_delete(self, path: StrPath) -> bool:
        """Delete a single entry, renaming it aside if it cannot be removed.

        Real directories are removed with :meth:`remove_tree`. Symlinks are
        removed as links and never followed. Entries that already carry the
        pending-deletion suffix are deleted in place.

        Args:
            path: Path of the entry to delete.

        Returns:
            True if the entry is gone, False if it was left behind.
        """
        path = os.fspath(path)
        if not os.path.lexists(path):
            return True

        if os.path.isdir(path) and not os.path.islink(path):
            try:
                self.remove_tree(path)
            except OSError as e:
                logger.debug("Cannot remove directory %s: %s", path, e)
                return False
            return True

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return True

        target = path
        leftovers: list[str] = []
        if not path.endswith(self._suffix):
            target, leftovers = self._pending_name(path)
            try:
                os.rename(path, target)
            except OSError as e:
                logger.debug("Cannot move %s aside: %s", path, e)
                target = path

        deleted = _unlink(target)
        if not deleted:
            logger.debug("Left %s pending deletion", target)

        # Older leftovers of the same entry get another chance
        for leftover in leftovers:
            _unlink(leftover)

        return deleted

    def force_copy(self, source: StrPath, destination: StrPath) -> None:
        """Copy a single file, replacing the destination if it exists.

        An existing destination is first removed with :meth:`force_delete`,
        so a locked destination is moved aside rather than blocking the copy.

        Args:
            source: File to copy.
            destination: Target file path.

        Raises:
            IsADirectoryError: If the destination is an existing directory.
            OSError: If the copy fails.
        """
        source = os.fspath(source)
        destination = os.fspath(destination)

        if os.path.isdir(destination) and not os.path.islink(destination):
            msg = f"Copy destination is a directory: {destination}"
            raise IsADirectoryError(msg)

        if self._dry_run:
            logger.info("Dry-run: would copy %s -> %s", source, destination)
            return

        if os.path.lexists(destination):
            self.force_delete(destination)

        shutil.copy2(source, destination)
        logger.debug("Copied %s -> %s", source, destination)

    def remove_tree(self, directory: StrPath) -> None:
        """Recursively remove a directory.

        Args:
            directory: Directory to remove.

        Raises:
            OSError: If the directory cannot be removed.
        """
        directory = os.fspath(directory)
        if self._dry_run:
            logger.info("Dry-run: would remove directory %s", directory)
            return

        try:
            shutil.rmtree(directory)
        except FileNotFoundError:
            # An entry vanished underneath us; retry only if the root survived
            if os.path.lexists(directory):
                shutil.rmtree(directory)

    def _pending_name(self, path: str) -> tuple[str, list[str]]:
        """Find the first free pending-deletion name for a path.

        Every existing ``<name>.<N><suffix>`` sibling is reported as a
        leftover, including those past a gap in the numbering.

        Args:
            path: Original entry path.

        Returns:
            Tuple of (free pending name, existing pending names for the same entry).
        """
        parent, name = os.path.split(path)
        prefix = f"{name}."
        try:
            siblings = os.listdir(parent or os.curdir)
        except OSError as e:
            logger.debug("Cannot list leftovers of %s: %s", path, e)
            siblings = []

        leftovers: list[str] = []
        for sibling in siblings:
            if not (sibling.startswith(prefix) and sibling.endswith(self._suffix)):
                continue
            number = sibling[len(prefix) : len(sibling) - len(self._suffix)]
            if number.isascii() and number.isdigit():
                leftovers.append(os.path.join(parent, sibling))
        leftovers.sort()

        index = 0
        while True:
            candidate = f"{path}.{index}{self._suffix}"
            if not os.path.lexists(candidate):
                return candidate, leftovers
            index += 1


def validate_deleting_suffix(suffix: str) -> str:
    """Check that a pending-deletion suffix is usable as a file name suffix.

    Args:
        suffix: Suffix to validate (e.g., ".deleting").

    Returns:
        The suffix, unchanged.

    Raises:
        ValueError: If the suffix is invalid.
    """
    if len(suffix) < 2 or not suffix.startswith("."):
        msg = f"Deleting suffix must start with '.' and name something, got {suffix!r}"
        raise ValueError(msg)
    if "/" in suffix or os.sep in suffix:
        msg = f"Deleting suffix cannot contain a path separator, got {suffix!r}"
        raise ValueError(msg)
    return suffix


def _unlink(path: str) -> bool:
    """Unlink a non-directory entry, clearing a read-only mode if needed.

    Args:
        path: Entry to unlink.

    Returns:
        True if the entry is gone, False otherwise.
    """
    try:
        os.unlink(path)
        return True
    except FileNotFoundError:
        return True
    except PermissionError:
        if os.path.islink(path):
            return False
        try:
            os.chmod(path, stat.S_IREAD | stat.S_IWRITE)
            os.unlink(path)
            return True
        except OSError as e:
            logger.debug("Cannot delete %s: %s", path, e)
            return False
    except OSError as e:
        logger.debug("Cannot delete %s: %s", path, e)
        return False
