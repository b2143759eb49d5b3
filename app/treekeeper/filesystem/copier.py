"""Directory copy built on the entry operator.

Copies a directory one level or recursively. The target does not
need to exist. Files are copied in sorted order with the operator's
``force_copy``; errors propagate to the caller.
"""

import logging
import os

from treekeeper.filesystem.base import EntryOperator, StrPath
from treekeeper.filesystem.listing import scan_directory
from treekeeper.filesystem.operator import ForceOperator

logger = logging.getLogger(__name__)


def copy_directory(
    source: StrPath,
    target: StrPath,
    recursive: bool = True,
    operator: EntryOperator | None = None,
) -> int:
    """Copy the files of a directory into another directory.

    Args:
        source: Directory to copy from.
        target: Directory to copy into. Created, with parents, if missing.
        recursive: If True, copy subdirectories as well.
        operator: Entry operator used for single-file copies.
            Defaults to a ForceOperator.

    Returns:
        Number of files copied.

    Raises:
        OSError: If the source cannot be listed or a file cannot be copied.
    """
    operator = operator if operator is not None else ForceOperator()
    return _copy(os.fspath(source), os.fspath(target), recursive, operator)


def _copy(source: str, target: str, recursive: bool, operator: EntryOperator) -> int:
    listing = scan_directory(source)

    if not operator.dry_run:
        os.makedirs(target, exist_ok=True)

    copied = 0
    for name in listing.files:
        operator.force_copy(os.path.join(source, name), os.path.join(target, name))
        copied += 1

    if recursive:
        for name in listing.subdirectories:
            copied += _copy(
                os.path.join(source, name),
                os.path.join(target, name),
                recursive,
                operator,
            )

    logger.debug("Copied %d file(s) from %s to %s", copied, source, target)
    return copied
