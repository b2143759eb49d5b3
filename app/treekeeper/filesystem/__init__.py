"""Directory tree operations.

This module provides resilient recursive deletion, lazy ordered file
enumeration, directory copy and retention pruning, all built on the
listing primitives and the injectable entry operator.
"""

from treekeeper.filesystem.base import EntryOperator
from treekeeper.filesystem.cleaner import RecursiveCleaner, clean
from treekeeper.filesystem.copier import copy_directory
from treekeeper.filesystem.enumerator import OrderedTreeEnumerator, get_files
from treekeeper.filesystem.listing import (
    DirectoryListing,
    get_mtime,
    get_relative_path,
    list_files,
    list_subdirectories,
    scan_directory,
    sort_key,
)
from treekeeper.filesystem.models import EntryResult, RetentionResult
from treekeeper.filesystem.operator import DEFAULT_DELETING_SUFFIX, ForceOperator
from treekeeper.filesystem.protected import PROTECTED_PATH_PATTERNS, is_protected_path
from treekeeper.filesystem.retention import RetentionPruner, delete_oldest

__all__ = [
    "DEFAULT_DELETING_SUFFIX",
    "PROTECTED_PATH_PATTERNS",
    "DirectoryListing",
    "EntryOperator",
    "EntryResult",
    "ForceOperator",
    "OrderedTreeEnumerator",
    "RecursiveCleaner",
    "RetentionPruner",
    "RetentionResult",
    "clean",
    "copy_directory",
    "delete_oldest",
    "get_files",
    "get_mtime",
    "get_relative_path",
    "is_protected_path",
    "list_files",
    "list_subdirectories",
    "scan_directory",
    "sort_key",
]
