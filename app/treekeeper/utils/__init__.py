"""Utility modules for treekeeper.

This module exports commonly used utility functions.
"""

from treekeeper.utils.formatting import (
    console,
    create_results_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_results_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
