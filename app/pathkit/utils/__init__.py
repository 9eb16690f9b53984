"""Utility modules for pathkit.

This module exports commonly used output helpers.
"""

from pathkit.utils.formatting import (
    console,
    create_entry_table,
    err_console,
    format_entry_name,
    format_perms,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_entry_table",
    "err_console",
    "format_entry_name",
    "format_perms",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
