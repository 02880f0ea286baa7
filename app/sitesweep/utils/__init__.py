"""Utility modules for sitesweep.

This module exports commonly used utility functions.
"""

from sitesweep.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
