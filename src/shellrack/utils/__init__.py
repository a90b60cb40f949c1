"""Utility helpers for shellrack: console output and logging setup."""

from shellrack.utils.console import (
    console,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)
from shellrack.utils.logging_utils import configure_logging

__all__ = [
    "console",
    "print_error",
    "print_info",
    "print_panel",
    "print_success",
    "print_warning",
    "configure_logging",
]
