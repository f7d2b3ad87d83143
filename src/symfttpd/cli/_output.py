"""User-facing CLI output.

Diagnostics go through ``logging``; only what the user is meant to read on
the terminal is printed from here.
"""
from __future__ import annotations

import sys


def print_error(message: object) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def print_warning(message: object) -> None:
    """Print warning message to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


__all__ = ["print_error", "print_warning"]
