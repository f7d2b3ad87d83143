from __future__ import annotations

from .io import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    remove_file,
    touch_file,
    write_text,
)

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "remove_file",
    "touch_file",
    "write_text",
]
