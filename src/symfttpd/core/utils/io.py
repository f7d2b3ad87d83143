"""File I/O primitives shared by the writer, the supervisor and the CLI.

Everything that another process may read concurrently goes through one of:
- ``atomic_write``: temp file in the same directory + fsync + ``os.replace``
- ``touch_file`` / ``remove_file``: single-syscall create/delete

so a concurrent reader never observes a half-written file.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: PathLike, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def atomic_write(
    path: PathLike,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, unlocked, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Never fail callers on temp removal
                pass


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(Path(path), _writer)


def touch_file(path: PathLike) -> None:
    """Create an empty file at ``path`` (no-op when it already exists)."""
    path = Path(path)
    ensure_parent_dir(path)
    fd = os.open(str(path), os.O_CREAT | os.O_WRONLY, 0o644)
    os.close(fd)


def remove_file(path: PathLike) -> bool:
    """Delete ``path`` if present.

    Returns True when a file was removed, False when it was already gone.
    """
    try:
        os.unlink(str(path))
        return True
    except FileNotFoundError:
        return False


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "write_text",
    "touch_file",
    "remove_file",
]
