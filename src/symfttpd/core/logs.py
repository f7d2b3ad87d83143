"""Process-wide logging setup for the symfttpd CLI.

Supervisor diagnostics go to a log file so they never interleave with the
lighttpd output and tailed log lines on the terminal; ``--verbose`` adds a
stderr handler on top.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from symfttpd.core.utils.io import ensure_directory

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_LOG_PATH: str | None = None
_FILE_HANDLER: logging.Handler | None = None
_STDERR_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, log_path: Path, level: str = "INFO", verbose: bool = False) -> None:
    """Send stdlib logging to ``log_path``; add stderr output when ``verbose``.

    Idempotent per-process: calling again with the same file only updates
    the level and the stderr handler.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER, _STDERR_HANDLER

    resolved = str(Path(log_path).resolve())
    root = logging.getLogger()
    file_level = _level_from_name(level)
    root.setLevel(logging.DEBUG if verbose else file_level)

    if _CONFIGURED_LOG_PATH != resolved or _FILE_HANDLER is None:
        ensure_directory(Path(resolved).parent)
        if _FILE_HANDLER is not None:
            root.removeHandler(_FILE_HANDLER)
            _FILE_HANDLER.close()
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
        _FILE_HANDLER = fh
        _CONFIGURED_LOG_PATH = resolved
    _FILE_HANDLER.setLevel(file_level)

    if verbose and _STDERR_HANDLER is None:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(sh)
        _STDERR_HANDLER = sh
    elif not verbose and _STDERR_HANDLER is not None:
        root.removeHandler(_STDERR_HANDLER)
        _STDERR_HANDLER = None


def reset_logging_for_tests() -> None:
    """Test-only: drop the handlers installed by ``configure_logging``."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER, _STDERR_HANDLER
    root = logging.getLogger()
    for handler in (_FILE_HANDLER, _STDERR_HANDLER):
        if handler is None:
            continue
        root.removeHandler(handler)
        handler.close()
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None
    _STDERR_HANDLER = None


__all__ = ["LOG_FORMAT", "configure_logging", "reset_logging_for_tests"]
