"""PID file helpers for the server process.

lighttpd writes its own PID file (``server.pid-file``) and removes it on a
clean exit; symfttpd only ever reads it. Killing is best-effort: a missing
file, unreadable content or a dead PID all mean "already stopped".
"""
from __future__ import annotations

import logging
import os
import signal
from pathlib import Path
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


def read_pid_file(pid_file: Path) -> Optional[int]:
    """Return the PID stored in ``pid_file``, or None when absent or invalid."""
    try:
        text = Path(pid_file).read_text(encoding="utf-8", errors="ignore").strip()
    except OSError:
        return None
    if not text:
        return None
    try:
        pid = int(text.split()[0])
    except ValueError:
        return None
    return pid if pid > 0 else None


def is_process_alive(pid: int) -> bool:
    """Check if a process is alive (zombies count as dead)."""
    if pid <= 0:
        return False
    try:
        proc = psutil.Process(pid)
        return proc.status() != psutil.STATUS_ZOMBIE
    except (psutil.NoSuchProcess, psutil.ZombieProcess):
        return False
    except psutil.AccessDenied:
        # Process exists but belongs to someone else
        return True


def kill_by_pid_file(pid_file: Path, sig: int = signal.SIGTERM) -> bool:
    """Send ``sig`` to the process named in ``pid_file``.

    Returns:
        bool: True if a live process was found and signalled
    """
    pid = read_pid_file(pid_file)
    if pid is None:
        logger.debug("no usable pid in %s", pid_file)
        return False
    if pid == os.getpid():
        logger.warning("refusing to signal own process from %s", pid_file)
        return False
    if not is_process_alive(pid):
        logger.debug("pid %s from %s is not running", pid, pid_file)
        return False

    try:
        psutil.Process(pid).send_signal(sig)
    except (psutil.NoSuchProcess, psutil.ZombieProcess):
        return False
    except psutil.AccessDenied:
        logger.warning("not allowed to signal pid %s from %s", pid, pid_file)
        return False

    logger.info("sent signal %s to pid %s", int(sig), pid)
    return True


__all__ = ["read_pid_file", "is_process_alive", "kill_by_pid_file"]
