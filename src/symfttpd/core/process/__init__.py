from __future__ import annotations

from .pidfile import is_process_alive, kill_by_pid_file, read_pid_file

__all__ = ["is_process_alive", "kill_by_pid_file", "read_pid_file"]
