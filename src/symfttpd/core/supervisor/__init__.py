"""Restart-on-change supervision of a foreground web server.

Two roles cooperate only through files in the cache directory:

- the worker runs the server (blocking) and restarts it while a restart
  marker is present when the server exits;
- the watcher rebuilds the configuration every interval and, when it
  changed, creates the marker and kills the server through its PID file.
"""
from __future__ import annotations

from .events import SupervisorEvents
from .marker import RestartMarker
from .supervisor import ConfigWatcher, RestartSupervisor, ServerWorker, SupervisorState

__all__ = [
    "ConfigWatcher",
    "RestartMarker",
    "RestartSupervisor",
    "ServerWorker",
    "SupervisorEvents",
    "SupervisorState",
]
