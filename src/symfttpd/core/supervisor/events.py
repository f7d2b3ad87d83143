from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

SNAPSHOT_CHANGED = "snapshot_changed"
RESTART_TRIGGERED = "restart_triggered"
SERVER_RESTARTING = "server_restarting"
SERVER_TERMINATED = "server_terminated"
REGENERATION_FAILED = "regeneration_failed"

EVENTS = (
    SNAPSHOT_CHANGED,
    RESTART_TRIGGERED,
    SERVER_RESTARTING,
    SERVER_TERMINATED,
    REGENERATION_FAILED,
)

Callback = Callable[..., Any]


class SupervisorEvents:
    """Explicit callback registry for the supervisor extension points.

    Payloads (keyword arguments):
        snapshot_changed: snapshot
        restart_triggered: killed
        server_restarting: (none)
        server_terminated: exit_code
        regeneration_failed: error
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, list[Callback]] = {name: [] for name in EVENTS}

    def on(self, event: str, callback: Callback) -> Callback:
        if event not in self._callbacks:
            raise ValueError(f"Unknown supervisor event: {event}")
        self._callbacks[event].append(callback)
        return callback

    def on_snapshot_changed(self, callback: Callback) -> Callback:
        return self.on(SNAPSHOT_CHANGED, callback)

    def on_restart_triggered(self, callback: Callback) -> Callback:
        return self.on(RESTART_TRIGGERED, callback)

    def on_server_restarting(self, callback: Callback) -> Callback:
        return self.on(SERVER_RESTARTING, callback)

    def on_server_terminated(self, callback: Callback) -> Callback:
        return self.on(SERVER_TERMINATED, callback)

    def on_regeneration_failed(self, callback: Callback) -> Callback:
        return self.on(REGENERATION_FAILED, callback)

    def emit(self, event: str, **payload: Any) -> None:
        for callback in list(self._callbacks.get(event, ())):
            try:
                callback(**payload)
            except Exception:
                # A broken listener must not stop supervision.
                logger.exception("supervisor callback for %s failed", event)


__all__ = [
    "EVENTS",
    "REGENERATION_FAILED",
    "RESTART_TRIGGERED",
    "SERVER_RESTARTING",
    "SERVER_TERMINATED",
    "SNAPSHOT_CHANGED",
    "SupervisorEvents",
]
