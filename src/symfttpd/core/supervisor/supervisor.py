"""Watcher/worker pair keeping lighttpd in sync with the web directory.

Ordering guarantees between the two roles:

- the worker deletes the restart marker strictly before each server start;
- the watcher creates the marker strictly before it signals the server.

So a restart request issued while the server runs is always observed by the
worker when that run ends, and a request made while the server is down is
folded into the upcoming start instead of causing a second restart.
"""
from __future__ import annotations

import enum
import logging
import threading
import time
from collections.abc import Callable
from typing import Optional

from symfttpd.core.config.writer import ConfigWriter
from symfttpd.core.project.layout import ProjectLayout
from symfttpd.core.rules.builder import RuleSnapshotBuilder
from symfttpd.core.rules.models import ConfigSnapshot, RuleSet
from symfttpd.core.server.base import Server
from symfttpd.core.server.models import ServerHandle
from symfttpd.core.tail import MultiTail
from symfttpd.exceptions import SymfttpdError

from .events import (
    REGENERATION_FAILED,
    RESTART_TRIGGERED,
    SERVER_RESTARTING,
    SERVER_TERMINATED,
    SNAPSHOT_CHANGED,
    SupervisorEvents,
)
from .marker import RestartMarker

logger = logging.getLogger(__name__)

Sleep = Callable[[float], None]


class SupervisorState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    RESTART_PENDING = "restart_pending"
    TERMINATED = "terminated"


class ServerWorker:
    """Runs the server and restarts it for as long as restarts are requested."""

    def __init__(
        self,
        server: Server,
        handle: ServerHandle,
        marker: RestartMarker,
        *,
        regenerate: Callable[[], None],
        events: Optional[SupervisorEvents] = None,
    ) -> None:
        self.server = server
        self.handle = handle
        self.marker = marker
        self.regenerate = regenerate
        self.events = events or SupervisorEvents()
        self.state = SupervisorState.IDLE
        self.starts = 0
        self.exit_code: Optional[int] = None

    def run(self) -> int:
        """Block until the server exits with no restart pending; return its exit code."""
        while True:
            self.marker.consume()

            self.state = SupervisorState.RUNNING
            self.starts += 1
            self.exit_code = self.server.start(self.handle.command, self.handle.working_dir)

            if not self.marker.exists():
                self.state = SupervisorState.TERMINATED
                logger.info("%s terminated (exit code %s)", self.server.name, self.exit_code)
                self.events.emit(SERVER_TERMINATED, exit_code=self.exit_code)
                return self.exit_code

            self.state = SupervisorState.RESTART_PENDING
            logger.info("restart requested, regenerating configuration")
            self.events.emit(SERVER_RESTARTING)
            self._regenerate()

    def _regenerate(self) -> None:
        try:
            self.regenerate()
        except (SymfttpdError, OSError) as exc:
            # Not retried: the files on disk still hold the last good
            # configuration and the server restarts on it.
            logger.warning("could not regenerate configuration, keeping the previous one: %s", exc)
            self.events.emit(REGENERATION_FAILED, error=exc)


class ConfigWatcher:
    """Rebuilds the snapshot every interval and requests a restart on change."""

    def __init__(
        self,
        builder: RuleSnapshotBuilder,
        server: Server,
        handle: ServerHandle,
        marker: RestartMarker,
        *,
        interval: float = 1.0,
        events: Optional[SupervisorEvents] = None,
        tail: Optional[MultiTail] = None,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.builder = builder
        self.server = server
        self.handle = handle
        self.marker = marker
        self.interval = float(interval)
        self.events = events or SupervisorEvents()
        self.tail = tail
        self.sleep = sleep
        self.baseline: Optional[str] = None

    def evaluate(self) -> bool:
        """Run one evaluation; return True when a restart was requested."""
        try:
            snapshot = self.builder.snapshot()
        except (SymfttpdError, OSError) as exc:
            logger.warning("could not rebuild configuration, keeping the previous one: %s", exc)
            return False

        previous, self.baseline = self.baseline, snapshot.text
        if previous is None or previous == snapshot.text:
            return False

        logger.warning("web directory changed, restarting %s", self.server.name)
        self.events.emit(SNAPSHOT_CHANGED, snapshot=snapshot)

        # Debounce: a request may have just created a file in the web root,
        # or a multi-file operation may still be in progress.
        self.sleep(self.interval)

        self.marker.create()
        killed = self.server.kill_by_pid_file(self.handle.pid_file)
        self.events.emit(RESTART_TRIGGERED, killed=killed)
        return True

    def run(self, iterations: Optional[int] = None) -> None:
        """Evaluate every interval; forever unless ``iterations`` is given."""
        count = 0
        while iterations is None or count < iterations:
            self.sleep(self.interval)
            self.evaluate()
            if self.tail is not None:
                self.tail.consume()
            count += 1


class RestartSupervisor:
    """Wire the worker (dedicated thread) and the watcher (caller's thread)."""

    def __init__(
        self,
        *,
        server: Server,
        builder: RuleSnapshotBuilder,
        writer: ConfigWriter,
        layout: ProjectLayout,
        interval: float = 1.0,
        events: Optional[SupervisorEvents] = None,
        tail: Optional[MultiTail] = None,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.server = server
        self.builder = builder
        self.writer = writer
        self.layout = layout
        self.interval = float(interval)
        self.events = events or SupervisorEvents()
        self.tail = tail
        self.sleep = sleep
        self.marker = RestartMarker(layout.restart_file)
        self.handle: Optional[ServerHandle] = None
        self.worker: Optional[ServerWorker] = None
        self.watcher: Optional[ConfigWatcher] = None
        self._thread: Optional[threading.Thread] = None

    def prepare(self) -> RuleSet:
        """Render the current configuration and write both files."""
        rule_set = self.builder.build_current()
        snapshot = self.builder.render(rule_set)
        self._write(snapshot, force=True)
        return rule_set

    def regenerate(self) -> None:
        self._write(self.builder.snapshot(), force=False)

    def _write(self, snapshot: ConfigSnapshot, *, force: bool) -> None:
        self.writer.write_snapshot(
            snapshot,
            config_file=self.layout.config_file,
            rules_file=self.layout.rules_file,
            force=force,
        )

    def create_handle(self) -> ServerHandle:
        """Resolve the server binary and build its handle.

        Raises:
            ExecutableNotFoundError: If the server binary cannot be found
        """
        self.handle = self.server.create_handle(
            config_file=self.layout.config_file,
            rules_file=self.layout.rules_file,
            pid_file=self.layout.pid_file,
            working_dir=self.layout.root_dir,
        )
        return self.handle

    @property
    def worker_thread(self) -> Optional[threading.Thread]:
        return self._thread

    def start_worker(self, handle: ServerHandle) -> threading.Thread:
        self.handle = handle
        self.worker = ServerWorker(
            self.server,
            handle,
            self.marker,
            regenerate=self.regenerate,
            events=self.events,
        )
        self._thread = threading.Thread(
            target=self._run_worker,
            args=(self.worker,),
            name=f"symfttpd-{self.server.name}",
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def _run_worker(self, worker: ServerWorker) -> None:
        try:
            worker.run()
        except Exception:
            logger.exception("%s worker stopped unexpectedly", self.server.name)
            worker.state = SupervisorState.TERMINATED
            self.events.emit(SERVER_TERMINATED, exit_code=None)

    def run(self, handle: Optional[ServerHandle] = None, *, iterations: Optional[int] = None) -> None:
        """Start the worker and poll on the calling thread until interrupted."""
        handle = handle or self.handle or self.create_handle()
        self.start_worker(handle)
        self.watcher = ConfigWatcher(
            self.builder,
            self.server,
            handle,
            self.marker,
            interval=self.interval,
            events=self.events,
            tail=self.tail,
            sleep=self.sleep,
        )
        try:
            self.watcher.run(iterations)
        except KeyboardInterrupt:
            logger.info("interrupted, stopping %s", self.server.name)
            self.stop()

    def stop(self, timeout: float = 5.0) -> Optional[int]:
        """Stop the server for good; return its last exit code when known."""
        self.marker.consume()
        if self.handle is not None:
            self.server.kill_by_pid_file(self.handle.pid_file)
        if self._thread is not None:
            self._thread.join(timeout)
        return self.worker.exit_code if self.worker is not None else None


__all__ = ["ConfigWatcher", "RestartSupervisor", "ServerWorker", "SupervisorState"]
