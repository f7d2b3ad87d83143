from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from symfttpd.core.process.pidfile import kill_by_pid_file

from .models import ServerHandle


class Server(ABC):
    """A web server that runs in the foreground until it is signalled.

    Variants provide how the binary is found and invoked; starting blocks
    the caller for the whole lifetime of the server process.
    """

    name: str = "server"

    @abstractmethod
    def resolve_executable(self) -> str:
        """Return the path (or command) of the server binary."""

    @abstractmethod
    def build_command(self, executable: str, config_file: Path) -> list[str]:
        """Return the argv running the server in the foreground on ``config_file``."""

    @abstractmethod
    def start(self, command: Sequence[str], working_dir: Path) -> int:
        """Run ``command`` and block until it exits; return its exit code."""

    def kill_by_pid_file(self, pid_file: Path) -> bool:
        return kill_by_pid_file(pid_file)

    def create_handle(
        self,
        *,
        config_file: Path,
        rules_file: Path,
        pid_file: Path,
        working_dir: Path,
    ) -> ServerHandle:
        command = self.build_command(self.resolve_executable(), config_file)
        return ServerHandle(
            pid_file=Path(pid_file),
            config_file=Path(config_file),
            rules_file=Path(rules_file),
            command=tuple(command),
            working_dir=Path(working_dir),
        )


__all__ = ["Server"]
