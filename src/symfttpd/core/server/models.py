from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ServerHandle:
    """Everything needed to start, restart and stop one server instance."""

    pid_file: Path
    config_file: Path
    rules_file: Path
    command: tuple[str, ...]
    working_dir: Path
