from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from symfttpd.exceptions import ExecutableNotFoundError

from .base import Server

logger = logging.getLogger(__name__)

# lighttpd is usually installed in an sbin directory that is not on a
# regular user's PATH.
DEFAULT_SEARCH_DIRS = ("/usr/sbin", "/usr/local/sbin", "/sbin", "/opt/local/sbin")


class LighttpdServer(Server):
    """lighttpd started with ``-D`` (no daemonizing) on a generated config."""

    name = "lighttpd"

    def __init__(
        self,
        command: Optional[str] = None,
        *,
        search_dirs: Sequence[str] = DEFAULT_SEARCH_DIRS,
    ) -> None:
        self.command = command
        self.search_dirs = tuple(search_dirs)

    def resolve_executable(self) -> str:
        """Return the configured command, else the lighttpd binary found on disk.

        Raises:
            ExecutableNotFoundError: If lighttpd cannot be found
        """
        if self.command:
            return self.command

        search_path = os.pathsep.join(
            [p for p in os.environ.get("PATH", "").split(os.pathsep) if p] + list(self.search_dirs)
        )
        found = shutil.which(self.name, path=search_path)
        if not found:
            raise ExecutableNotFoundError(
                "lighttpd executable not found.",
                context={"executable": self.name, "search_path": search_path},
            )
        self.command = found
        return found

    def build_command(self, executable: str, config_file: Path) -> list[str]:
        return [executable, "-D", "-f", str(config_file)]

    def start(self, command: Sequence[str], working_dir: Path) -> int:
        argv = list(command)
        logger.info("starting %s in %s", " ".join(argv), working_dir)
        result = subprocess.run(argv, cwd=str(working_dir), check=False)  # noqa: S603
        logger.info("%s exited with code %s", self.name, result.returncode)
        return result.returncode


__all__ = ["DEFAULT_SEARCH_DIRS", "LighttpdServer"]
