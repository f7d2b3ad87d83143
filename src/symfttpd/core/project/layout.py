"""Where symfttpd keeps its files inside a project.

Generated configuration, the lighttpd PID file and the restart marker live in
the cache directory; lighttpd and symfttpd logs live in the log directory.
Both are owned by a single supervisor per project.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from symfttpd.core.utils.io import ensure_directory
from symfttpd.exceptions import NotFoundError

if TYPE_CHECKING:
    from symfttpd.core.config.settings import SymfttpdConfig


def _resolve_under(root: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


@dataclass(frozen=True)
class ProjectLayout:
    root_dir: Path
    web_dir: Path
    cache_dir: Path
    log_dir: Path

    CONFIG_FILENAME: ClassVar[str] = "lighttpd.conf"
    RULES_FILENAME: ClassVar[str] = "rules.conf"
    PID_FILENAME: ClassVar[str] = ".sf"
    RESTART_FILENAME: ClassVar[str] = ".symfttpd_restart"

    @classmethod
    def from_config(
        cls,
        root_dir: Path | str,
        config: "SymfttpdConfig",
        *,
        web_dir: str | Path | None = None,
    ) -> ProjectLayout:
        """Resolve the layout of the project at ``root_dir``.

        Raises:
            NotFoundError: If the project root does not exist
        """
        root = Path(root_dir).expanduser()
        if not root.is_dir():
            raise NotFoundError(
                f'The path "{root}" does not exist',
                context={"project_root": str(root)},
            )
        root = root.resolve()
        return cls(
            root_dir=root,
            web_dir=_resolve_under(root, web_dir or config.web_dir),
            cache_dir=_resolve_under(root, config.cache_dir),
            log_dir=_resolve_under(root, config.log_dir),
        )

    @property
    def config_file(self) -> Path:
        return self.cache_dir / self.CONFIG_FILENAME

    @property
    def rules_file(self) -> Path:
        return self.cache_dir / self.RULES_FILENAME

    @property
    def pid_file(self) -> Path:
        return self.cache_dir / self.PID_FILENAME

    @property
    def restart_file(self) -> Path:
        return self.cache_dir / self.RESTART_FILENAME

    @property
    def error_log(self) -> Path:
        return self.log_dir / "error.log"

    @property
    def access_log(self) -> Path:
        return self.log_dir / "access.log"

    @property
    def supervisor_log(self) -> Path:
        return self.log_dir / "symfttpd.log"

    def validate(self) -> None:
        """Raise NotFoundError when the web directory is missing."""
        if not self.web_dir.is_dir():
            raise NotFoundError(
                f'Directory "{self.web_dir}" not found.',
                context={"web_dir": str(self.web_dir)},
            )

    def prepare(self) -> None:
        """Create the cache and log directories."""
        ensure_directory(self.cache_dir)
        ensure_directory(self.log_dir)


__all__ = ["ProjectLayout"]
