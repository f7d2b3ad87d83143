from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable


def _ordered_set(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))


@dataclass(frozen=True)
class RuleSet:
    """Which entries of the web root lighttpd exposes and where requests route.

    All collections are normalized to sorted, duplicate-free tuples so two
    rule sets built from the same tree always render identically.
    """

    default_entry_point: str
    denied_php_paths: tuple[str, ...] = ()
    allowed_scripts: tuple[str, ...] = ()
    readable_dirs: tuple[str, ...] = ()
    readable_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "denied_php_paths", _ordered_set(self.denied_php_paths))
        object.__setattr__(
            self,
            "allowed_scripts",
            _ordered_set([*self.allowed_scripts, self.default_entry_point]),
        )
        object.__setattr__(self, "readable_dirs", _ordered_set(self.readable_dirs))
        object.__setattr__(self, "readable_files", _ordered_set(self.readable_files))

    def template_parameters(self) -> dict[str, Any]:
        """Parameters for the rules template."""
        return {
            "dirs": list(self.readable_dirs),
            "files": list(self.readable_files),
            "phps": list(self.allowed_scripts),
            "default": self.default_entry_point,
            "nophp": list(self.denied_php_paths),
        }


@dataclass(frozen=True)
class ServerOptions:
    """Static options of the main lighttpd configuration."""

    document_root: Path
    port: int
    bind: str | None
    error_log: Path
    access_log: Path
    pidfile: Path
    rules_file: Path | None
    php_cgi_cmd: str

    def template_parameters(self) -> dict[str, Any]:
        """Parameters for the main configuration template."""
        return {
            "document_root": str(self.document_root),
            "port": int(self.port),
            "bind": self.bind,
            "error_log": str(self.error_log),
            "access_log": str(self.access_log),
            "pidfile": str(self.pidfile),
            "rules_file": str(self.rules_file) if self.rules_file is not None else None,
            "php_cgi_cmd": self.php_cgi_cmd,
        }


@dataclass(frozen=True, eq=False)
class ConfigSnapshot:
    """Rendered configuration + rules; compared by their concatenated text."""

    config_text: str
    rules_text: str

    @property
    def text(self) -> str:
        return f"{self.config_text}\n{self.rules_text}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigSnapshot):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)


__all__ = ["ConfigSnapshot", "RuleSet", "ServerOptions"]
