"""
symfttpd configuration (YAML, layered).

Configuration sources (highest to lowest priority):
1. Command line options (applied by the CLI through ``overrides``)
2. Environment variables: ``SYMFTTPD_<KEY>``
3. Project config: ``<project>/symfttpd.yml`` (or ``config/symfttpd.yml``)
4. User config: ``~/.symfttpd/config.yml`` (``SYMFTTPD_USER_CONFIG`` overrides the path)
5. Bundled defaults: ``symfttpd/data/config/defaults.yaml``

The merged mapping is validated against ``data/schemas/config.schema.yaml``
and frozen into a SymfttpdConfig that is handed to each component.
"""
from __future__ import annotations

import dataclasses
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from jsonschema import Draft202012Validator

from symfttpd.core.project.scanner import ScanOptions
from symfttpd.data import get_data_path, read_yaml
from symfttpd.exceptions import ConfigurationError, ExecutableNotFoundError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYMFTTPD_"
USER_CONFIG_ENV = "SYMFTTPD_USER_CONFIG"
PROJECT_CONFIG_FILES = ("symfttpd.yml", "symfttpd.yaml", "config/symfttpd.yml")
LIST_KEYS = ("allow", "nophp")


def split_list(value: Any) -> list[str]:
    """Accept ``"a,b"`` or ``["a", "b"]`` and return a clean list of names."""
    if value is None or value is False:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    return [item.strip() for item in items if item.strip()]


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs."""
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@dataclass(frozen=True)
class SymfttpdConfig:
    port: int = 4042
    bind: Optional[str] = "127.0.0.1"
    default: str = "index"
    only: bool = False
    allow: tuple[str, ...] = ()
    nophp: tuple[str, ...] = ("uploads",)
    web_dir: str = "web"
    cache_dir: str = "cache/lighttpd"
    log_dir: str = "log/lighttpd"
    lighttpd_cmd: Optional[str] = None
    php_cgi_cmd: Optional[str] = None
    poll_interval_seconds: float = 1.0
    log_level: str = "INFO"

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> SymfttpdConfig:
        known = {f.name for f in dataclasses.fields(cls)}
        values: Dict[str, Any] = {k: v for k, v in raw.items() if k in known}
        for key in LIST_KEYS:
            if key in values:
                values[key] = tuple(split_list(values[key]))
        if "port" in values:
            values["port"] = int(values["port"])
        if "poll_interval_seconds" in values:
            values["poll_interval_seconds"] = float(values["poll_interval_seconds"])
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> SymfttpdConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in LIST_KEYS:
            if key in changes:
                changes[key] = tuple(split_list(changes[key]))
        return dataclasses.replace(self, **changes)

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            default_entry=self.default,
            allow=self.allow,
            deny=self.nophp,
            restrict=self.only,
        )

    def resolve_php_cgi(self) -> str:
        """Return the php-cgi command, looking it up on the PATH when not configured.

        Raises:
            ExecutableNotFoundError: If no php-cgi binary can be found
        """
        if self.php_cgi_cmd:
            return self.php_cgi_cmd
        found = shutil.which("php-cgi")
        if not found:
            raise ExecutableNotFoundError(
                "php-cgi executable not found. Set php_cgi_cmd in symfttpd.yml.",
                context={"executable": "php-cgi"},
            )
        return found


class ConfigLoader:
    """Load, merge and validate the configuration of one project."""

    def __init__(
        self,
        project_root: Path,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.environ = dict(os.environ if environ is None else environ)

    @property
    def user_config_file(self) -> Path:
        override = self.environ.get(USER_CONFIG_ENV)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".symfttpd" / "config.yml"

    def project_config_file(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_FILES:
            candidate = self.project_root / name
            if candidate.is_file():
                return candidate
        return None

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Unable to read configuration {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration {path} must be a mapping",
                context={"path": str(path)},
            )
        return data

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for field in dataclasses.fields(SymfttpdConfig):
            name = f"{ENV_PREFIX}{field.name.upper()}"
            raw = self.environ.get(name)
            if raw is None:
                continue
            if field.name in LIST_KEYS:
                overrides[field.name] = split_list(raw)
            else:
                overrides[field.name] = self._parse_env_value(name, raw)
        return overrides

    @staticmethod
    def _parse_env_value(name: str, raw: str) -> Any:
        # YAML scalars: "8080" -> 8080, "false" -> False, "null" -> None
        if not raw.strip():
            return None
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Invalid value for {name}: {exc}",
                context={"variable": name},
            ) from exc

    def load_raw(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = dict(read_yaml("config", "defaults.yaml"))

        user_file = self.user_config_file
        if user_file.is_file():
            logger.debug("loading user config %s", user_file)
            merged = deep_merge(merged, self._load_yaml(user_file))

        project_file = self.project_config_file()
        if project_file is not None:
            logger.debug("loading project config %s", project_file)
            merged = deep_merge(merged, self._load_yaml(project_file))

        return deep_merge(merged, self._env_overrides())

    def validate(self, raw: Mapping[str, Any]) -> None:
        schema = yaml.safe_load(get_data_path("schemas", "config.schema.yaml").read_text(encoding="utf-8"))
        errors = sorted(Draft202012Validator(schema).iter_errors(dict(raw)), key=lambda e: list(e.path))
        if errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors[:5]
            )
            raise ConfigurationError(
                f"Invalid configuration: {details}",
                context={"errors": [err.message for err in errors]},
            )

    def load(self) -> SymfttpdConfig:
        raw = self.load_raw()
        self.validate(raw)
        return SymfttpdConfig.from_raw(raw)


def load_config(
    project_root: Path,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SymfttpdConfig:
    """Load the project configuration and apply command line ``overrides``."""
    config = ConfigLoader(project_root, environ=environ).load()
    return config.with_overrides(**dict(overrides or {}))


__all__ = ["ConfigLoader", "SymfttpdConfig", "load_config", "split_list", "deep_merge"]
