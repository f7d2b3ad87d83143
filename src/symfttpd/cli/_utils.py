"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from symfttpd.core.config import SymfttpdConfig, load_config
from symfttpd.core.logs import configure_logging
from symfttpd.core.project import ProjectLayout

ALL_INTERFACES = "0.0.0.0"


def get_project_root(args: argparse.Namespace) -> Path:
    """Return --project-root when given, else the current directory."""
    value = getattr(args, "project_root", None)
    if value:
        return Path(value).expanduser().resolve()
    return Path.cwd()


def config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map command line options onto configuration keys.

    Options left unset are returned as None and ignored by the config layer.
    """
    bind = getattr(args, "bind", None)
    if getattr(args, "all_interfaces", False):
        bind = ALL_INTERFACES
    return {
        "port": getattr(args, "port", None),
        "bind": bind,
        "default": getattr(args, "default", None),
        "only": getattr(args, "only", None),
        "allow": getattr(args, "allow", None),
        "nophp": getattr(args, "nophp", None),
    }


def load_project(args: argparse.Namespace) -> tuple[SymfttpdConfig, ProjectLayout]:
    """Load the layered configuration and resolve the project layout.

    Raises:
        ConfigurationError: If a configuration file is invalid
        NotFoundError: If the project root does not exist
    """
    root = get_project_root(args)
    config = load_config(root, overrides=config_overrides(args))
    layout = ProjectLayout.from_config(root, config, web_dir=getattr(args, "path", None))
    return config, layout


def setup_logging(config: SymfttpdConfig, layout: ProjectLayout, args: argparse.Namespace) -> None:
    configure_logging(
        log_path=layout.supervisor_log,
        level=config.log_level,
        verbose=bool(getattr(args, "verbose", False)),
    )


__all__ = ["ALL_INTERFACES", "config_overrides", "get_project_root", "load_project", "setup_logging"]
