"""
symfttpd CLI package.

Commands are auto-discovered from ``cli/commands/``; each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: user-facing text and error lines
- _args: Common argument registration helpers
- _utils: project/config loading shared by the commands
"""
from ._output import print_error, print_warning
from ._args import (
    add_project_root_flag,
    add_rule_options,
    add_server_options,
    add_verbose_flag,
)
from ._utils import config_overrides, get_project_root, load_project, setup_logging

__all__ = [
    # Output
    "print_error",
    "print_warning",
    # Argument helpers
    "add_project_root_flag",
    "add_rule_options",
    "add_server_options",
    "add_verbose_flag",
    # Utilities
    "config_overrides",
    "get_project_root",
    "load_project",
    "setup_logging",
]
