"""Common CLI argument registration utilities.

Every option that maps onto a configuration key defaults to None so that
"not given on the command line" never overrides the configuration files.
"""
from __future__ import annotations

import argparse


def add_project_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --project-root flag (defaults to the current directory).

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--project-root",
        type=str,
        help="Project root directory (default: current directory)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Also log diagnostics to stderr",
    )


def add_rule_options(parser: argparse.ArgumentParser) -> None:
    """Add the options that shape the rewrite rules."""
    parser.add_argument(
        "--default",
        type=str,
        default=None,
        help="Change the default application (default: index)",
    )
    parser.add_argument(
        "--only",
        action="store_const",
        const=True,
        default=None,
        help="Do not allow any other application",
    )
    parser.add_argument(
        "--allow",
        type=str,
        default=None,
        help="With --only, allow some other applications (comma-separated, e.g. frontend_dev)",
    )
    parser.add_argument(
        "--nophp",
        type=str,
        default=None,
        help="Deny PHP execution in the specified directories (comma-separated, default: uploads)",
    )
    parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Path of the web directory (default: <project>/web)",
    )


def add_server_options(parser: argparse.ArgumentParser) -> None:
    """Add the options of the main server configuration."""
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="The port to listen on (default: 4042)",
    )
    parser.add_argument(
        "--bind",
        "-b",
        type=str,
        default=None,
        help="The address to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--all",
        "-a",
        dest="all_interfaces",
        action="store_true",
        help="Bind on all addresses",
    )


__all__ = [
    "add_project_root_flag",
    "add_verbose_flag",
    "add_rule_options",
    "add_server_options",
]
