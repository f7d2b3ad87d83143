"""
symfttpd genconf command.

SUMMARY: Print (or write) the generated lighttpd configuration
"""

from __future__ import annotations

import argparse
import sys

from symfttpd.cli import (
    add_project_root_flag,
    add_rule_options,
    add_server_options,
    load_project,
    print_error,
)
from symfttpd.core.config import ConfigWriter
from symfttpd.core.rules import RuleSnapshotBuilder
from symfttpd.exceptions import SymfttpdError

SUMMARY = "Print (or write) the generated lighttpd configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_rule_options(parser)
    add_server_options(parser)
    parser.add_argument(
        "--write",
        "-w",
        action="store_true",
        help="Write lighttpd.conf and rules.conf to the cache directory instead of printing them",
    )
    parser.add_argument(
        "--rules-only",
        action="store_true",
        help="Only print the rewrite rules",
    )
    add_project_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    try:
        config, layout = load_project(args)
        layout.validate()
        builder = RuleSnapshotBuilder.for_project(config, layout)
        snapshot = builder.snapshot()

        if args.write:
            layout.prepare()
            ConfigWriter().write_snapshot(
                snapshot,
                config_file=layout.config_file,
                rules_file=layout.rules_file,
                force=True,
            )
            print(f"Wrote {layout.config_file}")
            print(f"Wrote {layout.rules_file}")
            return 0
    except (SymfttpdError, OSError) as e:
        print_error(e)
        return 1

    if not args.rules_only:
        sys.stdout.write(snapshot.config_text)
        sys.stdout.write("\n")
    sys.stdout.write(snapshot.rules_text)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
