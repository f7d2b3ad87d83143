"""
symfttpd spawn command.

SUMMARY: Launch lighttpd and restart it when the web directory changes
"""

from __future__ import annotations

import argparse
import sys

from symfttpd import __version__
from symfttpd.cli import (
    add_project_root_flag,
    add_rule_options,
    add_server_options,
    add_verbose_flag,
    load_project,
    print_error,
    print_warning,
    setup_logging,
)
from symfttpd.core.config import ConfigWriter, SymfttpdConfig
from symfttpd.core.project import SCRIPT_SUFFIX, ProjectLayout
from symfttpd.core.rules import RuleSet, RuleSnapshotBuilder
from symfttpd.core.server import LighttpdServer
from symfttpd.core.supervisor import RestartMarker, RestartSupervisor, SupervisorEvents
from symfttpd.core.tail import MultiTail
from symfttpd.exceptions import SymfttpdError

SUMMARY = "Launch lighttpd and restart it when the web directory changes"

LOCAL_BINDS = (None, "", "0.0.0.0", "::")


def register_args(parser: argparse.ArgumentParser) -> None:
    add_rule_options(parser)
    add_server_options(parser)
    parser.add_argument(
        "--tail",
        "-t",
        action="store_true",
        help="Print the lighttpd logs in the console",
    )
    parser.add_argument(
        "--kill",
        "-K",
        action="store_true",
        help="Kill the symfttpd server running for this project",
    )
    parser.add_argument(
        "--single-process",
        "-s",
        action="store_true",
        help="Run lighttpd once, without restarting it on changes",
    )
    add_project_root_flag(parser)
    add_verbose_flag(parser)


def format_banner(config: SymfttpdConfig, rule_set: RuleSet, *, all_interfaces: bool = False) -> str:
    """Start-up text listing the reachable front controllers."""
    bound_address = "all-interfaces" if all_interfaces else (config.bind or "all-interfaces")
    host = "localhost" if all_interfaces or config.bind in LOCAL_BINDS else config.bind

    apps = [
        f" http://{host}:{config.port}/{script}"
        for script in rule_set.allowed_scripts
        if script.endswith(SCRIPT_SUFFIX) and len(script) > len(SCRIPT_SUFFIX)
    ]
    return (
        f"lighttpd started on {bound_address}, port {config.port}.\n"
        "\n"
        "Available applications:\n"
        + "\n".join(apps)
        + "\n\nPress Ctrl+C to stop serving.\n"
    )


def register_printers(events: SupervisorEvents) -> None:
    """Report restarts and termination on the terminal."""
    events.on_restart_triggered(lambda killed: print_warning("web directory changed, restarting lighttpd"))
    events.on_server_restarting(lambda: print("Something in web/ changed. Restarting lighttpd.", flush=True))
    events.on_server_terminated(lambda exit_code: print("Terminated.", flush=True))
    events.on_regeneration_failed(
        lambda error: print_warning(f"could not regenerate the configuration, keeping the previous one: {error}")
    )


def build_tail(layout: ProjectLayout) -> MultiTail:
    tail = MultiTail()
    tail.add_file("access", layout.access_log)
    tail.add_file("error", layout.error_log)
    return tail


def kill(server: LighttpdServer, layout: ProjectLayout) -> int:
    """Stop the server of this project for good (no restart)."""
    RestartMarker(layout.restart_file).consume()
    return 0 if server.kill_by_pid_file(layout.pid_file) else 1


def main(args: argparse.Namespace) -> int:
    print(f"symfttpd version {__version__}")
    try:
        config, layout = load_project(args)
        server = LighttpdServer(config.lighttpd_cmd)
        if args.kill:
            return kill(server, layout)

        layout.validate()
        layout.prepare()
        setup_logging(config, layout, args)

        supervisor = RestartSupervisor(
            server=server,
            builder=RuleSnapshotBuilder.for_project(config, layout),
            writer=ConfigWriter(),
            layout=layout,
            interval=config.poll_interval_seconds,
        )
        rule_set = supervisor.prepare()
        handle = supervisor.create_handle()
    except (SymfttpdError, OSError) as e:
        print_error(e)
        return 1

    sys.stdout.write(format_banner(config, rule_set, all_interfaces=args.all_interfaces))
    sys.stdout.flush()

    if args.single_process:
        try:
            server.start(handle.command, handle.working_dir)
        except OSError as e:
            print_error(e)
            return 1
        print("Terminated.")
        return 0

    if args.tail:
        supervisor.tail = build_tail(layout)
        # Before the server starts, to capture its start-up messages
        supervisor.tail.consume()

    register_printers(supervisor.events)
    supervisor.run(handle)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
