"""`termnotify shell` command implementation."""

import argparse

from termnotify.cli.shared import add_debug_flag, configure_logging
from termnotify.shell import shell_loop


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the shell command."""
    parser = argparse.ArgumentParser(
        prog="termnotify shell",
        description="Run a shell (or COMMAND) in a PTY and turn its OSC 9/777 sequences into notifications",
    )
    add_debug_flag(parser)
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run instead of $SHELL (prefix with -- to pass options through)",
    )
    return parser


def run(argv: list[str]) -> int:
    """Execute the shell command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    command = list(args.command)
    if command[:1] == ["--"]:
        command = command[1:]
    return shell_loop(command or None)
