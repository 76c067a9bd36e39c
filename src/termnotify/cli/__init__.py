"""Command-line interface for termnotify."""

import argparse
import sys

from termnotify import __version__
from termnotify.cli import configure, shell, watch

COMMANDS = {
    "shell": shell.run,
    "watch": watch.run,
    "configure": configure.run,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termnotify",
        description="Desktop notifications from OSC 9 / OSC 777 terminal escape sequences",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("command", choices=sorted(COMMANDS), help="Subcommand to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the subcommand")
    return parser


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] in COMMANDS:
        return COMMANDS[argv[0]](argv[1:])
    args = build_parser().parse_args(argv)
    return COMMANDS[args.command](args.args)


def entrypoint() -> None:
    raise SystemExit(main())
