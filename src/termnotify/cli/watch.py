"""`termnotify watch` command implementation.

Reads terminal output from a file or stdin, for example from tmux::

    tmux pipe-pane -O 'termnotify watch --pane #{pane_id}'
"""

import argparse
import json
import logging
import os
import sys

from termnotify.cli.shared import add_debug_flag, configure_logging
from termnotify.models import DecodedNotification
from termnotify.sources import iter_stream_chunks
from termnotify.watcher import create_watcher

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the watch command."""
    parser = argparse.ArgumentParser(
        prog="termnotify watch",
        description="Watch a terminal output stream for OSC 9/777 notification sequences",
    )
    add_debug_flag(parser)
    parser.add_argument("--pane", help="tmux pane id the stream comes from (e.g. %%3)")
    parser.add_argument("--session", help="Name identifying the session (defaults to the pane or input)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print each decoded notification to stdout as a JSON line",
    )
    parser.add_argument("file", nargs="?", help="File to read instead of stdin")
    return parser


def _to_json(notification: DecodedNotification) -> str:
    return json.dumps(
        {"kind": notification.kind.value, "title": notification.title, "body": notification.body}
    )


def run(argv: list[str]) -> int:
    """Execute the watch command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    watcher = create_watcher(pane=args.pane)
    handle = args.session or args.pane or args.file or f"stdin:{os.getpid()}"

    try:
        stream = open(args.file, "rb") if args.file else sys.stdin.buffer
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    watcher.activate()
    try:
        for chunk in iter_stream_chunks(stream):
            for notification in watcher.on_write(handle, chunk):
                if args.json:
                    print(_to_json(notification), flush=True)
    except KeyboardInterrupt:
        log.debug("interrupted")
    finally:
        watcher.on_close(handle)
        watcher.deactivate()
        if args.file:
            stream.close()
    return 0
