"""PTY shell loop implementation."""

import fcntl
import logging
import os
import select
import signal
import struct
import sys
import termios
import tty
from collections.abc import Hashable

from termnotify.sources import READ_SIZE, ChunkDecoder
from termnotify.watcher import create_watcher

log = logging.getLogger(__name__)


def _winsize(fd: int) -> tuple[int, int, int, int]:
    """Return (rows, cols, xpixel, ypixel) for the given tty fd."""
    return struct.unpack("HHHH", fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\x00" * 8))


def _set_winsize(fd: int, rows: int, cols: int, xp: int = 0, yp: int = 0) -> None:
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, cols, xp, yp))


def _shell_argv(command: list[str] | None) -> list[str]:
    if command:
        return command
    return [os.environ.get("SHELL") or "/bin/sh", "-i"]


def _session_handle() -> Hashable:
    return os.environ.get("TMUX_PANE") or f"pty:{os.getpid()}"


def shell_loop(command: list[str] | None = None) -> int:
    """Run *command* (default: the user's shell) in a PTY and watch its output."""
    if not sys.stdin.isatty():
        print("Error: stdin must be a terminal", file=sys.stderr)
        return 1
    if not hasattr(os, "fork"):
        print("Error: interactive shell mode requires a POSIX environment", file=sys.stderr)
        return 1

    argv = _shell_argv(command)
    master_fd, slave_fd = os.openpty()

    # Match the slave PTY size to the real terminal.
    rows, cols, xp, yp = _winsize(sys.stdin.fileno())
    _set_winsize(slave_fd, rows, cols, xp, yp)

    pid = os.fork()
    if pid == 0:
        # Child process: exec the shell attached to the slave PTY.
        os.close(master_fd)
        os.setsid()
        fcntl.ioctl(slave_fd, termios.TIOCSCTTY, 0)
        os.dup2(slave_fd, 0)
        os.dup2(slave_fd, 1)
        os.dup2(slave_fd, 2)
        if slave_fd > 2:
            os.close(slave_fd)
        env = {**os.environ, "TERMNOTIFY_ACTIVE": "1"}
        try:
            os.execvpe(argv[0], argv, env)
        finally:
            os._exit(127)

    # Parent process: shuttle bytes between real terminal and PTY.
    os.close(slave_fd)
    log.debug("spawned %s as pid %d", argv, pid)

    # Forward window-resize signals to the child.
    def _on_winch(_signum, _frame):
        try:
            r, c, xp, yp = _winsize(sys.stdin.fileno())
            _set_winsize(master_fd, r, c, xp, yp)
            os.kill(pid, signal.SIGWINCH)
        except OSError:
            pass

    signal.signal(signal.SIGWINCH, _on_winch)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()

    watcher = create_watcher(stdout_fd)
    handle = _session_handle()
    watcher.activate()
    watcher.register(handle)
    decoder = ChunkDecoder()

    # Put the real terminal into raw mode so keystrokes pass through directly.
    old_attrs = termios.tcgetattr(stdin_fd)
    tty.setraw(stdin_fd)

    try:
        while True:
            try:
                rfds, _, _ = select.select([stdin_fd, master_fd], [], [])
            except InterruptedError:
                continue
            except (OSError, ValueError):
                break

            # Stdin -> PTY master (user keystrokes)
            if stdin_fd in rfds:
                try:
                    data = os.read(stdin_fd, 1024)
                except OSError:
                    break
                if not data:
                    break
                os.write(master_fd, data)

            # PTY master -> stdout (program output), passed through unchanged.
            if master_fd in rfds:
                try:
                    data = os.read(master_fd, READ_SIZE)
                except OSError:
                    break
                if not data:
                    break
                os.write(stdout_fd, data)
                watcher.on_write(handle, decoder.decode(data))
    finally:
        termios.tcsetattr(stdin_fd, termios.TCSAFLUSH, old_attrs)
        watcher.on_write(handle, decoder.flush())
        watcher.on_close(handle)
        watcher.deactivate()

    _, status = os.waitpid(pid, 0)
    return os.waitstatus_to_exitcode(status)
