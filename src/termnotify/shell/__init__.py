"""PTY wrapper that watches a shell's output for notification sequences."""

from termnotify.shell.loop import shell_loop

__all__ = ["shell_loop"]
