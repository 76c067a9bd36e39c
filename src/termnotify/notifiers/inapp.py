"""In-terminal notification banners."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Protocol

from termnotify.constants import BOLD, CYAN, RESET
from termnotify.notifiers.desktop import NOTIFY_TIMEOUT, NotifierError

log = logging.getLogger(__name__)


class InAppNotifier(Protocol):
    def show_message(self, text: str, action_label: str) -> str | None:
        """Show *text*; return *action_label* if the user picked the action."""
        ...


def _supports_color() -> bool:
    """Return whether ANSI color output should be used."""
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


class TerminalBanner:
    """Write a one-line banner into the wrapped terminal's output."""

    def __init__(self, fd: int, prefix: str = "termnotify") -> None:
        self.fd = fd
        self.prefix = prefix

    def format(self, text: str) -> bytes:
        line = f"[{self.prefix}] {text}"
        if _supports_color():
            line = f"{BOLD}{CYAN}{line}{RESET}"
        return f"\r\n{line}\r\n".encode()

    def show_message(self, text: str, action_label: str) -> str | None:
        os.write(self.fd, self.format(text))
        return None


class TmuxMessage:
    """Show the message in the tmux status line of *pane*."""

    def __init__(self, pane: str | None = None) -> None:
        self.pane = pane

    def build_argv(self, text: str) -> list[str]:
        argv = ["tmux", "display-message"]
        if self.pane:
            argv += ["-t", self.pane]
        # tmux expands #{...} formats in the message.
        argv.append(text.replace("#", "##"))
        return argv

    def show_message(self, text: str, action_label: str) -> str | None:
        try:
            subprocess.run(
                self.build_argv(text),
                capture_output=True,
                text=True,
                timeout=NOTIFY_TIMEOUT,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise NotifierError(f"tmux display-message failed: {exc}") from exc
        return None
