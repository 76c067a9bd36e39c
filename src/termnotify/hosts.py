"""Focus actions for the environments termnotify runs in."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Hashable

from termnotify.constants import BEL, ESC

log = logging.getLogger(__name__)

TMUX_TIMEOUT = 5

# xterm window operations: de-iconify, then raise to the front.
XTERM_DEICONIFY = ESC + "[1t"
XTERM_RAISE = ESC + "[5t"


class TmuxHost:
    """Sessions are tmux panes, identified by pane id (``%3``)."""

    def __init__(self, pane: str | None = None) -> None:
        self.pane = pane

    def _run_tmux(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        cmd = ["tmux", *args]
        log.debug("running %s", " ".join(cmd))
        return subprocess.run(cmd, capture_output=True, text=True, check=check, timeout=TMUX_TIMEOUT)

    def focus_session(self, handle: Hashable) -> None:
        target = handle if isinstance(handle, str) and handle.startswith("%") else self.pane
        if not target:
            raise NotImplementedError(f"no tmux pane for session {handle!r}")
        # switch-client fails when the caller is not attached; the pane can
        # still be selected for whichever client is.
        self._run_tmux("switch-client", "-t", target, check=False)
        self._run_tmux("select-window", "-t", target)
        self._run_tmux("select-pane", "-t", target)

    def reveal_panel(self) -> None:
        self._run_tmux("display-panes")

    def toggle_panel(self) -> None:
        self._run_tmux("last-window")


class TerminalHost:
    """A single terminal window reached through its output fd."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def focus_session(self, handle: Hashable) -> None:
        self.reveal_panel()

    def reveal_panel(self) -> None:
        os.write(self.fd, (XTERM_DEICONIFY + XTERM_RAISE).encode())

    def toggle_panel(self) -> None:
        os.write(self.fd, BEL.encode())


def detect_host(fd: int, pane: str | None = None) -> TmuxHost | TerminalHost:
    """Use tmux when running inside it (or given a pane), else the raw terminal."""
    pane = pane or os.environ.get("TMUX_PANE")
    if pane or os.environ.get("TMUX"):
        return TmuxHost(pane)
    return TerminalHost(fd)
