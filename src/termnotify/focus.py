"""Bring the terminal session behind a notification back to the foreground."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Protocol

from termnotify.registry import SessionRegistry

log = logging.getLogger(__name__)


class Host(Protocol):
    """Focus actions offered by whatever hosts the terminal sessions."""

    def focus_session(self, handle: Hashable) -> None: ...

    def reveal_panel(self) -> None: ...

    def toggle_panel(self) -> None: ...


class FocusRouter:
    """Resolve a session token and ask the host to focus that session.

    Tokens may outlive their sessions (a notification can be clicked long
    after the terminal closed), so a miss falls back to the host's generic
    panel actions instead of failing.
    """

    def __init__(self, registry: SessionRegistry, host: Host) -> None:
        self.registry = registry
        self.host = host

    def focus(self, token: str) -> None:
        handle = self.registry.resolve_handle(token) if token else None
        if handle is not None:
            try:
                self.host.focus_session(handle)
            except Exception:
                # The session may have closed between lookup and focus.
                log.debug("focusing session %r failed", handle, exc_info=True)
            return

        log.debug("no live session for token %r; revealing terminal panel", token)
        try:
            self.host.reveal_panel()
            return
        except NotImplementedError:
            log.debug("reveal_panel unsupported by %r; toggling instead", self.host)
        except Exception:
            # tmux with no attached client fails display-panes.
            log.debug("reveal_panel failed; toggling instead", exc_info=True)
        try:
            self.host.toggle_panel()
        except Exception:
            log.warning("could not reveal the terminal panel", exc_info=True)
