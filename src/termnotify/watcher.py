"""Tie parsing, dispatch and focus together for a set of terminal sessions."""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Hashable, Iterable

from termnotify.config import load_config
from termnotify.deeplink import DEFAULT_SCHEME, parse_focus_uri
from termnotify.dispatch import Dispatcher
from termnotify.focus import FocusRouter, Host
from termnotify.hosts import TmuxHost, detect_host
from termnotify.models import DecodedNotification, NotifyConfig
from termnotify.notifiers.desktop import (
    DesktopNotifier,
    clear_click_handler,
    create_platform_notifier,
    install_click_handler,
)
from termnotify.notifiers.inapp import InAppNotifier, TerminalBanner, TmuxMessage
from termnotify.parser import SessionParser
from termnotify.registry import SessionRegistry

log = logging.getLogger(__name__)


class NotificationWatcher:
    """Owns per-session parsers and the session registry between activate() and deactivate().

    Chunks for one session are parsed and dispatched under that session's
    lock, so a second chunk never interleaves with the first. Different
    sessions proceed independently.
    """

    def __init__(
        self,
        host: Host,
        external: DesktopNotifier,
        in_app: InAppNotifier | None = None,
        config_provider: Callable[[], NotifyConfig] | None = None,
        *,
        uri_scheme: str = DEFAULT_SCHEME,
    ) -> None:
        config_provider = config_provider or load_config
        self.config_provider = config_provider
        self.uri_scheme = uri_scheme
        self.registry: SessionRegistry = SessionRegistry()
        self.focus_router = FocusRouter(self.registry, host)
        self.dispatcher = Dispatcher(
            config_provider,
            external,
            in_app,
            self.focus,
            uri_scheme=uri_scheme,
        )
        self.enabled = True
        self._lock = threading.Lock()
        self._parsers: dict[Hashable, SessionParser] = {}
        self._session_locks: dict[Hashable, threading.Lock] = {}
        self._owns_click_handler = False

    def activate(self) -> None:
        self.enabled = self.config_provider().enabled
        self._owns_click_handler = install_click_handler(self.focus)
        log.debug("watcher activated (enabled=%s)", self.enabled)

    def deactivate(self) -> None:
        with self._lock:
            self._parsers.clear()
            self._session_locks.clear()
        self.registry.clear()
        if self._owns_click_handler:
            clear_click_handler()
            self._owns_click_handler = False
        log.debug("watcher deactivated")

    def enable(self) -> None:
        self.enabled = True
        log.info("terminal notifications enabled")

    def disable(self) -> None:
        self.enabled = False
        log.info("terminal notifications disabled")

    def _session(self, handle: Hashable) -> tuple[SessionParser, threading.Lock]:
        with self._lock:
            parser = self._parsers.get(handle)
            if parser is None:
                config = self.config_provider()
                parser = SessionParser(ignore_progress_subtype4=config.ignore_progress_subtype4)
                self._parsers[handle] = parser
                self._session_locks[handle] = threading.Lock()
            return parser, self._session_locks[handle]

    def register(self, handle: Hashable) -> str:
        return self.registry.resolve_token(handle)

    def on_write(self, handle: Hashable, text: str) -> list[DecodedNotification]:
        """Handle one chunk of output from *handle* and dispatch what it completes."""
        if not self.enabled or not text:
            return []
        token = self.registry.resolve_token(handle)
        parser, lock = self._session(handle)
        with lock:
            notifications = parser.feed(text)
            for notification in notifications:
                log.debug("session %r: %s", handle, notification)
                self.dispatcher.dispatch(notification, token)
        return notifications

    def consume(self, handle: Hashable, chunks: Iterable[str]) -> list[DecodedNotification]:
        """Drain a pull-based chunk source for *handle*, then close the session."""
        seen: list[DecodedNotification] = []
        try:
            for chunk in chunks:
                seen.extend(self.on_write(handle, chunk))
        finally:
            self.on_close(handle)
        return seen

    def on_close(self, handle: Hashable) -> None:
        with self._lock:
            self._parsers.pop(handle, None)
            self._session_locks.pop(handle, None)
        self.registry.forget(handle)

    def focus(self, token: str) -> None:
        self.focus_router.focus(token)

    def handle_uri(self, uri: str) -> bool:
        """Focus the session named by a deep link; returns whether *uri* was one."""
        token = parse_focus_uri(uri, self.uri_scheme)
        if token is None:
            log.debug("ignoring unrecognised uri %r", uri)
            return False
        self.focus(token)
        return True


def create_watcher(fd: int | None = None, pane: str | None = None) -> NotificationWatcher:
    """Build a watcher for the current environment.

    Inside tmux (or with an explicit *pane*) sessions are focused through
    tmux and banners go to its status line; otherwise both go to *fd*
    (stderr by default).
    """
    if fd is None:
        fd = sys.stderr.fileno()
    config = load_config()
    host = detect_host(fd, pane=pane)
    in_app: InAppNotifier
    if isinstance(host, TmuxHost):
        in_app = TmuxMessage(host.pane)
    else:
        in_app = TerminalBanner(fd)
    return NotificationWatcher(host, create_platform_notifier(config.app_name), in_app)
