"""Mapping between host session handles and opaque session tokens."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Hashable
from typing import Generic, TypeVar

log = logging.getLogger(__name__)

H = TypeVar("H", bound=Hashable)


class SessionRegistry(Generic[H]):
    """Bidirectional handle <-> token map.

    A handle receives exactly one token for as long as it stays registered.
    Tokens are random 128-bit hex strings, so a token minted for one session
    is never handed to another.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[H, str] = {}
        self._handles: dict[str, H] = {}

    def resolve_token(self, handle: H) -> str:
        """Return the token for *handle*, minting one on first sight."""
        with self._lock:
            token = self._tokens.get(handle)
            if token is None:
                token = uuid.uuid4().hex
                self._tokens[handle] = token
                self._handles[token] = handle
                log.debug("registered session %r as %s", handle, token)
            return token

    def resolve_handle(self, token: str) -> H | None:
        with self._lock:
            return self._handles.get(token)

    def forget(self, handle: H) -> None:
        """Drop *handle* and its token; unknown handles are ignored."""
        with self._lock:
            token = self._tokens.pop(handle, None)
            if token is not None:
                self._handles.pop(token, None)
                log.debug("forgot session %r (%s)", handle, token)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
            self._handles.clear()

    def __contains__(self, handle: object) -> bool:
        with self._lock:
            return handle in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
