"""Unit tests for termnotify.registry."""

import threading

from termnotify.registry import SessionRegistry


class TestResolveToken:
    def test_same_handle_same_token(self):
        registry = SessionRegistry()
        assert registry.resolve_token("%1") == registry.resolve_token("%1")

    def test_different_handles_different_tokens(self):
        registry = SessionRegistry()
        assert registry.resolve_token("%1") != registry.resolve_token("%2")

    def test_token_is_128_bit_hex(self):
        token = SessionRegistry().resolve_token(object())
        assert len(token) == 32
        int(token, 16)

    def test_concurrent_first_resolution_mints_one_token(self):
        registry = SessionRegistry()
        handle = "%7"
        tokens: list[str] = []
        barrier = threading.Barrier(8)

        def _resolve():
            barrier.wait()
            tokens.append(registry.resolve_token(handle))

        threads = [threading.Thread(target=_resolve) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert len(set(tokens)) == 1
        assert len(registry) == 1


class TestResolveHandle:
    def test_round_trip(self):
        registry = SessionRegistry()
        handle = object()
        token = registry.resolve_token(handle)
        assert registry.resolve_handle(token) is handle

    def test_unknown_token_is_absent(self):
        assert SessionRegistry().resolve_handle("nope") is None

    def test_forgotten_session_is_absent(self):
        registry = SessionRegistry()
        token = registry.resolve_token("%1")
        registry.forget("%1")
        assert registry.resolve_handle(token) is None
        assert "%1" not in registry

    def test_forget_unknown_handle_is_noop(self):
        SessionRegistry().forget("never-seen")

    def test_new_token_after_forget(self):
        registry = SessionRegistry()
        old = registry.resolve_token("%1")
        registry.forget("%1")
        assert registry.resolve_token("%1") != old

    def test_clear(self):
        registry = SessionRegistry()
        token = registry.resolve_token("%1")
        registry.clear()
        assert len(registry) == 0
        assert registry.resolve_handle(token) is None
