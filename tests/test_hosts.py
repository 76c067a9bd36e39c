"""Unit tests for termnotify.hosts."""

import os
import subprocess
from unittest.mock import call, patch

import pytest

from termnotify.hosts import TerminalHost, TmuxHost, detect_host


def _tmux(*args: str, check: bool = True):
    return call(
        ["tmux", *args],
        capture_output=True,
        text=True,
        check=check,
        timeout=5,
    )


class TestTmuxHost:
    @patch("termnotify.hosts.subprocess.run")
    def test_focus_session_targets_pane_handle(self, mock_run):
        TmuxHost("%1").focus_session("%7")
        assert mock_run.call_args_list == [
            _tmux("switch-client", "-t", "%7", check=False),
            _tmux("select-window", "-t", "%7"),
            _tmux("select-pane", "-t", "%7"),
        ]

    @patch("termnotify.hosts.subprocess.run")
    def test_non_pane_handle_uses_own_pane(self, mock_run):
        TmuxHost("%2").focus_session("stdin:123")
        assert mock_run.call_args_list[-1] == _tmux("select-pane", "-t", "%2")

    def test_no_target_is_not_implemented(self):
        with pytest.raises(NotImplementedError):
            TmuxHost().focus_session("stdin:123")

    @patch("termnotify.hosts.subprocess.run")
    def test_reveal_and_toggle(self, mock_run):
        host = TmuxHost()
        host.reveal_panel()
        host.toggle_panel()
        assert mock_run.call_args_list == [_tmux("display-panes"), _tmux("last-window")]

    @patch("termnotify.hosts.subprocess.run")
    def test_failed_select_propagates(self, mock_run):
        mock_run.side_effect = [None, subprocess.CalledProcessError(1, ["tmux"])]
        with pytest.raises(subprocess.CalledProcessError):
            TmuxHost().focus_session("%3")


class TestTerminalHost:
    def _capture(self, action) -> bytes:
        read_fd, write_fd = os.pipe()
        try:
            action(TerminalHost(write_fd))
            return os.read(read_fd, 64)
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_focus_raises_window(self):
        assert self._capture(lambda host: host.focus_session("pty:1")) == b"\x1b[1t\x1b[5t"

    def test_toggle_rings_bell(self):
        assert self._capture(lambda host: host.toggle_panel()) == b"\x07"


class TestDetectHost:
    @patch.dict("os.environ", {}, clear=True)
    def test_plain_terminal(self):
        assert isinstance(detect_host(2), TerminalHost)

    @patch.dict("os.environ", {"TMUX": "/tmp/tmux-0/default,1,0", "TMUX_PANE": "%4"}, clear=True)
    def test_inside_tmux(self):
        host = detect_host(2)
        assert isinstance(host, TmuxHost)
        assert host.pane == "%4"

    @patch.dict("os.environ", {}, clear=True)
    def test_explicit_pane(self):
        host = detect_host(2, pane="%9")
        assert isinstance(host, TmuxHost)
        assert host.pane == "%9"
