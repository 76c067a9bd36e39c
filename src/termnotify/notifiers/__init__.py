"""Notification sinks: desktop notifiers and in-terminal banners."""

from termnotify.notifiers.desktop import (
    DesktopNotifier,
    NotifierError,
    NotifySendNotifier,
    NullNotifier,
    OsascriptNotifier,
    PowerShellToastNotifier,
    TerminalNotifierNotifier,
    clear_click_handler,
    create_platform_notifier,
    emit_click,
    install_click_handler,
)
from termnotify.notifiers.inapp import InAppNotifier, TerminalBanner, TmuxMessage

__all__ = [
    "DesktopNotifier",
    "InAppNotifier",
    "NotifierError",
    "NotifySendNotifier",
    "NullNotifier",
    "OsascriptNotifier",
    "PowerShellToastNotifier",
    "TerminalBanner",
    "TerminalNotifierNotifier",
    "TmuxMessage",
    "clear_click_handler",
    "create_platform_notifier",
    "emit_click",
    "install_click_handler",
]
