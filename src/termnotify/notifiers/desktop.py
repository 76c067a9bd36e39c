"""Desktop notification backends.

Each backend shells out to the platform's notification tool. Only
``notify-send`` with ``--wait``/``--action`` can report clicks back; the
others get a deep link in ``NotifyOptions.open_uri`` instead.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import sys
import threading
from collections.abc import Callable

from termnotify.constants import DEFAULT_TITLE, FOCUS_ACTION_LABEL
from termnotify.models import DEFAULT_APP_NAME, NotifyOptions

log = logging.getLogger(__name__)

ClickCallback = Callable[[str], None]

NOTIFY_TIMEOUT = 5
NOTIFY_SEND_DEFAULT_ACTION = "default"

_click_lock = threading.Lock()
_click_handler: ClickCallback | None = None


class NotifierError(RuntimeError):
    """Raised when a desktop notification could not be delivered."""


def install_click_handler(callback: ClickCallback) -> bool:
    """Register the process-wide click callback.

    Only the first registration takes effect; later calls are no-ops and
    return ``False``.
    """
    global _click_handler
    with _click_lock:
        if _click_handler is not None:
            log.debug("click handler already installed; ignoring %r", callback)
            return False
        _click_handler = callback
        return True


def clear_click_handler() -> None:
    global _click_handler
    with _click_lock:
        _click_handler = None


def emit_click(token: str) -> None:
    """Route a clicked notification's token to the installed handler."""
    with _click_lock:
        handler = _click_handler
    if handler is None:
        log.debug("notification clicked but no handler is installed")
        return
    try:
        handler(token)
    except Exception:
        log.warning("notification click handler failed", exc_info=True)


def _run(argv: list[str], timeout: float = NOTIFY_TIMEOUT) -> None:
    try:
        subprocess.run(argv, capture_output=True, text=True, timeout=timeout, check=True)
    except FileNotFoundError as exc:
        raise NotifierError(f"{argv[0]} not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise NotifierError(f"{argv[0]} timed out after {timeout}s") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip()
        raise NotifierError(f"{argv[0]} exited with {exc.returncode}: {detail}") from exc


class DesktopNotifier:
    """Base class for platform notification backends.

    With ``background`` set (the default) ``display`` returns immediately and
    the notifier process runs on a daemon thread, so a slow tool never stalls
    the terminal output it was called from. Failures are then logged there
    instead of raised.
    """

    name = "desktop"
    supports_click = False
    background = True

    def display(self, options: NotifyOptions) -> None:
        raise NotImplementedError

    def _launch(self, argv: list[str]) -> None:
        if not self.background:
            _run(argv)
            return
        worker = threading.Thread(
            target=self._run_logged,
            args=(argv,),
            name=f"{self.name}-notify",
            daemon=True,
        )
        worker.start()

    def _run_logged(self, argv: list[str]) -> None:
        try:
            _run(argv)
        except NotifierError:
            log.warning("desktop notification via %s failed", self.name, exc_info=True)


class NullNotifier(DesktopNotifier):
    """Used when no notification tool is available on this machine."""

    name = "null"

    def display(self, options: NotifyOptions) -> None:
        log.info("no desktop notifier available; dropping %r", options.title)


class NotifySendNotifier(DesktopNotifier):
    """libnotify's ``notify-send`` (Linux and BSD desktops)."""

    name = "notify-send"

    def __init__(self, app_name: str = DEFAULT_APP_NAME, *, wait_for_action: bool = True) -> None:
        self.app_name = app_name
        self.supports_click = wait_for_action

    def build_argv(self, options: NotifyOptions, *, with_action: bool) -> list[str]:
        argv = ["notify-send", f"--app-name={self.app_name}"]
        if options.icon:
            argv += ["--icon", options.icon]
        if with_action:
            argv += ["--wait", f"--action={NOTIFY_SEND_DEFAULT_ACTION}={FOCUS_ACTION_LABEL}"]
        argv += ["--", options.title or DEFAULT_TITLE, options.message]
        return argv

    def display(self, options: NotifyOptions) -> None:
        if not (self.supports_click and options.wait and options.click_token):
            self._launch(self.build_argv(options, with_action=False))
            return

        argv = self.build_argv(options, with_action=True)
        try:
            proc = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as exc:
            raise NotifierError("notify-send not found") from exc

        waiter = threading.Thread(
            target=self._wait_for_action,
            args=(proc, options),
            name="notify-send-wait",
            daemon=True,
        )
        waiter.start()

    def _wait_for_action(self, proc: subprocess.Popen, options: NotifyOptions) -> None:
        stdout, stderr = proc.communicate()
        if proc.returncode != 0:
            # libnotify before 0.7.9 has no --wait/--action.
            log.debug("notify-send --wait failed (%s); retrying without actions", stderr.strip())
            self.supports_click = False
            try:
                _run(self.build_argv(options, with_action=False))
            except NotifierError:
                log.warning("notify-send failed", exc_info=True)
            return
        if stdout.strip() == NOTIFY_SEND_DEFAULT_ACTION and options.click_token:
            emit_click(options.click_token)


class TerminalNotifierNotifier(DesktopNotifier):
    """``terminal-notifier`` on macOS; clicks open ``options.open_uri``."""

    name = "terminal-notifier"

    def build_argv(self, options: NotifyOptions) -> list[str]:
        argv = [
            "terminal-notifier",
            "-title",
            options.title or DEFAULT_TITLE,
            "-message",
            options.message or " ",
        ]
        if options.sender:
            argv += ["-sender", options.sender]
        if options.activate_id:
            argv += ["-activate", options.activate_id]
        if options.icon:
            argv += ["-contentImage", options.icon]
        if options.open_uri:
            argv += ["-open", options.open_uri]
        return argv

    def display(self, options: NotifyOptions) -> None:
        self._launch(self.build_argv(options))


def _applescript_quote(text: str) -> str:
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    text = re.sub(r"[\x00-\x1f\x7f]", "", text)
    return f'"{text}"'


class OsascriptNotifier(DesktopNotifier):
    """AppleScript ``display notification``; always available on macOS."""

    name = "osascript"

    def display(self, options: NotifyOptions) -> None:
        script = (
            f"display notification {_applescript_quote(options.message)} "
            f"with title {_applescript_quote(options.title or DEFAULT_TITLE)}"
        )
        self._launch(["osascript", "-e", script])


def _powershell_quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


_TOAST_SCRIPT = """\
[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] > $null
$template = [Windows.UI.Notifications.ToastNotificationManager]::GetTemplateContent([Windows.UI.Notifications.ToastTemplateType]::ToastText02)
$texts = $template.GetElementsByTagName('text')
$texts.Item(0).AppendChild($template.CreateTextNode({title})) > $null
$texts.Item(1).AppendChild($template.CreateTextNode({message})) > $null
$toast = [Windows.UI.Notifications.ToastNotification]::new($template)
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier({app_id}).Show($toast)
"""


class PowerShellToastNotifier(DesktopNotifier):
    """Windows toast notifications through PowerShell's WinRT bridge."""

    name = "powershell-toast"

    def __init__(self, app_name: str = DEFAULT_APP_NAME, executable: str = "powershell") -> None:
        self.app_name = app_name
        self.executable = executable

    def build_script(self, options: NotifyOptions) -> str:
        return _TOAST_SCRIPT.format(
            title=_powershell_quote(options.title or DEFAULT_TITLE),
            message=_powershell_quote(options.message),
            app_id=_powershell_quote(self.app_name),
        )

    def display(self, options: NotifyOptions) -> None:
        self._launch(
            [self.executable, "-NoProfile", "-NonInteractive", "-Command", self.build_script(options)]
        )


def create_platform_notifier(app_name: str = DEFAULT_APP_NAME, platform: str | None = None) -> DesktopNotifier:
    """Pick the best available backend for *platform* (defaults to ``sys.platform``)."""
    platform = platform or sys.platform
    if platform == "darwin":
        if shutil.which("terminal-notifier"):
            return TerminalNotifierNotifier()
        if shutil.which("osascript"):
            return OsascriptNotifier()
    elif platform == "win32":
        for executable in ("powershell", "pwsh"):
            if shutil.which(executable):
                return PowerShellToastNotifier(app_name, executable=executable)
    elif shutil.which("notify-send"):
        return NotifySendNotifier(app_name)

    log.debug("no desktop notification tool found for %s", platform)
    return NullNotifier()
