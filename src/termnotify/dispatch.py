"""Route decoded notifications to the desktop and in-terminal sinks."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from termnotify.constants import DEFAULT_TITLE, FOCUS_ACTION_LABEL
from termnotify.deeplink import DEFAULT_SCHEME, build_focus_uri
from termnotify.models import DecodedNotification, NotificationKind, NotifyConfig, NotifyOptions
from termnotify.notifiers.desktop import DesktopNotifier
from termnotify.notifiers.inapp import InAppNotifier

log = logging.getLogger(__name__)

ConfigProvider = Callable[[], NotifyConfig]


def display_text(notification: DecodedNotification) -> tuple[str, str]:
    """Return the ``(title, body)`` shown to the user."""
    if notification.kind is NotificationKind.LABELED:
        title = notification.title or DEFAULT_TITLE
    else:
        title = DEFAULT_TITLE
    return title, notification.body


class Dispatcher:
    """Fan a notification out to both sinks, tagging each with the session token.

    Config is read on every dispatch so toggles take effect without a
    restart. A failing sink is logged and never stops the other one.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        external: DesktopNotifier,
        in_app: InAppNotifier | None,
        focus: Callable[[str], None],
        *,
        uri_scheme: str = DEFAULT_SCHEME,
        platform: str | None = None,
    ) -> None:
        self.config_provider = config_provider
        self.external = external
        self.in_app = in_app
        self.focus = focus
        self.uri_scheme = uri_scheme
        self.platform = platform or sys.platform

    def build_options(self, title: str, body: str, token: str, config: NotifyConfig) -> NotifyOptions:
        options = NotifyOptions(
            title=title,
            message=body,
            wait=True,
            click_token=token,
            icon=config.icon,
        )
        if self.platform == "darwin" and config.app_bundle_id:
            options.sender = config.app_bundle_id
            options.activate_id = config.app_bundle_id
        if not self.external.supports_click:
            options.open_uri = build_focus_uri(token, self.uri_scheme)
        return options

    def dispatch(self, notification: DecodedNotification, token: str) -> None:
        config = self.config_provider()
        title, body = display_text(notification)

        if config.prefer_external_notifications:
            try:
                self.external.display(self.build_options(title, body, token, config))
            except Exception:
                log.warning("desktop notification via %s failed", self.external.name, exc_info=True)

        if config.show_in_app_notification and self.in_app is not None:
            text = f"{title}: {body}" if body else title
            try:
                selection = self.in_app.show_message(text, FOCUS_ACTION_LABEL)
            except Exception:
                log.warning("in-terminal notification failed", exc_info=True)
                return
            if selection == FOCUS_ACTION_LABEL:
                self.focus(token)
