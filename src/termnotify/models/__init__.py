"""Data models for termnotify."""

from termnotify.models.notification import DecodedNotification, NotificationKind, NotifyOptions
from termnotify.models.notify_config import DEFAULT_APP_NAME, NotifyConfig

__all__ = [
    "DEFAULT_APP_NAME",
    "DecodedNotification",
    "NotificationKind",
    "NotifyConfig",
    "NotifyOptions",
]
