"""Notification values passed between the parser, dispatcher and notifiers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class NotificationKind(enum.Enum):
    """Which escape-sequence encoding produced a notification."""

    PROGRESS = "osc9"
    LABELED = "osc777"


@dataclass(frozen=True)
class DecodedNotification:
    """A notification request recovered from a terminal output stream."""

    kind: NotificationKind
    body: str
    title: str | None = None


class NotifyOptions(BaseModel):
    """Options handed to a desktop notifier backend.

    Backends read only the hint fields they understand and ignore the rest.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(description="Notification title.")
    message: str = Field(default="", description="Notification body text.")
    wait: bool = Field(
        default=True,
        description="Keep the notification alive long enough to report a click.",
    )
    click_token: str | None = Field(
        default=None,
        description="Opaque session token returned to the click callback.",
    )
    icon: str | None = Field(default=None, description="Path to an icon image.")
    sender: str | None = Field(
        default=None,
        description="macOS bundle identifier whose icon heads the notification.",
    )
    activate_id: str | None = Field(
        default=None,
        description="macOS bundle identifier to activate when the notification is clicked.",
    )
    open_uri: str | None = Field(
        default=None,
        description="Deep link opened on click by backends without click callbacks.",
    )
