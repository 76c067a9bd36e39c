"""Configuration model for termnotify."""

from pydantic import BaseModel, Field

DEFAULT_APP_NAME = "termnotify"


class NotifyConfig(BaseModel):
    """Runtime configuration for termnotify."""

    enabled: bool = Field(
        default=True,
        description="Scan terminal output for notification sequences at all.",
    )
    prefer_external_notifications: bool = Field(
        default=True,
        description=(
            "Send a desktop notification through the platform notifier. "
            "Can be disabled via TERMNOTIFY_PREFER_EXTERNAL=false."
        ),
    )
    show_in_app_notification: bool = Field(
        default=True,
        description=(
            "Show a banner inside the hosting terminal as well. "
            "Can be disabled via TERMNOTIFY_SHOW_IN_APP=false."
        ),
    )
    ignore_progress_subtype4: bool = Field(
        default=True,
        description=(
            "Drop OSC 9;4 frames, which some terminals use for progress bars "
            "rather than notifications."
        ),
    )
    icon: str | None = Field(
        default=None,
        description="Icon image path passed to the desktop notifier. Overridden by TERMNOTIFY_ICON.",
    )
    app_bundle_id: str | None = Field(
        default=None,
        description=(
            "macOS bundle identifier used as notification sender and activation "
            "target (e.g. 'com.googlecode.iterm2')."
        ),
    )
    app_name: str = Field(
        default=DEFAULT_APP_NAME,
        description="Application name reported to the desktop notifier.",
    )
