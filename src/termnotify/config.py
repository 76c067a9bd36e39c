"""Configuration for termnotify."""

import json
import logging
import os
import secrets
import stat
from pathlib import Path
from typing import Any

from termnotify.models import NotifyConfig

log = logging.getLogger(__name__)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ENV_BOOLEAN_FIELDS",
    "NotifyConfig",
    "load_config",
    "parse_bool",
    "save_config",
]

CONFIG_DIR = Path.home() / ".termnotify"
CONFIG_FILE = CONFIG_DIR / "config.json"
BOOLEAN_TRUE_STRINGS = {"1", "true", "yes", "on"}
BOOLEAN_FALSE_STRINGS = {"0", "false", "no", "off"}

ENV_BOOLEAN_FIELDS: dict[str, str] = {
    "TERMNOTIFY_ENABLED": "enabled",
    "TERMNOTIFY_PREFER_EXTERNAL": "prefer_external_notifications",
    "TERMNOTIFY_SHOW_IN_APP": "show_in_app_notification",
    "TERMNOTIFY_IGNORE_PROGRESS": "ignore_progress_subtype4",
}


def parse_bool(raw: str) -> bool | None:
    """Interpret a boolean environment string, or return ``None`` if unrecognised."""
    normalized = raw.strip().lower()
    if normalized in BOOLEAN_TRUE_STRINGS:
        return True
    if normalized in BOOLEAN_FALSE_STRINGS:
        return False
    return None


def load_config() -> NotifyConfig:
    """Load config from file, with env var overrides.

    Reads ``~/.termnotify/config.json`` and applies environment variable
    overrides (``TERMNOTIFY_ENABLED``, ``TERMNOTIFY_PREFER_EXTERNAL``,
    ``TERMNOTIFY_SHOW_IN_APP``, ``TERMNOTIFY_IGNORE_PROGRESS`` and
    ``TERMNOTIFY_ICON``).  Falls back to defaults when the file is absent or
    contains invalid JSON.

    Returns:
        The resolved ``NotifyConfig`` instance.
    """
    raw_config: dict[str, Any] = {}

    _ensure_config_dir_permissions(create=False)
    _ensure_config_file_permissions()

    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE) as f:
                loaded = json.load(f)
        except json.JSONDecodeError as exc:
            log.warning(
                "invalid config JSON in %s (%s); falling back to defaults",
                CONFIG_FILE,
                exc,
            )
        else:
            if isinstance(loaded, dict):
                raw_config = loaded
            log.debug("loaded config from %s", CONFIG_FILE)

    config = NotifyConfig.model_validate(raw_config)

    # Env var overrides
    for env_name, field in ENV_BOOLEAN_FIELDS.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        value = parse_bool(raw)
        if value is None:
            log.warning("ignoring unrecognised boolean %s=%r", env_name, raw)
            continue
        setattr(config, field, value)
    if icon := os.environ.get("TERMNOTIFY_ICON"):
        config.icon = icon

    return config


def save_config(config: NotifyConfig) -> None:
    """Save config to file.

    Writes ``~/.termnotify/config.json`` atomically (temp file + rename) with
    0o600 permissions so the file is only readable by the owner.

    Args:
        config: Configuration to persist.

    Raises:
        OSError: If the config directory or file cannot be created or written.
    """
    _ensure_config_dir_permissions(create=True)
    temp_file = CONFIG_DIR / f".{CONFIG_FILE.name}.{os.getpid()}.{secrets.token_hex(8)}.tmp"
    fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_file, CONFIG_FILE)
    except Exception:
        temp_file.unlink(missing_ok=True)
        raise
    log.debug("saved config to %s", CONFIG_FILE)


def _ensure_config_dir_permissions(*, create: bool) -> None:
    """Ensure the config directory exists and is owner-only."""
    if create:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True, mode=0o700)

    if not CONFIG_DIR.exists():
        return

    current_mode = stat.S_IMODE(CONFIG_DIR.stat().st_mode)
    if current_mode & 0o077:
        CONFIG_DIR.chmod(0o700)
        log.warning(
            "updated config directory permissions for %s from %o to 700",
            CONFIG_DIR,
            current_mode,
        )


def _ensure_config_file_permissions() -> None:
    """Ensure the config file is not readable/writable by group or others."""
    if not CONFIG_FILE.exists():
        return

    current_mode = stat.S_IMODE(CONFIG_FILE.stat().st_mode)
    if current_mode & 0o077:
        CONFIG_FILE.chmod(0o600)
        log.warning(
            "updated config file permissions for %s from %o to 600",
            CONFIG_FILE,
            current_mode,
        )
