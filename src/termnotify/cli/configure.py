"""`termnotify configure` command implementation."""

import argparse
import sys

from termnotify.cli.shared import add_debug_flag, configure_logging
from termnotify.config import CONFIG_FILE, NotifyConfig, load_config, save_config

# (flag stem, config field, help text for the positive flag)
TOGGLES: tuple[tuple[str, str, str], ...] = (
    ("enable", "enabled", "Scan terminal output for notification sequences"),
    ("external", "prefer_external_notifications", "Send desktop notifications"),
    ("in-app", "show_in_app_notification", "Show a banner in the terminal as well"),
    ("ignore-progress", "ignore_progress_subtype4", "Drop OSC 9;4 progress frames"),
)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the configure command."""
    parser = argparse.ArgumentParser(
        prog="termnotify configure",
        description="Update the flags stored in ~/.termnotify/config.json",
    )
    add_debug_flag(parser)
    for stem, field, help_text in TOGGLES:
        group = parser.add_mutually_exclusive_group()
        negative = "--disable" if stem == "enable" else f"--no-{stem}"
        group.add_argument(f"--{stem}", dest=field, action="store_true", default=None, help=help_text)
        group.add_argument(
            negative, dest=field, action="store_false", default=None, help=f"Opposite of --{stem}"
        )
    parser.add_argument("--icon", help="Icon image path for desktop notifications")
    parser.add_argument("--clear-icon", action="store_true", help="Remove the stored icon path")
    parser.add_argument(
        "--app-bundle-id",
        help="macOS bundle id used as sender and click target (example: com.googlecode.iterm2)",
    )
    parser.add_argument("--app-name", help="Application name reported to the desktop notifier")
    return parser


def apply_options(config: NotifyConfig, args: argparse.Namespace) -> NotifyConfig:
    """Return a copy of *config* with the parsed options applied."""
    updated = config.model_copy(deep=True)
    for _, field, _ in TOGGLES:
        value = getattr(args, field)
        if value is not None:
            setattr(updated, field, value)
    if args.clear_icon:
        updated.icon = None
    elif args.icon is not None:
        updated.icon = args.icon
    if args.app_bundle_id is not None:
        updated.app_bundle_id = args.app_bundle_id or None
    if args.app_name:
        updated.app_name = args.app_name
    return updated


def _on_off(value: bool) -> str:
    return "true" if value else "false"


def run(argv: list[str]) -> int:
    """Execute the configure command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    if args.clear_icon and args.icon is not None:
        print("Error: --icon and --clear-icon cannot be used together", file=sys.stderr)
        return 2

    existing = load_config() if CONFIG_FILE.exists() else NotifyConfig()
    updated = apply_options(existing, args)
    try:
        save_config(updated)
    except OSError as e:
        print(f"Error: could not save configuration: {e}", file=sys.stderr)
        return 1

    print("\nConfiguration saved to ~/.termnotify/config.json")
    for _, field, _ in TOGGLES:
        print(f"  {field}: {_on_off(getattr(updated, field))}")
    print(f"  icon: {updated.icon or 'not set'}")
    print(f"  app_bundle_id: {updated.app_bundle_id or 'not set'}")
    print(f"  app_name: {updated.app_name}")
    print("")
    return 0
