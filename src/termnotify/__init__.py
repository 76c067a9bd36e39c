"""termnotify - desktop notifications from terminal escape sequences."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("termnotify")
except PackageNotFoundError:
    __version__ = "0.0.0"
