"""Deep links that carry a session token back to the focus router."""

from urllib.parse import parse_qs, quote, urlsplit

DEFAULT_SCHEME = "termnotify"
FOCUS_PATH = "focus"


def build_focus_uri(token: str, scheme: str = DEFAULT_SCHEME, authority: str = "") -> str:
    """Return ``<scheme>://<authority>/focus?tid=<token>``."""
    return f"{scheme}://{authority}/{FOCUS_PATH}?tid={quote(token, safe='')}"


def parse_focus_uri(uri: str, scheme: str = DEFAULT_SCHEME) -> str | None:
    """Extract the session token from a focus deep link.

    Both ``termnotify:///focus?tid=...`` and ``termnotify://focus?tid=...``
    are accepted. Returns ``None`` for anything else.
    """
    parts = urlsplit(uri)
    if parts.scheme != scheme:
        return None
    if parts.path.strip("/") != FOCUS_PATH and not (
        parts.netloc == FOCUS_PATH and parts.path in ("", "/")
    ):
        return None
    values = parse_qs(parts.query).get("tid")
    if not values or not values[0]:
        return None
    return values[0]
