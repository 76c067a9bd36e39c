"""Locate and decode OSC notification frames.

Two encodings are recognised:

* ``OSC 9 ; <body>``                      (iTerm2 / Ghostty / Windows Terminal)
* ``OSC 777 ; notify ; <title> ; <body>``  (rxvt-unicode / foot / kitty)

Either may end with BEL or ST; whichever comes first after the start marker
closes the frame.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from termnotify.constants import BEL, DEFAULT_TITLE, OSC_PREFIX, ST
from termnotify.models import DecodedNotification, NotificationKind

log = logging.getLogger(__name__)


class FrameStatus(enum.Enum):
    ABSENT = "absent"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


@dataclass(frozen=True)
class FrameScan:
    """Result of looking for the next OSC frame in a buffer."""

    status: FrameStatus
    start: int = -1
    content: str = ""
    end: int = -1


_ABSENT = FrameScan(FrameStatus.ABSENT)


def find_frame(buffer: str) -> FrameScan:
    """Find the first OSC frame in *buffer*.

    Returns:
        ``ABSENT`` when there is no start marker, ``INCOMPLETE`` with the
        marker index when no terminator follows it yet, or ``COMPLETE`` with
        the content between marker and terminator and ``end`` pointing just
        past the terminator.
    """
    start = buffer.find(OSC_PREFIX)
    if start == -1:
        return _ABSENT

    after = start + len(OSC_PREFIX)
    end_bel = buffer.find(BEL, after)
    end_st = buffer.find(ST, after)

    if end_bel != -1 and (end_st == -1 or end_bel < end_st):
        end, consume = end_bel, len(BEL)
    elif end_st != -1:
        end, consume = end_st, len(ST)
    else:
        return FrameScan(FrameStatus.INCOMPLETE, start=start)

    return FrameScan(
        FrameStatus.COMPLETE,
        start=start,
        content=buffer[after:end],
        end=end + consume,
    )


def parse_content(content: str, *, ignore_progress_subtype4: bool = True) -> DecodedNotification | None:
    """Decode the text between an OSC start marker and its terminator.

    Unknown OSC types and malformed notification frames return ``None``.
    """
    s = content.strip()

    if s.startswith("9;"):
        # 9;4 carries progress-bar updates on some terminals.
        if ignore_progress_subtype4 and s.startswith("9;4;"):
            log.debug("dropping OSC 9;4 progress frame")
            return None
        body = s[2:].strip()
        if not body:
            return None
        return DecodedNotification(kind=NotificationKind.PROGRESS, body=body)

    if s.startswith("777;"):
        parts = s.split(";")
        if len(parts) < 2 or parts[1].lower() != "notify":
            log.debug("ignoring OSC 777 frame without notify verb")
            return None
        title = parts[2] if len(parts) >= 3 else DEFAULT_TITLE
        body = ";".join(parts[3:])
        if not title and not body:
            return None
        return DecodedNotification(kind=NotificationKind.LABELED, title=title, body=body)

    return None
