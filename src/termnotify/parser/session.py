"""Per-session incremental parser."""

import logging

from termnotify.constants import MAX_BUFFER_SIZE, PLAIN_TAIL_SIZE, TRUNCATED_BUFFER_SIZE
from termnotify.models import DecodedNotification
from termnotify.parser.passthrough import unwrap_passthrough
from termnotify.parser.scanner import FrameStatus, find_frame, parse_content

log = logging.getLogger(__name__)


class SessionParser:
    """Buffer terminal output for one session and pull notifications out of it.

    Chunks may split anywhere, including inside an escape sequence or a
    passthrough envelope; the notifications produced do not depend on where
    the input was split.
    """

    def __init__(self, ignore_progress_subtype4: bool = True) -> None:
        self.ignore_progress_subtype4 = ignore_progress_subtype4
        self._buffer = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def reset(self) -> None:
        self._buffer = ""

    def feed(self, chunk: str) -> list[DecodedNotification]:
        """Append *chunk* and return the notifications it completed."""
        self._buffer += chunk
        if len(self._buffer) > MAX_BUFFER_SIZE:
            log.debug(
                "parser buffer reached %d chars; keeping the last %d",
                len(self._buffer),
                TRUNCATED_BUFFER_SIZE,
            )
            self._buffer = self._buffer[-TRUNCATED_BUFFER_SIZE:]

        buffer, pending = unwrap_passthrough(self._buffer)

        # Frames must close before an unterminated envelope; the envelope
        # itself is held untouched until its terminator arrives.
        if pending == -1:
            region, held = buffer, ""
        else:
            region, held = buffer[:pending], buffer[pending:]

        notifications: list[DecodedNotification] = []
        while True:
            scan = find_frame(region)
            if scan.status is FrameStatus.COMPLETE:
                region = region[scan.end:]
                notification = parse_content(
                    scan.content, ignore_progress_subtype4=self.ignore_progress_subtype4
                )
                if notification is not None:
                    notifications.append(notification)
                continue
            if scan.status is FrameStatus.INCOMPLETE:
                region = region[scan.start:]
            elif held:
                # Plain text ahead of a pending envelope has been scanned.
                region = ""
            elif len(region) > PLAIN_TAIL_SIZE:
                region = region[-PLAIN_TAIL_SIZE:]
            break

        self._buffer = region + held
        return notifications
