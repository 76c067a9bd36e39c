"""Unwrap tmux DCS passthrough envelopes.

Inside ``tmux`` an application can forward a sequence to the outer terminal
as ``ESC P tmux; <payload> ESC \\`` where every ESC in the payload is doubled.
Unwrapping replaces the envelope with its payload and collapses the doubled
escapes so the OSC scanner sees the sequence the application meant to send.
"""

from termnotify.constants import ESC, ST, TMUX_PASSTHROUGH_PREFIX

_DOUBLED_ESC = ESC + ESC


def find_envelope_end(buffer: str, start: int) -> int:
    """Return the index of the ST closing a passthrough payload, or -1.

    Doubled escapes belong to the payload, so an ``ESC ESC \\`` pair does not
    close the envelope. A lone trailing ESC is ambiguous and counts as open.
    """
    i = start
    while True:
        j = buffer.find(ESC, i)
        if j == -1 or j + 1 >= len(buffer):
            return -1
        nxt = buffer[j + 1]
        if nxt == "\\":
            return j
        i = j + 2 if nxt == ESC else j + 1


def unwrap_passthrough(buffer: str) -> tuple[str, int]:
    """Replace every complete passthrough envelope in *buffer* with its payload.

    Loops until no complete envelope remains, so adjacent and nested
    envelopes are all unwrapped in one call. Each replacement strictly
    shortens the buffer.

    Returns:
        ``(buffer, pending)`` where *pending* is the index of an envelope
        still waiting for its terminator, or -1.
    """
    while True:
        i = buffer.find(TMUX_PASSTHROUGH_PREFIX)
        if i == -1:
            return buffer, -1

        after = i + len(TMUX_PASSTHROUGH_PREFIX)
        end = find_envelope_end(buffer, after)
        if end == -1:
            return buffer, i

        inner = buffer[after:end].replace(_DOUBLED_ESC, ESC)
        buffer = buffer[:i] + inner + buffer[end + len(ST):]
