"""Streaming parser for notification escape sequences."""

from termnotify.parser.passthrough import unwrap_passthrough
from termnotify.parser.scanner import FrameScan, FrameStatus, find_frame, parse_content
from termnotify.parser.session import SessionParser

__all__ = [
    "FrameScan",
    "FrameStatus",
    "SessionParser",
    "find_frame",
    "parse_content",
    "unwrap_passthrough",
]
