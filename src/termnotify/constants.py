"""Shared constants for escape-sequence scanning and terminal output."""

ESC = "\x1b"
BEL = "\x07"
# String terminator: ESC backslash.
ST = ESC + "\\"

# Operating system command introducer. Notification frames look like
# ESC ] 9 ; <body> BEL  or  ESC ] 777 ; notify ; <title> ; <body> ST
OSC_PREFIX = ESC + "]"

# tmux forwards inner control sequences as ESC P tmux; <payload> ST with
# every literal ESC in the payload doubled.
TMUX_PASSTHROUGH_PREFIX = ESC + "Ptmux;"

MAX_BUFFER_SIZE = 256 * 1024
TRUNCATED_BUFFER_SIZE = 128 * 1024
PLAIN_TAIL_SIZE = 4096

DEFAULT_TITLE = "Terminal"
FOCUS_ACTION_LABEL = "Focus Terminal"

BOLD = "\033[1m"
CYAN = "\033[36m"
RESET = "\033[0m"
