"""ANSI escape sequence removal."""

import re

# Colour/erase CSI sequences (ESC [ 1;32m, ESC [ 2J, ESC [ K ...)
_CSI_STYLE = re.compile(r"\x1b\[[0-9;]*[JKmsu]")
# Any other CSI sequence, including private modes (ESC [ ?25l)
_CSI_OTHER = re.compile(r"\x1b\[\??[0-9;]*[a-zA-Z]")
# OSC window-title sequences terminated by BEL (ESC ] 0;title BEL)
_OSC_TITLE = re.compile(r"\x1b\][0-9];[^\x07]*\x07")


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from command output."""
    text = _CSI_STYLE.sub("", text)
    text = _CSI_OTHER.sub("", text)
    return _OSC_TITLE.sub("", text)
