#!/usr/bin/env python3
"""
Terminal escape sequences and best-effort output helpers.
"""

from __future__ import annotations

import logging
from typing import TextIO

from colorama import just_fix_windows_console

# ANSI
CSI = "\x1b["
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
ERASE_LINE = f"{CSI}2K\r"
CURSOR_UP = f"{CSI}1A"

_log = logging.getLogger(__name__)


def enable_ansi() -> bool:
    """Probe/enable ANSI handling once (Windows consoles). Failures are ignored."""
    try:
        just_fix_windows_console()
        return True
    except Exception as e:
        _log.debug(f"ANSI enable probe failed: {type(e).__name__}: {e}")
        return False


def write(out: TextIO, text: str) -> bool:
    """Write and flush; a dead terminal (broken pipe, closed stream) is ignored."""
    try:
        out.write(text)
        out.flush()
        return True
    except (OSError, ValueError) as e:
        _log.debug(f"terminal write dropped: {type(e).__name__}: {e}")
        return False


class CursorHidden:
    """Hide the cursor for the lifetime of the object; show it again on every exit path."""

    def __init__(self, out: TextIO):
        self.out = out
        self.active = False

    def hide(self) -> "CursorHidden":
        write(self.out, HIDE_CURSOR)
        self.active = True
        return self

    def restore(self) -> None:
        if not self.active:
            return
        self.active = False
        write(self.out, SHOW_CURSOR)

    def __enter__(self):
        return self.hide()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.restore()
        return False
