#!/usr/bin/env python3
"""
Progress helpers for TreeDash.

This module provides `ProgressCell`, a small thread-safe integer cell that
producer threads update at will, and `render_bar`, which turns a cell value
into the fixed-width bar the tree draws.

Ownership: the caller creates and keeps the cell. A `ProgressBar` node only
holds a reference and the renderer only ever reads it, so workers can keep
advancing a bar without touching the dashboard at all:

    from treedash import TreeDash, ProgressBar, SpinningMessage
    from treedash.progress import ProgressCell

    cell = ProgressCell()
    with TreeDash(SpinningMessage("Downloading"), tick_rate=10) as td:
        td.modify(lambda tree: tree.append(ProgressBar(cell)))
        for _ in range(100):
            cell.add(1)     # no dashboard locks involved

Values are 0..100 by contract. The bar is drawn from `value // 5` cells and
clamped to [0, 20], so a transient overshoot never widens the bar.
"""

from __future__ import annotations

import threading

SPINNER_GLYPHS = "/-\\|"
BAR_CELLS = 20
FILL_CHAR = "#"
EMPTY_CHAR = " "


def spinner_glyph(tick: int) -> str:
    """Return the spinner frame for `tick` (4-frame cycle)."""
    return SPINNER_GLYPHS[tick % len(SPINNER_GLYPHS)]


def fill_cells(value: int) -> int:
    """Number of filled bar cells for a cell value: min(20, value // 5), never negative."""
    return max(0, min(BAR_CELLS, int(value) // 5))


def render_bar(value: int, tick: int) -> str:
    """Render `[###/    ]`; the animated frontier is dropped once the bar is full."""
    filled = fill_cells(value)
    frontier = spinner_glyph(tick) if filled != BAR_CELLS else ""
    empty = max(0, BAR_CELLS - 1 - filled)
    return f"[{FILL_CHAR * filled}{frontier}{EMPTY_CHAR * empty}]"


class ProgressCell:
    """Caller-owned progress value (0..100) shared with a `ProgressBar` node.

    Plain reads and writes are atomic under the interpreter; `add` uses a
    private lock so concurrent increments from several producers are not lost.
    """

    def __init__(self, value: int = 0) -> None:
        self._value = int(value)
        self._lock = threading.Lock()

    def get(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        self._value = int(value)

    def add(self, delta: int = 1) -> int:
        """Add `delta` and return the previous value."""
        with self._lock:
            previous = self._value
            self._value = previous + int(delta)
            return previous

    @property
    def done(self) -> bool:
        return self._value >= 100

    def __repr__(self) -> str:
        return f"ProgressCell({self._value})"
