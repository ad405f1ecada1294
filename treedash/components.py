#!/usr/bin/env python3
"""
TreeDash components: the content a tree node can display.

  - Message         : static text, printed verbatim
  - SpinningMessage : text followed by a spinner frame picked from the tick
  - ProgressBar     : a bar drawn from a caller-owned ProgressCell

Each renders to a single line of text without a trailing newline.
"""

from __future__ import annotations

from dataclasses import dataclass

from .progress import ProgressCell, render_bar, spinner_glyph


@dataclass(frozen=True)
class Message:
    """Just text."""
    text: str

    def render(self, tick: int) -> str:
        return self.text


@dataclass(frozen=True)
class SpinningMessage:
    """Text with an animated spinner at the end."""
    text: str

    def render(self, tick: int) -> str:
        return f"{self.text} {spinner_glyph(tick)}"


@dataclass(frozen=True)
class ProgressBar:
    """A bar whose value is read from `cell` at render time; the node never writes it."""
    cell: ProgressCell

    def render(self, tick: int) -> str:
        return render_bar(self.cell.get(), tick)


Content = Message | SpinningMessage | ProgressBar
