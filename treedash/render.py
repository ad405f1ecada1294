#!/usr/bin/env python3
"""
Frame renderer — paints one tree snapshot and rewinds the cursor.

A frame is drawn pre-order, one terminal line per node:

    ESC[2K\r  <indent><branch glyph><content>\n

and is followed by one cursor-up per node (post-order), so the cursor ends
on the first line of the region and the next frame overwrites it in place.

These functions take no locks; callers hold the tree's read lock.
"""

from __future__ import annotations

from typing import List

from .terminal import CURSOR_UP, ERASE_LINE
from .tree import DisplayNode

INDENT = "  "
BRANCH_MID = "\u251c\u2574"   # ├╴
BRANCH_LAST = "\u2514\u2574"  # └╴


def draw_tree(node: DisplayNode, tick: int, out: List[str], depth: int = 0, last: bool = True) -> None:
    out.append(ERASE_LINE)
    if depth:
        out.append(INDENT * (depth - 1))
        out.append(BRANCH_LAST if last else BRANCH_MID)
    out.append(node.content.render(tick))
    out.append("\n")

    count = len(node.children)
    for index, child in enumerate(node.children, start=1):
        draw_tree(child, tick, out, depth + 1, index == count)


def rewind_tree(node: DisplayNode, out: List[str]) -> None:
    for child in node.children:
        rewind_tree(child, out)
    out.append(CURSOR_UP)


def erase_stale(stale: int, out: List[str]) -> None:
    """Blank `stale` leftover lines under a frame that shrank, ending back on the first of them."""
    for i in range(1, stale + 1):
        out.append(ERASE_LINE)
        if i != stale:
            out.append("\n")
    if stale > 1:
        out.append(CURSOR_UP * (stale - 1))


def render_frame(root: DisplayNode, tick: int, stale: int = 0) -> str:
    """Full repaint text for the tree under `root`, cursor parked back on the region's first line."""
    out: List[str] = []
    draw_tree(root, tick, out)
    erase_stale(stale, out)
    rewind_tree(root, out)
    out.append("\r")
    return "".join(out)
