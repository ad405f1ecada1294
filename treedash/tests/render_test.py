#!/usr/bin/env python3
from __future__ import annotations

from treedash.components import Message, ProgressBar, SpinningMessage
from treedash.progress import ProgressCell
from treedash.render import render_frame
from treedash.terminal import CURSOR_UP, ERASE_LINE
from treedash.tree import StatusTree

E = ERASE_LINE
UP = CURSOR_UP


def test_frame_bytes_for_nested_tree():
    tree = StatusTree(SpinningMessage("Working"))
    tree.append(Message("a"))
    tree.descend(Message("a.1"))
    tree.append(Message("a.2"))
    tree.append(Message("a.3"))
    # a.3 was appended beside a.2; close that level and add a sibling of `a`
    tree.remove()
    tree.remove()
    tree.remove()
    tree.append(Message("b"))

    out = render_frame(tree.root, tick=1)
    assert out == (
        f"{E}Working -\n"
        f"{E}├╴a\n"
        f"{E}└╴b\n"
        + UP * 3 + "\r"
    )


def test_deep_indent_and_branch_glyphs():
    tree = StatusTree(Message("root"))
    tree.descend(Message("x"))
    tree.descend(Message("y"))
    tree.append(Message("z"))
    out = render_frame(tree.root, tick=0)
    assert out == (
        f"{E}root\n"
        f"{E}└╴x\n"
        f"{E}  ├╴y\n"
        f"{E}  └╴z\n"
        + UP * 4 + "\r"
    )


def test_frozen_state_renders_identically():
    cells = [ProgressCell(v) for v in (0, 42, 100)]
    tree = StatusTree(SpinningMessage("Loading"))
    for c in cells:
        tree.append(ProgressBar(c))
    assert render_frame(tree.root, 5) == render_frame(tree.root, 5)


def test_full_bars_have_no_frontier():
    cells = [ProgressCell() for _ in range(3)]
    tree = StatusTree(Message("root"))
    for c in cells:
        tree.append(ProgressBar(c))
    for c in cells:
        c.set(100)
    out = render_frame(tree.root, 2)
    full = "[" + "#" * 20 + "]"
    assert out.count(full + "\n") == 3
    assert "\\" not in out


def test_stale_lines_are_erased_before_rewind():
    tree = StatusTree(Message("root"))
    tree.append(Message("a"))
    out = render_frame(tree.root, 0, stale=2)
    assert out == (
        f"{E}root\n"
        f"{E}└╴a\n"
        f"{E}\n{E}" + UP          # two leftover lines blanked, back to the first
        + UP * 2 + "\r"
    )
    assert out.count(E) == 2 + 2


def test_single_stale_line_needs_no_extra_cursor_up():
    tree = StatusTree(Message("root"))
    out = render_frame(tree.root, 0, stale=1)
    assert out == f"{E}root\n{E}{UP}\r"
