#!/usr/bin/env python3
from __future__ import annotations

import threading
import time

import pytest

from treedash import (
    ManagerClosedError,
    Message,
    PoisonedLockError,
    ProgressBar,
    ProgressCell,
    RenderThreadError,
    SpinningMessage,
    TreeDash,
    TreeDashError,
    erasing_print,
)
from treedash.render import render_frame
from treedash.terminal import ERASE_LINE, HIDE_CURSOR, SHOW_CURSOR
from treedash.tree import StatusTree


class RecordingTerminal:
    """Collects each write() call as its own chunk."""

    def __init__(self):
        self._lock = threading.Lock()
        self.chunks: list[str] = []

    def write(self, text: str) -> int:
        with self._lock:
            self.chunks.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    def text(self) -> str:
        with self._lock:
            return "".join(self.chunks)


class BrokenTerminal:
    def write(self, text):
        raise BrokenPipeError("reader went away")

    def flush(self):
        raise BrokenPipeError("reader went away")


def test_cursor_hidden_then_restored_and_thread_joined():
    term = RecordingTerminal()
    td = TreeDash(Message("root"), tick_rate=50, out=term)
    assert term.chunks[0] == HIDE_CURSOR
    thread = td._render_thread
    td.close()
    assert not thread.is_alive()
    assert term.chunks[-1] == SHOW_CURSOR
    # cursor parked below the single-line region
    assert term.chunks[-2] == "\n"


def test_close_is_idempotent_and_modify_after_close_fails():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        pass
    td.close()
    assert term.text().count(SHOW_CURSOR) == 1
    with pytest.raises(ManagerClosedError):
        td.modify(lambda tree: tree.append(Message("late")))


def test_spinner_advances_with_ticks():
    term = RecordingTerminal()
    with TreeDash(SpinningMessage("Loading"), tick_rate=4, out=term) as td:
        time.sleep(0.4)
        assert td.tick >= 2
    out = term.text()
    assert "Loading /\n" in out
    assert "Loading -\n" in out


def test_zero_tick_rate_renders_only_on_demand():
    term = RecordingTerminal()
    with TreeDash(SpinningMessage("Idle"), tick_rate=0, out=term) as td:
        time.sleep(0.15)
        assert td.tick == 1
        td.modify(lambda tree: tree.append(Message("a")))
        deadline = time.time() + 2
        while td.tick < 2 and time.time() < deadline:
            time.sleep(0.01)
        assert td.tick == 2
    assert "Idle -\n" in term.text()


def test_full_progress_bars_scenario():
    term = RecordingTerminal()
    cells = [ProgressCell() for _ in range(3)]
    with TreeDash(Message("root"), tick_rate=20, out=term) as td:
        def add_bars(tree):
            for c in cells:
                tree.append(ProgressBar(c))

        td.modify(add_bars)
        assert td.lines == 4
        for c in cells:
            c.set(100)
        td.modify(lambda tree: None)
    last_frame = term.chunks[-3]
    assert last_frame.count("[" + "#" * 20 + "]\n") == 3


def test_removing_lines_erases_stale_rows():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        td.modify(lambda tree: [tree.append(Message(n)) for n in ("a", "b", "c")])

        def drop_two(tree):
            tree.remove()
            tree.remove()

        td.modify(drop_two)
        assert td.lines == 2

    expected = StatusTree(Message("root"))
    expected.append(Message("a"))
    shrink_frame = render_frame(expected.root, 0, stale=2)
    assert shrink_frame in term.chunks
    assert shrink_frame.count(ERASE_LINE) == 2 + 2


def test_mixed_batch_uses_exact_line_counts():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        td.modify(lambda tree: [tree.append(Message(n)) for n in ("a", "b", "c")])

        def churn(tree):
            # three removals and one addition: region shrinks by two lines
            tree.remove()
            tree.remove()
            tree.remove()
            tree.append(Message("d"))

        td.modify(churn)

    expected = StatusTree(Message("root"))
    expected.append(Message("d"))
    assert render_frame(expected.root, 0, stale=2) in term.chunks


def test_erasing_print_lands_above_region():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        td.modify(lambda tree: tree.append(Message("a")))
        td.modify(lambda tree: erasing_print(tree, "Bar", 0, "completed!"))
    assert f"{ERASE_LINE}Bar 0 completed!\n" in term.chunks

    expected = StatusTree(Message("root"))
    expected.append(Message("a"))
    # the printed line pushed the region down; nothing stale is left behind it
    assert render_frame(expected.root, 0) in term.chunks


def test_multiline_print_erases_every_row():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        td.modify(lambda tree: [tree.append(Message(n)) for n in ("a", "b", "c")])
        td.modify(lambda tree: erasing_print(tree, "x\ny"))
    assert f"{ERASE_LINE}x\n{ERASE_LINE}y\n" in term.chunks

    expected = StatusTree(Message("root"))
    for n in ("a", "b", "c"):
        expected.append(Message(n))
    # two printed rows push the 4-line region down; nothing stale is left
    assert render_frame(expected.root, 0) in term.chunks


def test_editor_is_dead_outside_modify():
    term = RecordingTerminal()
    with TreeDash(Message("root"), tick_rate=0, out=term) as td:
        kept = td.modify(lambda tree: tree)
        with pytest.raises(TreeDashError):
            kept.append(Message("late"))
        assert td.lines == 1


def test_failing_callback_poisons_and_teardown_reports_it():
    term = RecordingTerminal()
    td = TreeDash(Message("root"), tick_rate=100, out=term)

    def boom(tree):
        tree.append(Message("half done"))
        raise ValueError("callback failed")

    with pytest.raises(ValueError):
        td.modify(boom)
    with pytest.raises(PoisonedLockError):
        td.modify(lambda tree: tree.remove())
    with pytest.raises(RenderThreadError) as excinfo:
        td.close()
    assert isinstance(excinfo.value.__cause__, PoisonedLockError)
    assert term.chunks[-1] == SHOW_CURSOR


def test_terminal_write_failures_are_ignored():
    with TreeDash(SpinningMessage("x"), tick_rate=50, out=BrokenTerminal()) as td:
        td.modify(lambda tree: erasing_print(tree, "still fine"))
        time.sleep(0.05)


def test_negative_tick_rate_rejected():
    with pytest.raises(ValueError):
        TreeDash(Message("root"), tick_rate=-1, out=RecordingTerminal())


def test_log_file_records_lifecycle(tmp_path):
    log = tmp_path / "treedash.log"
    with TreeDash(Message("root"), tick_rate=0, out=RecordingTerminal(), log_file=log) as td:
        td.modify(lambda tree: tree.append(Message("a")))
    text = log.read_text()
    assert "Dashboard started." in text
    assert "modify: lines 1 -> 2" in text
    assert "Dashboard stopped." in text
