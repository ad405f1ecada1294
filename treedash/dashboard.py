# treedash/dashboard.py
#!/usr/bin/env python3
"""
TreeDash dashboard — a live, in-place tree of status lines.

A background render thread repaints the tree every 1/tick_rate seconds (or
only on demand when tick_rate is 0). The controlling thread edits the tree
through `modify()`, which waits until the render thread is parked between
frames, applies the edits and paints one extra frame right away.

    from treedash import TreeDash, SpinningMessage, ProgressBar, erasing_print
    from treedash.progress import ProgressCell

    cells = [ProgressCell() for _ in range(3)]
    with TreeDash(SpinningMessage("Working"), tick_rate=10) as td:
        def add_bars(tree):
            for cell in cells:
                tree.append(ProgressBar(cell))
        td.modify(add_bars)
        ...  # worker threads call cell.add(1)
        td.modify(lambda tree: erasing_print(tree, "Bar 0 completed!"))

Only one TreeDash should own a terminal at a time. Output written while it
runs must go through `TreeEditor.println` / `erasing_print` inside a
`modify()` call, otherwise it lands in the middle of the region.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, Optional, TextIO, TypeVar

from .components import Content
from .errors import ManagerClosedError, RenderThreadError, TreeDashError
from .locks import ReadWriteLock, SchedulingGate
from .render import render_frame
from .terminal import ERASE_LINE, CursorHidden, enable_ansi, write
from .tree import StatusTree

T = TypeVar("T")


class TreeEditor:
    """Mutation handle passed to a `TreeDash.modify` callback; dead once the callback returns."""

    def __init__(self, tree: StatusTree, lock: ReadWriteLock, out: TextIO):
        self._tree = tree
        self._lock = lock
        self._out = out
        self._live = True
        self.printed = 0

    def _ensure_live(self) -> None:
        if not self._live:
            raise TreeDashError("TreeEditor used outside of its modify() call")

    def append(self, content: Content) -> None:
        """Add another parallel task (a first sub-task when only the root exists)."""
        self._ensure_live()
        with self._lock.write("append"):
            self._tree.append(content)

    def descend(self, content: Content) -> None:
        """Make a new sub-task of the current task."""
        self._ensure_live()
        with self._lock.write("descend"):
            self._tree.descend(content)

    def remove(self) -> None:
        """Remove the last displayed item. A bare root is left alone."""
        self._ensure_live()
        with self._lock.write("remove"):
            self._tree.remove()

    def replace_root(self, content: Content) -> None:
        self._ensure_live()
        with self._lock.write("replace_root"):
            self._tree.replace_root(content)

    def println(self, text: str = "") -> None:
        """Print text above the dashboard, erasing each row it lands on; the region is redrawn below it."""
        self._ensure_live()
        text = str(text)
        lines = text.split("\n")
        write(self._out, "".join(f"{ERASE_LINE}{line}\n" for line in lines))
        self.printed += len(lines)

    def _release(self) -> None:
        self._live = False


def erasing_print(editor: TreeEditor, *args, sep: str = " ") -> None:
    """print()-style helper for use inside modify() callbacks."""
    editor.println(sep.join(str(a) for a in args))


class TreeDash:
    """
    Thread-safe, in-place tree dashboard.

    Options:
      tick_rate:   frames per second; 0 renders only on demand (no animation).
      out:         terminal stream (default sys.stdout).
      log_file:    when set, lifecycle/mutation events go to this file.
      debug_locks: log every lock wait/acquire/release (needs log_file).
    """

    def __init__(
        self,
        root: Content,
        tick_rate: float = 10,
        *,
        out: Optional[TextIO] = None,
        log_file=None,
        debug_locks: bool = False,
    ):
        if tick_rate < 0:
            raise ValueError("tick_rate must be >= 0")
        self.tick_rate = tick_rate
        self.out = out if out is not None else sys.stdout
        self._debug_locks = debug_locks

        self.logger = None
        if log_file:
            self.logger = logging.getLogger('TreeDashLogger')
            log_level = logging.DEBUG if self._debug_locks else logging.INFO
            self.logger.setLevel(log_level)
            if not self.logger.handlers:
                fh = logging.FileHandler(log_file, mode='w')
                formatter = logging.Formatter('%(asctime)s - %(threadName)s - %(levelname)s - %(message)s')
                fh.setFormatter(formatter)
                self.logger.addHandler(fh)

        self._tree = StatusTree(root)
        self._tree_lock = ReadWriteLock("tree", logger=self.logger, debug=debug_locks)
        self._gate = SchedulingGate("schedule", logger=self.logger, debug=debug_locks)
        self._tick = 0
        self._stop = False
        self._closed = False
        self._thread_error: Optional[BaseException] = None

        enable_ansi()
        self._cursor = CursorHidden(self.out).hide()

        self._render_thread = threading.Thread(target=self._run, name="TreeDashRenderThread", daemon=True)
        try:
            self._render_thread.start()
        except RuntimeError as e:
            self._cursor.restore()
            raise RenderThreadError("Could not start the TreeDash render thread") from e
        self._log("Dashboard started.")

    def _log(self, message, level='info'):
        if self.logger:
            getattr(self.logger, level, self.logger.info)(message)

    # -----------------------------
    # Public API
    # -----------------------------
    @property
    def tick(self) -> int:
        return self._tick

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def lines(self) -> int:
        """Terminal lines the region currently occupies."""
        with self._tree_lock.read("lines"):
            return self._tree.lines

    def modify(self, fn: Callable[[TreeEditor], T]) -> T:
        """Run `fn` with exclusive access to the tree, then repaint once.

        Blocks until the render thread is parked between frames. If `fn` raises,
        the scheduling gate is poisoned and the exception propagates.
        """
        if self._closed:
            raise ManagerClosedError("modify() called on a closed TreeDash")

        with self._gate.hold("modify"):
            with self._tree_lock.read("modify_before"):
                before = self._tree.lines

            editor = TreeEditor(self._tree, self._tree_lock, self.out)
            try:
                result = fn(editor)
            finally:
                editor._release()

            with self._tree_lock.read("modify_render"):
                after = self._tree.lines
                stale = max(0, before - editor.printed - after)
                write(self.out, render_frame(self._tree.root, self._tick, stale=stale))

            if self.tick_rate == 0:
                self._gate.notify_all()

        self._log(f"modify: lines {before} -> {after}, printed {editor.printed}, erased {stale}")
        return result

    # -----------------------------
    # Rendering
    # -----------------------------
    def _render_loop(self):
        timeout = (1.0 / self.tick_rate) if self.tick_rate > 0 else None
        with self._gate.hold("render_loop"):
            while not self._stop:
                with self._tree_lock.read("render_tick"):
                    write(self.out, render_frame(self._tree.root, self._tick))
                self._tick += 1
                self._gate.wait(timeout)

    def _run(self):
        try:
            self._render_loop()
        except BaseException as e:
            self._thread_error = e
            if self.logger:
                self.logger.error(f"Render thread died: {type(e).__name__}: {e}", exc_info=True)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def close(self) -> None:
        """Stop the render thread, park the cursor below the region and show it again.

        Raises RenderThreadError if the render thread died with an exception.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._stop = True
            self._gate.notify_all()
            self._render_thread.join()
        finally:
            write(self.out, "\n" * self._tree.lines)
            self._cursor.restore()
            self._log("Dashboard stopped.")

        if self._thread_error is not None:
            raise RenderThreadError("TreeDash render thread died") from self._thread_error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type and exc_type is not KeyboardInterrupt:
            self._log(f"Dashboard exited with exception: {exc_val}", level='error')
        self.close()
