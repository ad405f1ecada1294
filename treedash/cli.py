#!/usr/bin/env python3
"""
TreeDash CLI Demos

- `progress` drives a few bars from a producer loop (or one thread per bar
  with `-t`) and prints "Bar N completed!" above the dashboard as each finishes.
- `tasks` walks a small multi-stage pipeline, opening sub-steps with
  `descend`, closing them with `remove` and flipping the root label at the end.

Single-letter flags exist for all options.
"""
from __future__ import annotations

import argparse
import random
import threading
import time
from typing import List

from . import Message, ProgressBar, SpinningMessage, TreeDash, erasing_print
from .progress import ProgressCell


# ---------------------------------------------------------------------------
# Helpers

def _sleep(sec: float) -> None:
    if sec > 0:
        time.sleep(sec)


def _pick_bar(cells: List[ProgressCell]) -> int:
    """Mostly the first unfinished bar, sometimes a later one."""
    idx = 0
    while idx < len(cells) - 1 and (random.random() < 0.3 or cells[idx].done):
        idx += 1
    return idx


def _produce(cell: ProgressCell, interval: float) -> None:
    """Producer thread body: random steps, never past 100."""
    while not cell.done:
        cell.add(min(random.randint(1, 3), 100 - cell.get()))
        _sleep(interval * random.uniform(0.5, 3.0))


# ---------------------------------------------------------------------------
# PROGRESS

def demo_progress(args: argparse.Namespace) -> int:
    bars = max(1, args.bars)
    cells = [ProgressCell() for _ in range(bars)]

    if args.plain:
        while not all(c.done for c in cells):
            idx = _pick_bar(cells)
            if cells[idx].done:
                continue
            if cells[idx].add(1) == 99:
                print(f"Bar {idx} completed!")
            _sleep(args.interval)
        return 0

    with TreeDash(SpinningMessage("Progress bar example"), args.tick_rate, log_file=args.log_file) as td:
        def add_bars(tree):
            for cell in cells:
                tree.append(ProgressBar(cell))

        td.modify(add_bars)

        if args.threads:
            ts = [threading.Thread(target=_produce, args=(c, args.interval), daemon=True) for c in cells]
            for t in ts:
                t.start()
            reported = set()
            while len(reported) < bars:
                for idx, cell in enumerate(cells):
                    if cell.done and idx not in reported:
                        reported.add(idx)
                        td.modify(lambda tree, idx=idx: erasing_print(tree, f"Bar {idx} completed!"))
                _sleep(max(args.interval, 0.01))
            for t in ts:
                t.join()
        else:
            while not all(c.done for c in cells):
                idx = _pick_bar(cells)
                if cells[idx].done:
                    continue
                if cells[idx].add(1) == 99:
                    td.modify(lambda tree, idx=idx: erasing_print(tree, f"Bar {idx} completed!"))
                _sleep(args.interval)

        td.modify(lambda tree: tree.replace_root(Message("Progress bar example: done")))
    return 0


# ---------------------------------------------------------------------------
# TASKS

_STAGES = [
    ("Resolving dependencies", ["fetch index", "solve constraints"]),
    ("Building", ["compile core", "compile plugins", "link"]),
    ("Testing", ["unit", "integration"]),
]


def demo_tasks(args: argparse.Namespace) -> int:
    if args.plain:
        for stage, steps in _STAGES:
            print(stage)
            for step in steps:
                print(f"  {step}")
                _sleep(args.interval)
            print(f"{stage}: ok")
        print("Done")
        return 0

    with TreeDash(SpinningMessage("Working"), args.tick_rate, log_file=args.log_file) as td:
        for stage, steps in _STAGES:
            td.modify(lambda tree, stage=stage: tree.descend(SpinningMessage(stage)))
            for i, step in enumerate(steps):
                if i == 0:
                    td.modify(lambda tree, step=step: tree.descend(SpinningMessage(step)))
                else:
                    td.modify(lambda tree, step=step: tree.append(SpinningMessage(step)))
                _sleep(args.interval)

            def finish_stage(tree, stage=stage, steps=steps):
                for _ in steps:
                    tree.remove()
                tree.remove()
                erasing_print(tree, f"{stage}: ok")

            td.modify(finish_stage)
        td.modify(lambda tree: tree.replace_root(Message("Done")))
    return 0


# ---------------------------------------------------------------------------
# ARGPARSE

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="treedash", description="TreeDash CLI demos")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("-p", "--plain", action="store_true", help="Run without live dashboard; print plain text.")
        sp.add_argument("-s", "--seed", type=int, default=1234, help="Random seed for repeatability.")
        sp.add_argument("-r", "--tick-rate", type=float, default=10, help="Frames per second (0 = on demand).")
        sp.add_argument("-l", "--log-file", default=None, help="Write dashboard events to this file.")

    sp = sub.add_parser("progress", help="Progress bars advanced at random; completions printed above.")
    add_common(sp)
    sp.add_argument("-n", "--bars", type=int, default=3)
    sp.add_argument("-i", "--interval", type=float, default=0.009)
    sp.add_argument("-t", "--threads", action="store_true", help="One producer thread per bar.")
    sp.set_defaults(func=demo_progress)

    sp = sub.add_parser("tasks", help="Nested sub-task tree for a multi-stage pipeline.")
    add_common(sp)
    sp.add_argument("-i", "--interval", type=float, default=0.4)
    sp.set_defaults(func=demo_tasks)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    random.seed(args.seed)
    return int(bool(args.func(args)))


if __name__ == "__main__":
    raise SystemExit(main())
