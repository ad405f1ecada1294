#!/usr/bin/env python3
"""
Lightweight exports for treedash.
"""

from .components import Message, SpinningMessage, ProgressBar  # noqa: F401
from .progress import ProgressCell  # noqa: F401
from .dashboard import TreeDash, TreeEditor, erasing_print  # noqa: F401
from .errors import TreeDashError, PoisonedLockError, RenderThreadError, ManagerClosedError  # noqa: F401

__all__ = [
    "Message",
    "SpinningMessage",
    "ProgressBar",
    "ProgressCell",
    "TreeDash",
    "TreeEditor",
    "erasing_print",
    "TreeDashError",
    "PoisonedLockError",
    "RenderThreadError",
    "ManagerClosedError",
]
