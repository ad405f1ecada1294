#!/usr/bin/env python3
"""
Exceptions raised by TreeDash.

Lock contention is never an error; these only cover broken display state.
"""


class TreeDashError(Exception):
    """Base class for all TreeDash errors."""


class PoisonedLockError(TreeDashError):
    """A lock whose holder raised while holding it; its data is not trustworthy."""

    def __init__(self, name: str):
        super().__init__(f"Poisoned lock '{name}': a previous holder raised while holding it")
        self.name = name


class RenderThreadError(TreeDashError):
    """The render thread could not be started or died with an exception."""


class ManagerClosedError(TreeDashError):
    """A mutation was attempted after the manager was torn down."""
