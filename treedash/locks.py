#!/usr/bin/env python3
"""
The two synchronization primitives behind TreeDash.

  - ReadWriteLock  : guards the tree contents. The render thread reads once
                     per frame; mutations write.
  - SchedulingGate : a condition variable the render thread holds while it
                     draws and releases only while it sleeps between frames.
                     A mutation must pass the gate first, so it can only run
                     while the render thread is parked.

Both are poisoned when a holder raises while holding them. Every later
acquire then raises PoisonedLockError instead of trusting the guarded state.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .errors import PoisonedLockError


class _DebugLockMixin:
    name: str
    logger: Optional[logging.Logger]
    debug: bool

    def _trace(self, event: str, who: str) -> None:
        if self.debug and self.logger:
            self.logger.debug(f"LOCK: {event} '{self.name}' ({who})")


class ReadWriteLock(_DebugLockMixin):
    """Many readers or one writer. Not reentrant."""

    def __init__(self, name: str = "tree", *, logger: Optional[logging.Logger] = None, debug: bool = False):
        self.name = name
        self.logger = logger
        self.debug = bool(debug)
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def _check(self) -> None:
        if self._poisoned:
            raise PoisonedLockError(self.name)

    @contextmanager
    def read(self, who: str = "reader") -> Iterator[None]:
        self._trace("Waiting for read", who)
        with self._cond:
            self._check()
            while self._writer:
                self._cond.wait()
            self._check()
            self._readers += 1
        self._trace("Acquired read", who)
        try:
            yield
        except BaseException:
            self._poisoned = True
            raise
        finally:
            self._trace("Releasing read", who)
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self, who: str = "writer") -> Iterator[None]:
        self._trace("Waiting for write", who)
        with self._cond:
            self._check()
            while self._writer or self._readers:
                self._cond.wait()
            self._check()
            self._writer = True
        self._trace("Acquired write", who)
        try:
            yield
        except BaseException:
            self._poisoned = True
            raise
        finally:
            self._trace("Releasing write", who)
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SchedulingGate(_DebugLockMixin):
    """Mutex + condition variable pairing the render thread with mutations."""

    def __init__(self, name: str = "schedule", *, logger: Optional[logging.Logger] = None, debug: bool = False):
        self.name = name
        self.logger = logger
        self.debug = bool(debug)
        self._cond = threading.Condition()
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def hold(self, who: str) -> Iterator[None]:
        self._trace("Waiting for", who)
        self._cond.acquire()
        try:
            if self._poisoned:
                raise PoisonedLockError(self.name)
            self._trace("Acquired", who)
            try:
                yield
            except BaseException:
                self._poisoned = True
                raise
        finally:
            self._trace("Releasing", who)
            self._cond.release()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Sleep until notified or `timeout` elapses. Caller must be inside `hold()`."""
        notified = self._cond.wait(timeout)
        if self._poisoned:
            raise PoisonedLockError(self.name)
        return notified

    def notify_all(self) -> None:
        """Wake every waiter. Works on a poisoned gate so teardown can still reach the render thread."""
        with self._cond:
            self._cond.notify_all()
