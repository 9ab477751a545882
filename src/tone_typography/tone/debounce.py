# src/tone_typography/tone/debounce.py

"""
Single-slot debounce timer on the running asyncio loop.

State is a tagged union: ``Idle()`` or ``Scheduled(deadline)``. Scheduling always
cancels the live handle before installing a new one, so at most one timer exists.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["Idle", "Scheduled", "DebounceState", "Debouncer"]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Scheduled:
    deadline: float  # loop.time() at which the callback fires


DebounceState = Idle | Scheduled


class Debouncer:
    """Coalesce bursts of calls into one callback after ``delay`` seconds of quiet."""

    def __init__(self, delay: float):
        self.delay = delay
        self.state: DebounceState = Idle()
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return isinstance(self.state, Scheduled)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.state = Idle()

    def schedule(self, callback: Callable[[], None]) -> Scheduled:
        """Replace any pending timer with a new one; must run inside the event loop."""
        self.cancel()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.delay
        self._handle = loop.call_at(deadline, self._fire, callback)
        self.state = Scheduled(deadline)
        return self.state

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        self.state = Idle()
        callback()
