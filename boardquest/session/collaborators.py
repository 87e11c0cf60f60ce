"""
External collaborators of the game loop.

The loop never sleeps or navigates on its own; it asks a Sleeper to
pace visual effects and a ScreenSwitcher to change screens. Both are
replaceable so tests run instantly and record what happened.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import asyncio

from ..engine_core.action import ScreenDescriptor


class Sleeper(ABC):
    """Completes after a given number of milliseconds."""

    @abstractmethod
    async def sleep(self, milliseconds: int) -> None:
        pass

    def cancel_all(self) -> int:
        """Cancel pending delays. Returns how many were cancelled."""
        return 0


class AsyncioSleeper(Sleeper):
    """
    asyncio-backed delays that can be torn down.

    Every pending delay is tracked so cancel_all() can clear them when a
    session is abandoned; the suspended command then ends with
    CancelledError instead of resuming against torn-down state.
    """

    def __init__(self):
        self._pending: set[asyncio.Task] = set()

    async def sleep(self, milliseconds: int) -> None:
        if milliseconds <= 0:
            return
        task = asyncio.ensure_future(asyncio.sleep(milliseconds / 1000))
        self._pending.add(task)
        try:
            await task
        finally:
            self._pending.discard(task)

    def cancel_all(self) -> int:
        cancelled = 0
        for task in list(self._pending):
            if not task.done():
                task.cancel()
                cancelled += 1
        return cancelled

    @property
    def pending_count(self) -> int:
        return len(self._pending)


class NoDelaySleeper(Sleeper):
    """Records requested delays without waiting."""

    def __init__(self):
        self.requested: list[int] = []

    async def sleep(self, milliseconds: int) -> None:
        self.requested.append(milliseconds)

    @property
    def total_ms(self) -> int:
        return sum(self.requested)


class ScreenSwitcher(ABC):
    """Navigates the presentation layer to another screen."""

    @abstractmethod
    def switch_to_screen(self, descriptor: ScreenDescriptor) -> None:
        pass


class RecordingScreenSwitcher(ScreenSwitcher):
    """Keeps every switch; the last one is the screen being shown."""

    def __init__(self):
        self.history: list[ScreenDescriptor] = []

    def switch_to_screen(self, descriptor: ScreenDescriptor) -> None:
        self.history.append(descriptor)

    @property
    def current(self) -> ScreenDescriptor | None:
        return self.history[-1] if self.history else None
