"""
Dice sources.

The state machine only asks for roll(sides). Swap in ScriptedDice to
make a session fully deterministic in tests or replays.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable
import random


class DiceSource(ABC):
    """Uniform integer in [1, sides]."""

    @abstractmethod
    def roll(self, sides: int = 6) -> int:
        pass


class RandomDice(DiceSource):
    """Pseudo-random dice, reproducible when seeded."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def roll(self, sides: int = 6) -> int:
        if sides < 1:
            raise ValueError(f"A die needs at least one side, got {sides}")
        return self.rng.randint(1, sides)


class ScriptedDice(DiceSource):
    """
    Replays a fixed sequence of rolls.

    Raises ValueError when a scripted value does not fit the die, and
    IndexError when the script runs out.
    """

    def __init__(self, values: Iterable[int]):
        self._values = deque(values)
        self.history: list[int] = []

    def roll(self, sides: int = 6) -> int:
        if not self._values:
            raise IndexError("Scripted dice ran out of values")
        value = self._values.popleft()
        if not 1 <= value <= sides:
            raise ValueError(f"Scripted roll {value} does not fit a d{sides}")
        self.history.append(value)
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)
