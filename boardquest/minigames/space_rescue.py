"""
Space rescue - Click asteroids in ascending or descending fraction order.

Ordering is exact (cross-multiplication), so 2/4 and 1/2 rank equal and
clicking either satisfies the target.
"""

from __future__ import annotations
from enum import Enum
import random

from ..engine_core.state import Difficulty
from ..rational import Fraction, sort_fractions

ASTEROID_COUNT = 5


class SortOrder(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class AsteroidOrdering:
    """
    One rescue round.

    Usage:
        round_ = AsteroidOrdering(Difficulty.MEDIUM, rng=random.Random(3))
        for asteroid in round_.target_order:
            round_.check_click(asteroid)
        assert round_.is_round_complete()
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        rng: random.Random | None = None,
        count: int = ASTEROID_COUNT,
    ):
        if count < 1:
            raise ValueError("A round needs at least one asteroid")
        self.difficulty = difficulty
        self.rng = rng or random.Random()
        self.count = count
        self.reset()

    def reset(self) -> None:
        self.sort_order = SortOrder.ASCENDING if self.rng.random() > 0.5 else SortOrder.DESCENDING
        self.asteroids = self._generate_fractions()
        self.target_order = sort_fractions(
            self.asteroids, descending=self.sort_order == SortOrder.DESCENDING
        )
        self.current_target_index = 0

    def _generate_fractions(self) -> list[Fraction]:
        max_den = self.difficulty.max_denominator
        return [
            Fraction(self.rng.randint(1, 8), self.rng.randint(2, max_den)).simplify()
            for _ in range(self.count)
        ]

    def check_click(self, clicked: Fraction) -> bool:
        """Advance when the clicked value is the next one in order."""
        if self.is_round_complete():
            return False
        if clicked.equals(self.target_order[self.current_target_index]):
            self.current_target_index += 1
            return True
        return False

    def is_round_complete(self) -> bool:
        return self.current_target_index >= len(self.target_order)

    @property
    def next_target(self) -> Fraction | None:
        if self.is_round_complete():
            return None
        return self.target_order[self.current_target_index]
