"""
Pizza assembler - Fill a whole pizza out of fraction slices.

The pizza starts with a random option already in place; each click adds
a slice. A slice that would push the total past one whole is refused
and leaves the pizza unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random

from ..rational import Fraction, ZERO, ONE


class AddOutcome(Enum):
    OVERFLOW = "overflow"
    PARTIAL = "partial"
    COMPLETED = "completed"


@dataclass(frozen=True)
class AddResult:
    kind: AddOutcome
    previous: Fraction
    current: Fraction
    remaining: Fraction

    @property
    def completed(self) -> bool:
        return self.kind == AddOutcome.COMPLETED


class PizzaAssembler:
    def __init__(self, options: list[Fraction], rng: random.Random | None = None):
        if not options:
            raise ValueError("Pizza assembler needs at least one slice option")
        for option in options:
            if option.compare(ZERO) <= 0 or option.compare(ONE) > 0:
                raise ValueError(f"Slice {option} must be within (0, 1]")
        self.options = [o.simplify() for o in options]
        self.rng = rng or random.Random()
        self.current = ZERO
        self.pizzas_completed = 0

    def reset_with_random_start(self) -> Fraction:
        """Start a fresh pizza pre-filled with one random option."""
        self.current = self.rng.choice(self.options)
        return self.current

    def remaining(self) -> Fraction:
        return ONE.subtract(self.current)

    def can_add(self, slice_: Fraction) -> bool:
        return self.current.add(slice_).compare(ONE) <= 0

    def add_slice(self, slice_: Fraction) -> AddResult:
        previous = self.current
        if not self.can_add(slice_):
            return AddResult(AddOutcome.OVERFLOW, previous, previous, self.remaining())

        self.current = self.current.add(slice_)
        if self.current.equals(ONE):
            self.pizzas_completed += 1
            return AddResult(AddOutcome.COMPLETED, previous, self.current, ZERO)

        return AddResult(AddOutcome.PARTIAL, previous, self.current, self.remaining())

    def reset_counters(self) -> None:
        self.pizzas_completed = 0
