"""
Fraction - Exact rational arithmetic for the puzzle screens.

Every puzzle that compares, orders or sums fractions goes through this
type. Floats are only ever produced by to_decimal() for display or
approximate checks; all correctness-critical comparisons are exact.

Design principles:
- Immutable: every operation returns a new Fraction
- Results are always reduced
- Equality is cross-multiplication, independent of reduced form
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from math import gcd
from typing import Iterable


class DivideByZero(ZeroDivisionError):
    """Raised when a fraction would end up with a zero denominator."""


@total_ordering
@dataclass(frozen=True, eq=False)
class Fraction:
    """
    A numerator/denominator pair.

    Construction keeps the values as given (Fraction(2, 4) stays 2/4
    until simplified) but rejects a zero denominator.
    """
    numerator: int
    denominator: int

    def __post_init__(self):
        for value in (self.numerator, self.denominator):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("Fraction components must be integers")
        if self.denominator == 0:
            raise DivideByZero(f"Denominator of {self.numerator}/0 is zero")

    @classmethod
    def from_int(cls, value: int) -> Fraction:
        """Whole number as a fraction over 1."""
        return cls(value, 1)

    @classmethod
    def parse(cls, text: str) -> Fraction:
        """
        Parse "num/den" or a bare integer.

        Raises ValueError for malformed text and DivideByZero for "n/0".
        """
        parts = text.strip().split("/")
        if len(parts) == 1:
            return cls(int(parts[0]), 1)
        if len(parts) != 2:
            raise ValueError(f"Not a fraction: {text!r}")
        return cls(int(parts[0].strip()), int(parts[1].strip()))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def simplify(self) -> Fraction:
        """Reduce by the gcd and force a positive denominator."""
        if self.denominator == 0:
            raise DivideByZero("Cannot simplify a fraction with zero denominator")

        divisor = gcd(self.numerator, self.denominator)
        num = self.numerator // divisor
        den = self.denominator // divisor
        if den < 0:
            num, den = -num, -den
        return Fraction(num, den)

    def add(self, other: Fraction) -> Fraction:
        return Fraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        ).simplify()

    def subtract(self, other: Fraction) -> Fraction:
        return Fraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        ).simplify()

    def multiply(self, other: Fraction) -> Fraction:
        return Fraction(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        ).simplify()

    def divide(self, other: Fraction) -> Fraction:
        """Divide by another fraction; dividing by zero raises DivideByZero."""
        if other.numerator == 0:
            raise DivideByZero(f"Cannot divide {self} by zero")
        return Fraction(
            self.numerator * other.denominator,
            self.denominator * other.numerator,
        ).simplify()

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def equals(self, other: Fraction) -> bool:
        return self.numerator * other.denominator == other.numerator * self.denominator

    def compare(self, other: Fraction) -> int:
        """Exact three-way comparison: -1, 0 or 1."""
        a = self.simplify()
        b = other.simplify()
        left = a.numerator * b.denominator
        right = b.numerator * a.denominator
        return (left > right) - (left < right)

    def to_decimal(self) -> float:
        """Float view, for display and approximate checks only."""
        return self.numerator / self.denominator

    def to_string(self) -> str:
        reduced = self.simplify()
        return f"{reduced.numerator}/{reduced.denominator}"

    @property
    def is_negative(self) -> bool:
        return self.compare(ZERO) < 0

    # Python protocol

    def __eq__(self, other):
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other):
        if not isinstance(other, Fraction):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        reduced = self.simplify()
        return hash((reduced.numerator, reduced.denominator))

    def __add__(self, other: Fraction) -> Fraction:
        return self.add(other)

    def __sub__(self, other: Fraction) -> Fraction:
        return self.subtract(other)

    def __mul__(self, other: Fraction) -> Fraction:
        return self.multiply(other)

    def __truediv__(self, other: Fraction) -> Fraction:
        return self.divide(other)

    def __str__(self):
        return self.to_string()


ZERO = Fraction(0, 1)
ONE = Fraction(1, 1)


def sort_fractions(values: Iterable[Fraction], descending: bool = False) -> list[Fraction]:
    """Return a new list ordered exactly (no float rounding)."""
    return sorted(values, reverse=descending)
