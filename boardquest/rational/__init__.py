"""
Rational - Exact fraction arithmetic shared by every puzzle screen.
"""

from .fraction import Fraction, DivideByZero, ZERO, ONE, sort_fractions

__all__ = [
    "Fraction",
    "DivideByZero",
    "ZERO",
    "ONE",
    "sort_fractions",
]
