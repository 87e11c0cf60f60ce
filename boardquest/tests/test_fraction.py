"""
Tests for exact fraction arithmetic.

Tests:
- Construction and parsing
- Simplification and sign handling
- Arithmetic results are reduced
- Exact equality, ordering and hashing
"""

import pytest

from ..rational import Fraction, DivideByZero, ZERO, ONE, sort_fractions


class TestConstruction:
    """Tests for building fractions."""

    def test_zero_denominator_rejected(self):
        """A zero denominator never makes it into a Fraction."""
        with pytest.raises(DivideByZero):
            Fraction(1, 0)

    def test_divide_by_zero_is_a_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            Fraction(3, 0)

    def test_values_kept_as_given(self):
        """Construction does not reduce."""
        half = Fraction(2, 4)
        assert half.numerator == 2
        assert half.denominator == 4

    def test_non_integer_components_rejected(self):
        with pytest.raises(TypeError):
            Fraction(1.5, 2)

    def test_bool_components_rejected(self):
        """bool is an int subclass but not a valid component."""
        with pytest.raises(TypeError):
            Fraction(True, 2)
        with pytest.raises(TypeError):
            Fraction(1, True)

    def test_from_int(self):
        assert Fraction.from_int(3) == Fraction(3, 1)

    def test_parse(self):
        assert Fraction.parse("3/4") == Fraction(3, 4)
        assert Fraction.parse(" 6 / 8 ") == Fraction(3, 4)
        assert Fraction.parse("2") == Fraction(2, 1)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Fraction.parse("1/2/3")
        with pytest.raises(ValueError):
            Fraction.parse("a/b")

    def test_parse_zero_denominator(self):
        with pytest.raises(DivideByZero):
            Fraction.parse("1/0")


class TestSimplify:
    """Tests for reduction."""

    def test_reduces_by_gcd(self):
        reduced = Fraction(6, 8).simplify()
        assert (reduced.numerator, reduced.denominator) == (3, 4)

    def test_negative_denominator_moves_sign_up(self):
        reduced = Fraction(1, -2).simplify()
        assert (reduced.numerator, reduced.denominator) == (-1, 2)

    def test_double_negative_is_positive(self):
        reduced = Fraction(-2, -4).simplify()
        assert (reduced.numerator, reduced.denominator) == (1, 2)

    def test_zero_numerator(self):
        reduced = Fraction(0, 5).simplify()
        assert (reduced.numerator, reduced.denominator) == (0, 1)

    def test_simplify_is_idempotent(self):
        once = Fraction(12, -18).simplify()
        twice = once.simplify()
        assert (once.numerator, once.denominator) == (twice.numerator, twice.denominator)

    def test_to_string_is_reduced(self):
        assert Fraction(2, 4).to_string() == "1/2"
        assert str(Fraction(3, -9)) == "-1/3"


class TestArithmetic:
    """Tests for add, subtract, multiply and divide."""

    def test_add(self):
        result = Fraction(1, 2).add(Fraction(1, 3))
        assert (result.numerator, result.denominator) == (5, 6)

    def test_add_result_is_reduced(self):
        result = Fraction(1, 4) + Fraction(1, 4)
        assert (result.numerator, result.denominator) == (1, 2)

    def test_subtract(self):
        result = Fraction(3, 4) - Fraction(1, 4)
        assert (result.numerator, result.denominator) == (1, 2)

    def test_subtract_to_negative(self):
        result = Fraction(1, 4).subtract(Fraction(1, 2))
        assert (result.numerator, result.denominator) == (-1, 4)
        assert result.is_negative

    def test_multiply(self):
        result = Fraction(2, 3) * Fraction(3, 4)
        assert (result.numerator, result.denominator) == (1, 2)

    def test_divide(self):
        result = Fraction(1, 2) / Fraction(1, 4)
        assert (result.numerator, result.denominator) == (2, 1)

    def test_divide_by_negative_keeps_denominator_positive(self):
        result = Fraction(1, 2).divide(Fraction(-1, 3))
        assert (result.numerator, result.denominator) == (-3, 2)

    def test_divide_by_zero(self):
        with pytest.raises(DivideByZero):
            Fraction(1, 2).divide(ZERO)

    def test_add_then_subtract_gives_back_original(self):
        samples = [Fraction(1, 2), Fraction(-2, 3), Fraction(5, 7), Fraction(4, -6), ZERO]
        for a in samples:
            for b in samples:
                assert a.add(b).subtract(b).equals(a)

    def test_operations_do_not_mutate(self):
        a = Fraction(2, 4)
        a.add(ONE)
        a.simplify()
        assert (a.numerator, a.denominator) == (2, 4)


class TestComparison:
    """Tests for exact equality and ordering."""

    def test_equivalent_fractions_are_equal(self):
        assert Fraction(1, 2).equals(Fraction(2, 4))
        assert Fraction(1, 2) == Fraction(3, 6)
        assert Fraction(-1, 2) == Fraction(1, -2)

    def test_different_fractions_not_equal(self):
        assert Fraction(1, 2) != Fraction(2, 3)

    def test_compare(self):
        assert Fraction(1, 3).compare(Fraction(1, 2)) == -1
        assert Fraction(2, 4).compare(Fraction(1, 2)) == 0
        assert Fraction(3, 4).compare(Fraction(2, 3)) == 1

    def test_compare_with_negative_denominator(self):
        assert Fraction(1, -2).compare(ZERO) == -1
        assert Fraction(-1, -2).compare(ZERO) == 1

    def test_ordering_operators(self):
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(5, 6) > Fraction(4, 5)
        assert Fraction(2, 4) <= Fraction(1, 2)

    def test_hash_matches_equality(self):
        assert hash(Fraction(1, 2)) == hash(Fraction(2, 4))
        assert len({Fraction(1, 2), Fraction(2, 4), Fraction(-3, -6)}) == 1

    def test_close_values_are_ordered_exactly(self):
        """Values that collide as floats are still told apart."""
        a = Fraction(10**17 + 1, 10**17)
        b = Fraction(10**17 + 2, 10**17)
        assert a < b

    def test_to_decimal(self):
        assert Fraction(1, 4).to_decimal() == 0.25

    def test_sort_fractions(self):
        values = [Fraction(3, 4), Fraction(1, 3), Fraction(1, 2)]
        assert sort_fractions(values) == [Fraction(1, 3), Fraction(1, 2), Fraction(3, 4)]
        assert sort_fractions(values, descending=True) == [
            Fraction(3, 4), Fraction(1, 2), Fraction(1, 3),
        ]
        # Input untouched
        assert values[0] == Fraction(3, 4)
