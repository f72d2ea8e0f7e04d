"""Tests for UFixed fixed-point arithmetic."""

from decimal import Decimal

import pytest

from lbpmath.errors import DivisionByZero, Overflow, Underflow
from lbpmath.math.fixed_point import (
    U32F32,
    U64F64,
    FixedBalance,
    FixedFormat,
    UFixed,
    round_half_shift,
)
from tests.helpers import fixed


class TestFixedFormat:
    """Tests for fixed-point format descriptors."""

    def test_properties(self):
        """Derived sizes of U64F64."""
        assert U64F64.total_bits == 128
        assert U64F64.max_bits == 2**128 - 1
        assert U64F64.one_bits == 2**64
        assert str(U32F32) == "U32F32"

    def test_pricing_format_is_u64f64(self):
        """Pricing runs in U64F64."""
        assert FixedBalance == U64F64

    def test_invalid_format_raises(self):
        """Empty or negative formats are rejected."""
        with pytest.raises(ValueError):
            FixedFormat(0, 0)
        with pytest.raises(ValueError):
            FixedFormat(-1, 64)

    def test_can_widen_to(self):
        """Widening needs at least as many bits on both sides."""
        assert U32F32.can_widen_to(U64F64)
        assert U64F64.can_widen_to(U64F64)
        assert not U64F64.can_widen_to(U32F32)
        assert not FixedFormat(96, 32).can_widen_to(U64F64)


class TestUFixedConstruction:
    """Tests for building UFixed values."""

    def test_from_int(self):
        """Integers are scaled by 2^frac_bits."""
        assert UFixed.from_int(3).bits == 3 << 64

    def test_from_bits(self):
        """Raw bits are taken as-is and range checked."""
        assert UFixed.from_bits(1 << 31, U32F32) == UFixed.from_str("0.5", U32F32)
        with pytest.raises(Overflow):
            UFixed.from_bits(1 << 64, U32F32)

    def test_from_int_overflow_raises(self):
        """Integers past the integer part overflow."""
        with pytest.raises(Overflow):
            UFixed.from_int(2**64)
        with pytest.raises(Overflow):
            UFixed.from_int(2**32, U32F32)

    def test_negative_bits_raise(self):
        """Raw bits must be non-negative."""
        with pytest.raises(Underflow):
            UFixed(-1)

    def test_from_str_exact(self):
        """Dyadic fractions parse exactly."""
        assert fixed("1.5") == UFixed(3 << 63)
        assert fixed("0.25").bits == 1 << 62

    def test_from_str_rounds_to_nearest(self):
        """0.1 * 2^64 = 1844674407370955161.6 rounds up."""
        assert fixed("0.1").bits == 1844674407370955162

    def test_from_decimal_negative_raises(self):
        """Negative decimals are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            UFixed.from_decimal(Decimal("-1"))

    def test_to_decimal(self):
        """Decimal conversion is exact."""
        assert UFixed(3 << 63).to_decimal() == Decimal("1.5")
        assert str(fixed("0.25")) == "0.25"

    def test_to_int_truncates(self):
        """to_int drops the fraction."""
        assert fixed("2.75").to_int() == 2
        assert fixed("0.999").to_int() == 0


class TestUFixedArithmetic:
    """Tests for checked fixed-point arithmetic."""

    def test_add_sub(self):
        """Addition and subtraction are exact."""
        assert fixed("1.5").add(fixed("0.25")) == fixed("1.75")
        assert fixed("1.5").sub(fixed("0.25")) == fixed("1.25")

    def test_add_overflow_raises(self):
        """Adding past the max raises Overflow."""
        largest = UFixed(U64F64.max_bits)
        with pytest.raises(Overflow):
            largest.add(largest.lsb)

    def test_sub_underflow_raises(self):
        """Subtracting below zero raises Underflow."""
        with pytest.raises(Underflow):
            fixed(1).sub(fixed(2))

    def test_mul(self):
        """Exact products stay exact."""
        assert fixed("1.5").mul(fixed("1.5")) == fixed("2.25")

    def test_mul_truncates(self):
        """lsb * lsb = 2^-128, truncated to 0."""
        lsb = UFixed(1)
        assert lsb.mul(lsb).is_zero()

    def test_mul_overflow_raises(self):
        """Products past 64 integer bits overflow."""
        with pytest.raises(Overflow):
            fixed(2**32).mul(fixed(2**32))

    def test_div(self):
        """Division truncates."""
        assert fixed(3).div(fixed(2)) == fixed("1.5")
        assert fixed(1).div(fixed(3)).bits == (1 << 64) // 3

    def test_div_by_zero_raises(self):
        """Dividing by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            fixed(1).div(UFixed.zero())

    def test_div_overflow_raises(self):
        """Quotients past the max overflow."""
        with pytest.raises(Overflow):
            fixed(2**63).div(UFixed(1))

    def test_mixed_formats_widen_right_operand(self):
        """A narrower right operand is widened before the operation."""
        result = fixed(1).add(UFixed.from_int(2, U32F32))
        assert result == fixed(3)
        assert result.fmt == U64F64

    def test_wider_right_operand_raises(self):
        """A wider right operand cannot be coerced."""
        with pytest.raises(ValueError):
            UFixed.from_int(1, U32F32).add(fixed(1))


class TestUFixedConversion:
    """Tests for conversions between formats."""

    def test_widen_is_lossless(self):
        """Widening keeps the logical value."""
        narrow = UFixed.from_str("1.5", U32F32)
        wide = narrow.widen(U64F64)
        assert wide.fmt == U64F64
        assert wide == fixed("1.5")

    def test_widen_to_narrower_raises(self):
        """widen refuses to lose bits."""
        with pytest.raises(ValueError):
            fixed(1).widen(U32F32)

    def test_narrow(self):
        """Narrowing keeps values that fit."""
        assert fixed("1.5").narrow(U32F32) == UFixed.from_str("1.5", U32F32)

    def test_narrow_truncates_fraction(self):
        """Surplus fractional bits are dropped."""
        assert UFixed(1).narrow(U32F32).is_zero()

    def test_narrow_overflow_raises(self):
        """Integer parts that do not fit overflow."""
        with pytest.raises(Overflow):
            fixed(2**40).narrow(U32F32)


class TestUFixedComparison:
    """Values compare by logical value, across formats."""

    def test_cross_format_equality(self):
        """Equal logical values compare equal across formats."""
        assert UFixed.from_int(1, U32F32) == fixed(1)
        assert UFixed.from_str("0.5", U32F32) < fixed(1)
        assert fixed(2) > UFixed.from_int(1, U32F32)

    def test_ordering(self):
        """Ordering follows logical values."""
        assert fixed("0.5") <= fixed("0.5")
        assert fixed("0.75") >= fixed("0.5")
        assert not fixed(1) < fixed("0.5")

    def test_not_equal_to_int(self):
        """UFixed never equals a plain int."""
        assert fixed(1) != 1


class TestRoundHalfShift:
    """Tests for the rounding halving step."""

    def test_even_halves_exactly(self):
        """Even raw values halve without rounding."""
        assert round_half_shift(UFixed(4)).bits == 2
        assert round_half_shift(fixed(3)) == fixed("1.5")

    def test_odd_rounds_up(self):
        """The shifted-out 1 adds back one lsb."""
        assert round_half_shift(UFixed(5)).bits == 3
        assert round_half_shift(UFixed(1)).bits == 1

    def test_keeps_format(self):
        """The result stays in the operand's format."""
        assert round_half_shift(UFixed.from_int(4, U32F32)).fmt == U32F32
