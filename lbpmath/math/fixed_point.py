"""Unsigned binary fixed-point numbers.

A FixedFormat describes a type with a fixed total width and a fixed number
of fractional bits, e.g. U64F64 has 64 integer bits and 64 fractional bits.
A UFixed value stores the raw bits; its logical value is
``bits / 2**frac_bits``. Values are never negative.

Multiplication and division truncate, matching the usual behaviour of
fixed-point libraries. Every operation that could leave the format's range
raises Overflow instead of wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

from lbpmath.errors import DivisionByZero, Overflow, Underflow

__all__ = [
    # Classes
    "FixedFormat",
    "UFixed",
    # Functions
    "round_half_shift",
    # Formats
    "U32F32",
    "U64F64",
    "U96F32",
    "U32F96",
    "U128F128",
    "FixedBalance",
]


@dataclass(frozen=True)
class FixedFormat:
    """Unsigned fixed-point representation.

    Attributes:
        int_bits: Number of integer bits
        frac_bits: Number of fractional bits
    """

    int_bits: int
    frac_bits: int

    def __post_init__(self) -> None:
        if self.int_bits < 0 or self.frac_bits < 0 or self.int_bits + self.frac_bits == 0:
            raise ValueError(f"Invalid fixed-point format U{self.int_bits}F{self.frac_bits}")

    @property
    def total_bits(self) -> int:
        return self.int_bits + self.frac_bits

    @property
    def max_bits(self) -> int:
        """Largest raw value representable in this format."""
        return (1 << self.total_bits) - 1

    @property
    def one_bits(self) -> int:
        """Raw value of 1.0 (may not be representable when int_bits == 0)."""
        return 1 << self.frac_bits

    def can_widen_to(self, other: FixedFormat) -> bool:
        """True if every value of this format is exactly representable in other."""
        return other.int_bits >= self.int_bits and other.frac_bits >= self.frac_bits

    def __str__(self) -> str:
        return f"U{self.int_bits}F{self.frac_bits}"


U32F32 = FixedFormat(32, 32)
U64F64 = FixedFormat(64, 64)
U96F32 = FixedFormat(96, 32)
U32F96 = FixedFormat(32, 96)
U128F128 = FixedFormat(128, 128)

# Representation used by the LBP pricing formulas
FixedBalance = U64F64


class UFixed:
    """Unsigned fixed-point number stored as raw bits.

    Example: in U64F64, 1.5 is stored as 3 << 63.
    """

    __slots__ = ("bits", "fmt")
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    bits: int
    fmt: FixedFormat

    def __init__(self, bits: int, fmt: FixedFormat = FixedBalance) -> None:
        """Create from raw bits.

        Raises:
            Overflow: If bits do not fit the format
        """
        if bits < 0:
            raise Underflow(f"Negative raw value cannot be {fmt}: {bits}")
        if bits > fmt.max_bits:
            raise Overflow(f"Raw value {bits} exceeds {fmt} max")
        self.bits = bits
        self.fmt = fmt

    # --- Construction ---

    @classmethod
    def from_bits(cls, bits: int, fmt: FixedFormat = FixedBalance) -> UFixed:
        return cls(bits, fmt)

    @classmethod
    def from_int(cls, i: int, fmt: FixedFormat = FixedBalance) -> UFixed:
        """Create from an integer (scaled by 2^frac_bits)."""
        return cls(i << fmt.frac_bits, fmt)

    @classmethod
    def zero(cls, fmt: FixedFormat = FixedBalance) -> UFixed:
        return cls(0, fmt)

    @classmethod
    def one(cls, fmt: FixedFormat = FixedBalance) -> UFixed:
        return cls.from_int(1, fmt)

    @classmethod
    def from_decimal(cls, d: Decimal, fmt: FixedFormat = FixedBalance) -> UFixed:
        """Create from a Decimal, rounding to the nearest representable value.

        Ties round to even. Requires non-negative input.
        """
        if d < 0:
            raise ValueError(f"UFixed.from_decimal requires non-negative input, got {d}")
        with localcontext() as ctx:
            ctx.prec = max(60, fmt.total_bits)
            scaled = (d * (1 << fmt.frac_bits)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
        return cls(int(scaled), fmt)

    @classmethod
    def from_str(cls, s: str, fmt: FixedFormat = FixedBalance) -> UFixed:
        """Parse a decimal string such as "1.442695"."""
        return cls.from_decimal(Decimal(s), fmt)

    # --- Conversion ---

    def to_decimal(self) -> Decimal:
        """Convert to Decimal (exact for formats up to ~100 fractional bits)."""
        with localcontext() as ctx:
            ctx.prec = max(60, self.fmt.total_bits)
            return Decimal(self.bits) / Decimal(1 << self.fmt.frac_bits)

    def to_int(self) -> int:
        """Integer part (truncates the fraction)."""
        return self.bits >> self.fmt.frac_bits

    def widen(self, fmt: FixedFormat) -> UFixed:
        """Lossless conversion into a format at least as wide on both sides.

        Raises:
            ValueError: If fmt is not a widening of this value's format
        """
        if not self.fmt.can_widen_to(fmt):
            raise ValueError(f"Cannot widen {self.fmt} to {fmt}")
        return UFixed(self.bits << (fmt.frac_bits - self.fmt.frac_bits), fmt)

    def narrow(self, fmt: FixedFormat) -> UFixed:
        """Convert into any format, truncating surplus fractional bits.

        Raises:
            Overflow: If the integer part does not fit fmt
        """
        shift = fmt.frac_bits - self.fmt.frac_bits
        bits = self.bits << shift if shift >= 0 else self.bits >> -shift
        if bits > fmt.max_bits:
            raise Overflow(f"{self} does not fit {fmt}")
        return UFixed(bits, fmt)

    # --- Arithmetic ---

    @property
    def lsb(self) -> UFixed:
        """Smallest positive value of this format."""
        return UFixed(1, self.fmt)

    def is_zero(self) -> bool:
        return self.bits == 0

    def _coerce(self, other: UFixed) -> int:
        """Raw bits of other expressed in this format (must be lossless)."""
        if other.fmt == self.fmt:
            return other.bits
        return other.widen(self.fmt).bits

    def add(self, other: UFixed) -> UFixed:
        """Checked addition."""
        result = self.bits + self._coerce(other)
        if result > self.fmt.max_bits:
            raise Overflow(f"Overflow: {self} + {other} exceeds {self.fmt}")
        return UFixed(result, self.fmt)

    def sub(self, other: UFixed) -> UFixed:
        """Checked subtraction."""
        result = self.bits - self._coerce(other)
        if result < 0:
            raise Underflow(f"Underflow: {self} - {other}")
        return UFixed(result, self.fmt)

    def mul(self, other: UFixed) -> UFixed:
        """Checked multiplication, truncating the product."""
        result = (self.bits * self._coerce(other)) >> self.fmt.frac_bits
        if result > self.fmt.max_bits:
            raise Overflow(f"Overflow: {self} * {other} exceeds {self.fmt}")
        return UFixed(result, self.fmt)

    def div(self, other: UFixed) -> UFixed:
        """Checked division, truncating the quotient."""
        divisor = self._coerce(other)
        if divisor == 0:
            raise DivisionByZero(f"Division by zero: {self} / 0")
        result = (self.bits << self.fmt.frac_bits) // divisor
        if result > self.fmt.max_bits:
            raise Overflow(f"Overflow: {self} / {other} exceeds {self.fmt}")
        return UFixed(result, self.fmt)

    # --- Comparison (by logical value, across formats) ---

    def _cmp_key(self, other: UFixed) -> tuple[int, int]:
        return (
            self.bits << other.fmt.frac_bits,
            other.bits << self.fmt.frac_bits,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UFixed):
            return NotImplemented
        a, b = self._cmp_key(other)
        return a == b

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UFixed):
            return NotImplemented
        a, b = self._cmp_key(other)
        return a < b

    def __le__(self, other: object) -> bool:
        if not isinstance(other, UFixed):
            return NotImplemented
        a, b = self._cmp_key(other)
        return a <= b

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, UFixed):
            return NotImplemented
        a, b = self._cmp_key(other)
        return a > b

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, UFixed):
            return NotImplemented
        a, b = self._cmp_key(other)
        return a >= b

    def __repr__(self) -> str:
        return f"UFixed({self.bits}, {self.fmt})"

    def __str__(self) -> str:
        return str(self.to_decimal())


def round_half_shift(x: UFixed) -> UFixed:
    """Halve x, rounding to nearest.

    Computes ``x >> 1`` and adds back one lsb when the bit shifted out was set.
    """
    return UFixed((x.bits >> 1) + (x.bits & 1), x.fmt)
