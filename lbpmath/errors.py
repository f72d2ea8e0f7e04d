"""LBP math error classes.

Every failing call raises exactly one MathError subclass. The error kind is
a closed set; diagnostic subclasses (Underflow, DivisionByZero, ...) report
the kind of their parent so callers can match on ``exc.kind`` alone.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported to callers."""

    ZERO_IN_RESERVE = "ZeroInReserve"
    ZERO_OUT_RESERVE = "ZeroOutReserve"
    ZERO_IN_WEIGHT = "ZeroInWeight"
    ZERO_OUT_WEIGHT = "ZeroOutWeight"
    ZERO_DURATION = "ZeroDuration"
    OVERFLOW = "Overflow"


class MathError(ArithmeticError):
    """Base error for LBP math operations."""

    kind: ClassVar[ErrorKind]


class ZeroInReserve(MathError):
    """Sell-side reserve is zero; the price denominator would be zero."""

    kind = ErrorKind.ZERO_IN_RESERVE


class ZeroOutReserve(MathError):
    """Buy-side reserve is zero; there is nothing to buy."""

    kind = ErrorKind.ZERO_OUT_RESERVE


class ZeroInWeight(MathError):
    """Sell-side weight is zero; the buy exponent is undefined."""

    kind = ErrorKind.ZERO_IN_WEIGHT


class ZeroOutWeight(MathError):
    """Buy-side weight is zero; the sell exponent is undefined."""

    kind = ErrorKind.ZERO_OUT_WEIGHT


class ZeroDuration(MathError):
    """Interpolation interval has zero length."""

    kind = ErrorKind.ZERO_DURATION


class Overflow(MathError):
    """Checked arithmetic overflow or an input outside the defined domain."""

    kind = ErrorKind.OVERFLOW


class Underflow(Overflow):
    """Unsigned subtraction would produce a negative result."""


class DivisionByZero(Overflow):
    """Division or modulo by zero."""


class UndefinedInput(Overflow):
    """Logarithm of a non-positive value."""


class InsufficientLiquidity(Overflow):
    """Requested output is not smaller than the buy-side reserve."""
