"""Fixed-point logarithm, exponential and power functions.

Every function takes its operand in some source format S and computes the
result in a destination format D (keyword ``dst``, defaults to S). D must be
a widening of S. All values are unsigned; the sign of a logarithm is
returned as a separate ``is_negative`` flag and fed back into ``exp``.

Failures raise a MathError subclass of kind Overflow:
- UndefinedInput for the logarithm of zero
- Overflow / DivisionByZero when an intermediate leaves the format's range
"""

from __future__ import annotations

from lbpmath.errors import UndefinedInput
from lbpmath.safe_int import U32_MAX

from .fixed_point import FixedFormat, UFixed, round_half_shift

__all__ = [
    "log2",
    "ln",
    "exp",
    "pow",
    "powi",
    "LOG2_E",
    "E",
]

LOG2_E = "1.442695"
E = "2.718281828459045235360287471352662497757"


def _resolve_dst(operand: UFixed, dst: FixedFormat | None) -> FixedFormat:
    if dst is None:
        return operand.fmt
    if not operand.fmt.can_widen_to(dst):
        raise ValueError(f"Destination {dst} is not a widening of {operand.fmt}")
    return dst


def _log2_inner(x: UFixed) -> UFixed:
    """Base-2 logarithm of x >= 1, in x's format.

    The integer part counts the halvings needed to bring x below 2; each
    halving adds one raw unit to ``result``. The fractional bits are then
    extracted one at a time by repeated squaring.
    """
    fmt = x.fmt
    one = UFixed.one(fmt)
    two = UFixed.from_int(2, fmt)
    result = 0

    while x >= two:
        result += 1
        x = round_half_shift(x)

    if x == one:
        return UFixed.from_int(result, fmt)

    for _ in range(fmt.frac_bits):
        x = x.mul(x)
        result <<= 1
        if x >= two:
            result |= 1
            x = round_half_shift(x)

    return UFixed(result, fmt)


def log2(operand: UFixed, *, dst: FixedFormat | None = None) -> tuple[UFixed, bool]:
    """Base-2 logarithm.

    Args:
        operand: Value to take the logarithm of (must be positive)
        dst: Result format (defaults to the operand's format)

    Returns:
        Tuple of (magnitude, is_negative). is_negative is True iff operand < 1.

    Raises:
        UndefinedInput: If operand is zero
        Overflow: If 1/operand does not fit the result format
    """
    fmt = _resolve_dst(operand, dst)
    if operand.is_zero():
        raise UndefinedInput("log2 is undefined for 0")

    x = operand.widen(fmt)
    one = UFixed.one(fmt)
    if x < one:
        # log2(x) = -log2(1/x)
        return _log2_inner(one.div(x)), True
    return _log2_inner(x), False


def ln(operand: UFixed, *, dst: FixedFormat | None = None) -> tuple[UFixed, bool]:
    """Natural logarithm, computed as log2(operand) / log2(e).

    Returns:
        Tuple of (magnitude, is_negative). is_negative is True iff operand < 1.

    Raises:
        UndefinedInput: If operand is zero
    """
    fmt = _resolve_dst(operand, dst)
    log2_e = UFixed.from_str(LOG2_E, operand.fmt).widen(fmt)
    magnitude, is_negative = log2(operand, dst=fmt)
    return magnitude.div(log2_e), is_negative


def exp(
    operand: UFixed, is_negative: bool = False, *, dst: FixedFormat | None = None
) -> UFixed:
    """Exponential function e^operand (or e^-operand if is_negative).

    Uses the Taylor series 1 + x + x^2/2! + ... truncated after
    ``dst.frac_bits - 1`` terms.

    Raises:
        Overflow: If any term or the running sum leaves the result format
    """
    fmt = _resolve_dst(operand, dst)
    one = UFixed.one(fmt)
    if operand.is_zero():
        return one
    if operand.bits == operand.fmt.one_bits and not is_negative:
        return UFixed.from_str(E, operand.fmt).widen(fmt)

    x = operand.widen(fmt)
    result = x.add(one)
    term = x
    for i in range(2, fmt.frac_bits):
        term = term.mul(x).div(UFixed.from_int(i, fmt))
        result = result.add(term)

    if is_negative:
        result = one.div(result)
    return result


def pow(operand: UFixed, exponent: UFixed, *, dst: FixedFormat | None = None) -> UFixed:
    """Power with a fixed-point exponent: exp(exponent * ln(operand)).

    Args:
        operand: Base
        exponent: Exponent (same format as operand)
        dst: Result format (defaults to the operand's format)

    Returns:
        operand^exponent in dst

    Raises:
        Overflow: If an intermediate value or the result does not fit dst
    """
    fmt = _resolve_dst(operand, dst)
    if operand.is_zero():
        return UFixed.zero(fmt)
    if exponent.is_zero():
        return UFixed.one(fmt)
    if exponent.bits == exponent.fmt.one_bits:
        return operand.widen(fmt)

    magnitude, is_negative = ln(operand, dst=fmt)
    product = magnitude.mul(exponent.widen(fmt))
    return exp(product, is_negative, dst=fmt)


def powi(operand: UFixed, exponent: int, *, dst: FixedFormat | None = None) -> UFixed:
    """Power with an unsigned 32-bit integer exponent, by repeated multiplication.

    The loop stops early once the truncated product stops changing, which
    covers 1.0 and results that have truncated to zero.

    Raises:
        ValueError: If exponent is not in [0, 2^32 - 1]
        Overflow: If any product does not fit dst
    """
    if not 0 <= exponent <= U32_MAX:
        raise ValueError(f"powi exponent must be a u32, got {exponent}")
    fmt = _resolve_dst(operand, dst)
    if operand.is_zero():
        return UFixed.zero(fmt)
    if exponent == 0:
        return UFixed.one(fmt)

    x = operand.widen(fmt)
    result = x
    for _ in range(exponent - 1):
        product = result.mul(x)
        # Once a product repeats, every later product repeats too
        if product.bits == result.bits:
            break
        result = product
    return result
