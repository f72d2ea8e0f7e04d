"""Mathematical primitives for LBP calculations.

This package provides:
- UFixed: unsigned binary fixed-point numbers with configurable formats
- log2, ln, exp, pow, powi: fixed-point transcendental functions
"""

from lbpmath.math.fixed_point import (
    U32F32,
    U32F96,
    U64F64,
    U96F32,
    U128F128,
    FixedBalance,
    FixedFormat,
    UFixed,
    round_half_shift,
)
from lbpmath.math.transcendental import exp, ln, log2, pow, powi

__all__ = [
    "FixedFormat",
    "UFixed",
    "round_half_shift",
    "U32F32",
    "U64F64",
    "U96F32",
    "U32F96",
    "U128F128",
    "FixedBalance",
    "log2",
    "ln",
    "exp",
    "pow",
    "powi",
]
