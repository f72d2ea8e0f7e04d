"""Fixed-point math for liquidity bootstrapping pools."""

from lbpmath.errors import (
    DivisionByZero,
    ErrorKind,
    InsufficientLiquidity,
    MathError,
    Overflow,
    UndefinedInput,
    Underflow,
    ZeroDuration,
    ZeroInReserve,
    ZeroInWeight,
    ZeroOutReserve,
    ZeroOutWeight,
)
from lbpmath.lbp import (
    Fee,
    LBPPool,
    SwapQuote,
    in_given_out,
    linear_weights,
    out_given_in,
    spot_price,
)

__version__ = "0.1.0"
__all__ = [
    # Pricing
    "spot_price",
    "out_given_in",
    "in_given_out",
    "linear_weights",
    # Pools
    "Fee",
    "LBPPool",
    "SwapQuote",
    # Errors
    "ErrorKind",
    "MathError",
    "ZeroInReserve",
    "ZeroOutReserve",
    "ZeroInWeight",
    "ZeroOutWeight",
    "ZeroDuration",
    "Overflow",
    "Underflow",
    "DivisionByZero",
    "UndefinedInput",
    "InsufficientLiquidity",
    "__version__",
]
