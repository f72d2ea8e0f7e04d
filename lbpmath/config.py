"""Math configuration for the LBP formulas."""

from dataclasses import dataclass

from lbpmath.math.fixed_point import FixedBalance, FixedFormat
from lbpmath.safe_int import U32_MAX


@dataclass(frozen=True)
class MathConfig:
    """Centralized configuration for the pricing and weight formulas.

    Attributes:
        fixed_format: Fixed-point representation of the ratios and powers
            used by out_given_in / in_given_out (default: U64F64)
        balance_bits: Width of balances, weights and results (default: 128)
        wide_bits: Width of intermediates that may exceed a balance, such as
            sell_reserve + amount_in (default: 256)
        max_duration: Longest interpolation interval in blocks. Longer
            intervals are rejected as Overflow (default: 2^32 - 1)
    """

    fixed_format: FixedFormat = FixedBalance
    balance_bits: int = 128
    wide_bits: int = 256
    max_duration: int = U32_MAX


# Default configuration instance
DEFAULT_MATH_CONFIG = MathConfig()
