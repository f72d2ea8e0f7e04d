"""Liquidity bootstrapping pool formulas.

Pricing (spot price, out-given-in, in-given-out), the linear weight
schedule, fee helpers and pool-level quotes.
"""

# Fees
from .fees import Fee, add_fee_amount, calculate_fee, subtract_fee_amount

# Pool quotes
from .pool import MAX_WEIGHT, LBPPool, SwapQuote

# Pricing
from .pricing import in_given_out, out_given_in, spot_price

# Weight schedule
from .weights import linear_weights

__all__ = [
    # Pricing
    "spot_price",
    "out_given_in",
    "in_given_out",
    # Weight schedule
    "linear_weights",
    # Fees
    "Fee",
    "calculate_fee",
    "subtract_fee_amount",
    "add_fee_amount",
    # Pool quotes
    "LBPPool",
    "SwapQuote",
    "MAX_WEIGHT",
]
