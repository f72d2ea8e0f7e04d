"""LBP pricing formulas.

Spot price and trade sizing for a two-asset weighted pool. Balances and
weights are unsigned 128-bit integers; ratios and powers are evaluated in
the configured fixed-point format (U64F64 by default).
"""

from __future__ import annotations

import structlog

from lbpmath.config import DEFAULT_MATH_CONFIG, MathConfig
from lbpmath.errors import (
    InsufficientLiquidity,
    MathError,
    Overflow,
    ZeroInReserve,
    ZeroOutWeight,
)
from lbpmath.math.fixed_point import FixedFormat, UFixed
from lbpmath.math.transcendental import pow
from lbpmath.safe_int import SafeUint

logger = structlog.get_logger()


def _div_to_fixed(
    numerator: SafeUint,
    denominator: SafeUint,
    fmt: FixedFormat,
    error: type[MathError],
    message: str,
) -> UFixed:
    """numerator / denominator as a truncated fixed-point value.

    Raises:
        error: If denominator is zero
        Overflow: If the quotient does not fit fmt
    """
    if not denominator:
        raise error(message)
    bits = (numerator.value << fmt.frac_bits) // denominator.value
    if bits > fmt.max_bits:
        raise Overflow(f"Ratio {numerator}/{denominator} does not fit {fmt}")
    return UFixed(bits, fmt)


def _mul_fixed(value: SafeUint, factor: UFixed) -> SafeUint:
    """Truncated value * factor, checked against value's width."""
    return SafeUint((value.value * factor.bits) >> factor.fmt.frac_bits, value.bits)


def _weighted_pow(base: UFixed, exponent: UFixed) -> UFixed:
    try:
        return pow(base, exponent)
    except MathError as exc:
        logger.debug("lbp_pow_failed", base=str(base), exponent=str(exponent), error=str(exc))
        raise Overflow(f"pow({base}, {exponent}) failed: {exc}") from exc


def spot_price(
    sell_reserve: int,
    buy_reserve: int,
    sell_weight: int,
    buy_weight: int,
    amount: int,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> int:
    """Calculate the spot price of ``amount`` sell-asset units in the buy asset.

    Formula:
        amount * buy_reserve * sell_weight / (sell_reserve * buy_weight)

    Every intermediate is checked against 128 bits; the division truncates.

    Args:
        sell_reserve: Reserve of the asset being sold
        buy_reserve: Reserve of the asset being bought
        sell_weight: Weight of the asset being sold
        buy_weight: Weight of the asset being bought
        amount: Amount of the asset being sold

    Returns:
        Amount of the buy asset at the current marginal price

    Raises:
        ZeroInReserve: If sell_reserve is zero
        Overflow: If an input or intermediate product exceeds 128 bits, or
            buy_weight is zero while the numerator is not
    """
    bits = config.balance_bits
    s_reserve, b_reserve = SafeUint(sell_reserve, bits), SafeUint(buy_reserve, bits)
    s_weight, b_weight = SafeUint(sell_weight, bits), SafeUint(buy_weight, bits)
    s_amount = SafeUint(amount, bits)

    if not s_reserve:
        logger.debug("lbp_zero_in_reserve", buy_reserve=buy_reserve, amount=amount)
        raise ZeroInReserve("sell_reserve must be positive")

    if not s_amount or not b_reserve:
        return 0

    numerator = s_amount * b_reserve * s_weight
    denominator = s_reserve * b_weight
    return (numerator // denominator).value


def out_given_in(
    sell_reserve: int,
    buy_reserve: int,
    sell_weight: int,
    buy_weight: int,
    amount_in: int,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> int:
    """Calculate the output amount for a given input (sell order).

    Formula:
        amount_out = buy_reserve * (1 - (sell_reserve / (sell_reserve + amount_in))^(sell_weight / buy_weight))

    Args:
        sell_reserve: Reserve of the asset being sold
        buy_reserve: Reserve of the asset being bought
        sell_weight: Weight of the asset being sold
        buy_weight: Weight of the asset being bought (must be positive)
        amount_in: Amount sold into the pool

    Returns:
        Amount of the buy asset paid out, truncated

    Raises:
        ZeroOutWeight: If buy_weight is zero
        Overflow: If any step overflows, including within pow
    """
    bits, fmt = config.balance_bits, config.fixed_format
    s_reserve, b_reserve = SafeUint(sell_reserve, bits), SafeUint(buy_reserve, bits)
    s_weight, b_weight = SafeUint(sell_weight, bits), SafeUint(buy_weight, bits)
    s_amount = SafeUint(amount_in, bits)

    weight_ratio = _div_to_fixed(
        s_weight, b_weight, fmt, ZeroOutWeight, "buy_weight must be positive"
    )

    new_sell_reserve = s_reserve.cast(config.wide_bits) + s_amount
    base = _div_to_fixed(
        s_reserve, new_sell_reserve, fmt, Overflow, "sell_reserve + amount_in is zero"
    )

    power = _weighted_pow(base, weight_ratio)
    new_buy_reserve = _mul_fixed(b_reserve.cast(config.wide_bits), power)

    return (b_reserve - new_buy_reserve).value


def in_given_out(
    sell_reserve: int,
    buy_reserve: int,
    sell_weight: int,
    buy_weight: int,
    amount_out: int,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> int:
    """Calculate the input amount required for a given output (buy order).

    Formula:
        amount_in = sell_reserve * ((buy_reserve / (buy_reserve - amount_out))^(buy_weight / sell_weight) - 1)

    The result is rounded up so the pool is never underpaid.

    Args:
        sell_reserve: Reserve of the asset being sold
        buy_reserve: Reserve of the asset being bought
        sell_weight: Weight of the asset being sold (must be positive)
        buy_weight: Weight of the asset being bought
        amount_out: Amount to buy out of the pool

    Returns:
        Amount of the sell asset required

    Raises:
        InsufficientLiquidity: If amount_out >= buy_reserve
        Overflow: If sell_weight is zero or any step overflows
    """
    bits, fmt = config.balance_bits, config.fixed_format
    s_reserve, b_reserve = SafeUint(sell_reserve, bits), SafeUint(buy_reserve, bits)
    s_weight, b_weight = SafeUint(sell_weight, bits), SafeUint(buy_weight, bits)
    s_amount = SafeUint(amount_out, bits)

    weight_ratio = _div_to_fixed(
        b_weight, s_weight, fmt, Overflow, "sell_weight must be positive"
    )

    if s_amount >= b_reserve:
        logger.debug(
            "lbp_insufficient_liquidity",
            buy_reserve=buy_reserve,
            amount_out=amount_out,
        )
        raise InsufficientLiquidity(
            f"amount_out {amount_out} must be less than buy_reserve {buy_reserve}"
        )

    base = _div_to_fixed(
        b_reserve, b_reserve - s_amount, fmt, Overflow, "buy_reserve - amount_out is zero"
    )

    power = _weighted_pow(base, weight_ratio)
    growth = power.sub(UFixed.one(fmt))

    product = s_reserve.cast(config.wide_bits) * growth.bits
    amount_in = product.ceiling_div(1 << fmt.frac_bits)
    return amount_in.cast(bits).value
