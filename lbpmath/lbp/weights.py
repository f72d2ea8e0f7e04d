"""Linear weight schedule for liquidity bootstrapping pools."""

from __future__ import annotations

import structlog

from lbpmath.config import DEFAULT_MATH_CONFIG, MathConfig
from lbpmath.errors import Overflow, ZeroDuration
from lbpmath.safe_int import SafeUint

logger = structlog.get_logger()

BLOCK_BITS = (32, 64)


def linear_weights(
    start_block: int,
    end_block: int,
    start_weight: int,
    end_weight: int,
    current_block: int,
    *,
    block_bits: int = 32,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> int:
    """Interpolate a pool weight linearly between two blocks.

    Formula:
        start_weight + (end_weight - start_weight) * (current_block - start_block) / (end_block - start_block)

    The weight delta is signed, so increasing and decreasing schedules are
    handled the same way; the quotient truncates toward zero. The endpoints
    are exact: start_weight at start_block and end_weight at end_block.

    Args:
        start_block: First block of the schedule
        end_block: Last block of the schedule
        start_weight: Weight at start_block
        end_weight: Weight at end_block
        current_block: Block to evaluate at
        block_bits: Width of the block numbers (32 or 64)

    Returns:
        Interpolated weight

    Raises:
        ZeroDuration: If start_block == end_block
        Overflow: If the interval is inverted, current_block is outside it,
            the interval is longer than config.max_duration, or an input
            does not fit its width
    """
    if block_bits not in BLOCK_BITS:
        raise ValueError(f"block_bits must be one of {BLOCK_BITS}, got {block_bits}")

    start, end = SafeUint(start_block, block_bits), SafeUint(end_block, block_bits)
    at = SafeUint(current_block, block_bits)
    w_start = SafeUint(start_weight, config.balance_bits)
    w_end = SafeUint(end_weight, config.balance_bits)

    if start > end:
        logger.debug("linear_weights_inverted_interval", start=start_block, end=end_block)
        raise Overflow(f"Inverted interval: start {start_block} > end {end_block}")
    if start == end:
        raise ZeroDuration(f"Interval starting at block {start_block} has zero length")
    if at < start or at > end:
        logger.debug(
            "linear_weights_out_of_range",
            start=start_block,
            end=end_block,
            at=current_block,
        )
        raise Overflow(f"Block {current_block} outside [{start_block}, {end_block}]")

    duration = end - start
    if duration > config.max_duration:
        raise Overflow(f"Interval of {duration} blocks exceeds {config.max_duration}")
    elapsed = at - start

    if w_end >= w_start:
        step = (w_end - w_start).cast(config.wide_bits) * elapsed // duration
        return (w_start + step).value
    step = (w_start - w_end).cast(config.wide_bits) * elapsed // duration
    return (w_start - step).value
