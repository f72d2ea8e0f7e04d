"""Liquidity bootstrapping pool quotes.

An LBPPool describes a two-asset pool (asset A and asset B) whose asset A
weight moves linearly from ``initial_weight`` to ``final_weight`` between
blocks ``start`` and ``end``. Asset B always holds the remaining weight, so
the two weights sum to MAX_WEIGHT.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from lbpmath.config import DEFAULT_MATH_CONFIG, MathConfig
from lbpmath.errors import ZeroInReserve, ZeroInWeight, ZeroOutReserve

from .fees import Fee, add_fee_amount, subtract_fee_amount
from .pricing import in_given_out, out_given_in, spot_price
from .weights import linear_weights

logger = structlog.get_logger()

MAX_WEIGHT = 100_000_000


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a trade against an LBP.

    Attributes:
        amount_in: Amount paid into the pool, fee included
        amount_out: Amount paid out of the pool
        fee: Fee charged, denominated in the sold asset
        weight_in: Weight of the sold asset at the quoted block
        weight_out: Weight of the bought asset at the quoted block
    """

    amount_in: int
    amount_out: int
    fee: int
    weight_in: int
    weight_out: int


class LBPPool(BaseModel):
    """Weight schedule and fee of a liquidity bootstrapping pool."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    initial_weight: int = Field(ge=0, le=MAX_WEIGHT)
    final_weight: int = Field(ge=0, le=MAX_WEIGHT)
    fee: Fee = Field(default_factory=Fee)
    block_bits: Literal[32, 64] = 32

    @model_validator(mode="after")
    def check_schedule(self) -> LBPPool:
        if self.end >> self.block_bits:
            raise ValueError(f"end block {self.end} does not fit u{self.block_bits}")
        if self.start >= self.end:
            raise ValueError(f"start block {self.start} must be before end block {self.end}")
        return self

    def weights_at(
        self, block: int, *, config: MathConfig = DEFAULT_MATH_CONFIG
    ) -> tuple[int, int]:
        """Weights of (asset A, asset B) at ``block``.

        Raises:
            Overflow: If block is outside [start, end]
        """
        weight_a = linear_weights(
            self.start,
            self.end,
            self.initial_weight,
            self.final_weight,
            block,
            block_bits=self.block_bits,
            config=config,
        )
        return weight_a, MAX_WEIGHT - weight_a

    def _directed_weights(
        self, block: int, sell_asset_a: bool, config: MathConfig
    ) -> tuple[int, int]:
        weight_a, weight_b = self.weights_at(block, config=config)
        return (weight_a, weight_b) if sell_asset_a else (weight_b, weight_a)

    def spot_price(
        self,
        block: int,
        reserve_in: int,
        reserve_out: int,
        amount: int,
        *,
        sell_asset_a: bool = True,
        config: MathConfig = DEFAULT_MATH_CONFIG,
    ) -> int:
        """Spot price of ``amount`` sold asset units at ``block``."""
        weight_in, weight_out = self._directed_weights(block, sell_asset_a, config)
        return spot_price(reserve_in, reserve_out, weight_in, weight_out, amount, config=config)

    def sell(
        self,
        block: int,
        reserve_in: int,
        reserve_out: int,
        amount_in: int,
        *,
        sell_asset_a: bool = True,
        config: MathConfig = DEFAULT_MATH_CONFIG,
    ) -> SwapQuote:
        """Quote selling ``amount_in`` into the pool.

        The fee is taken from amount_in before it reaches the pool.

        Raises:
            ZeroInReserve: If reserve_in is zero
            ZeroOutWeight: If the bought asset has zero weight
            Overflow: If the block is outside the schedule or any step overflows
        """
        if reserve_in == 0:
            logger.debug("lbp_sell_zero_in_reserve", block=block, amount_in=amount_in)
            raise ZeroInReserve("reserve_in must be positive")

        weight_in, weight_out = self._directed_weights(block, sell_asset_a, config)
        net_amount, fee_amount = subtract_fee_amount(amount_in, self.fee)
        amount_out = out_given_in(
            reserve_in, reserve_out, weight_in, weight_out, net_amount, config=config
        )

        logger.debug(
            "lbp_sell_quote",
            block=block,
            amount_in=amount_in,
            amount_out=amount_out,
            fee=fee_amount,
        )
        return SwapQuote(
            amount_in=amount_in,
            amount_out=amount_out,
            fee=fee_amount,
            weight_in=weight_in,
            weight_out=weight_out,
        )

    def buy(
        self,
        block: int,
        reserve_in: int,
        reserve_out: int,
        amount_out: int,
        *,
        sell_asset_a: bool = True,
        config: MathConfig = DEFAULT_MATH_CONFIG,
    ) -> SwapQuote:
        """Quote buying ``amount_out`` from the pool.

        The fee is added on top of the computed input amount.

        Raises:
            ZeroOutReserve: If reserve_out is zero
            ZeroInWeight: If the sold asset has zero weight
            InsufficientLiquidity: If amount_out >= reserve_out
            Overflow: If the block is outside the schedule or any step overflows
        """
        if reserve_out == 0:
            logger.debug("lbp_buy_zero_out_reserve", block=block, amount_out=amount_out)
            raise ZeroOutReserve("reserve_out must be positive")

        weight_in, weight_out = self._directed_weights(block, sell_asset_a, config)
        if weight_in == 0:
            raise ZeroInWeight(f"Sold asset has zero weight at block {block}")

        net_amount = in_given_out(
            reserve_in, reserve_out, weight_in, weight_out, amount_out, config=config
        )
        gross_amount, fee_amount = add_fee_amount(net_amount, self.fee)

        logger.debug(
            "lbp_buy_quote",
            block=block,
            amount_in=gross_amount,
            amount_out=amount_out,
            fee=fee_amount,
        )
        return SwapQuote(
            amount_in=gross_amount,
            amount_out=amount_out,
            fee=fee_amount,
            weight_in=weight_in,
            weight_out=weight_out,
        )
