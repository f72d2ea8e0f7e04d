"""LBP trade fee helpers.

A fee is a ratio numerator/denominator applied to a trade amount. Fees are
always rounded down; an amount with a non-zero fee ratio too small to
produce a whole unit pays no fee.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lbpmath.safe_int import SafeUint


class Fee(BaseModel):
    """Fee ratio (default 0.2%)."""

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(default=2, ge=0)
    denominator: int = Field(default=1000, gt=0)

    @model_validator(mode="after")
    def check_ratio(self) -> Fee:
        if self.numerator > self.denominator:
            raise ValueError(f"Fee {self.numerator}/{self.denominator} exceeds 100%")
        return self

    def is_zero(self) -> bool:
        return self.numerator == 0


def calculate_fee(amount: int, fee: Fee) -> int:
    """Fee owed on ``amount``, rounded down.

    Raises:
        Overflow: If amount * numerator exceeds 128 bits
    """
    if fee.is_zero():
        return 0
    return (SafeUint(amount) * fee.numerator // fee.denominator).value


def subtract_fee_amount(amount: int, fee: Fee) -> tuple[int, int]:
    """Split ``amount`` into (amount after fee, fee)."""
    fee_amount = calculate_fee(amount, fee)
    return (SafeUint(amount) - fee_amount).value, fee_amount


def add_fee_amount(amount: int, fee: Fee) -> tuple[int, int]:
    """Gross up ``amount`` by its fee: (amount plus fee, fee).

    Raises:
        Overflow: If the total exceeds 128 bits
    """
    fee_amount = calculate_fee(amount, fee)
    return (SafeUint(amount) + fee_amount).value, fee_amount
