"""Factory functions for fixed-point values and pools."""

from decimal import Decimal

from lbpmath.lbp import Fee, LBPPool
from lbpmath.math.fixed_point import FixedBalance, FixedFormat, UFixed


def fixed(value: str | int, fmt: FixedFormat = FixedBalance) -> UFixed:
    """Build a fixed-point value from a decimal string or an integer."""
    if isinstance(value, int):
        return UFixed.from_int(value, fmt)
    return UFixed.from_str(value, fmt)


def assert_close(actual: UFixed, expected: Decimal | str, rel: str = "1e-6") -> None:
    """Assert a fixed-point value is within a relative tolerance of expected."""
    expected = Decimal(expected)
    diff = abs(actual.to_decimal() - expected)
    assert diff <= abs(expected) * Decimal(rel), f"{actual} != {expected} (diff {diff})"


def make_pool(
    start: int = 100,
    end: int = 200,
    initial_weight: int = 80_000_000,
    final_weight: int = 20_000_000,
    fee: Fee | None = None,
    block_bits: int = 32,
) -> LBPPool:
    """Create an LBPPool with sensible defaults."""
    return LBPPool(
        start=start,
        end=end,
        initial_weight=initial_weight,
        final_weight=final_weight,
        fee=fee if fee is not None else Fee(),
        block_bits=block_bits,
    )
