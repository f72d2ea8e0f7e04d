"""Pytest configuration and fixtures."""

from datetime import timedelta

import pytest
from hypothesis import HealthCheck, settings

from lbpmath.lbp import LBPPool
from lbpmath.math.fixed_point import FixedBalance, UFixed
from tests.helpers import make_pool

# Fixed-point loops run in pure Python; allow slow examples without flagging them
settings.register_profile(
    "default",
    deadline=timedelta(seconds=5),
    max_examples=100,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


@pytest.fixture
def one() -> UFixed:
    """1.0 in the pricing representation."""
    return UFixed.one(FixedBalance)


@pytest.fixture
def pool() -> LBPPool:
    """Pool moving asset A from 80% to 20% weight over blocks 100..200."""
    return make_pool()
