"""Test helpers module for shared test utilities.

- constants: common amounts and integer bounds
- factories: fixed-point values, tolerance checks and pool factories
"""

from tests.helpers.constants import PREC, U32_MAX, U64_MAX, U128_MAX
from tests.helpers.factories import assert_close, fixed, make_pool

__all__ = [
    # Constants
    "PREC",
    "U32_MAX",
    "U64_MAX",
    "U128_MAX",
    # Factories
    "fixed",
    "assert_close",
    "make_pool",
]
