"""Test helpers module for shared test utilities.

- constants: Addresses, amounts and the fixed block time
- factories: Fake clock, ledger funding and pool construction
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DEADLINE,
    INITIAL_BALANCE,
    NOW,
    POOL_ADDRESS,
    STRANGER_TOKEN,
    TOKEN_A,
    TOKEN_B,
    UNIT,
    ZERO_ADDRESS,
)
from tests.helpers.factories import FakeClock, fund, make_pool, seed

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "POOL_ADDRESS",
    "STRANGER_TOKEN",
    "ALICE",
    "BOB",
    "ZERO_ADDRESS",
    "UNIT",
    "INITIAL_BALANCE",
    "NOW",
    "DEADLINE",
    # Factories
    "FakeClock",
    "fund",
    "make_pool",
    "seed",
]
