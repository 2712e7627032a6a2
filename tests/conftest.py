"""Pytest configuration and fixtures."""

import pytest
import structlog

from simpleswap.assets import InMemoryLedger
from simpleswap.pool import Pool
from tests.helpers import ALICE, BOB, UNIT, FakeClock, fund, make_pool, seed


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog.configure() a test performed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clock() -> FakeClock:
    """Block time fixed at NOW."""
    return FakeClock()


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Ledger where ALICE and BOB hold and have approved INITIAL_BALANCE of both assets."""
    ledger = InMemoryLedger()
    fund(ledger, ALICE)
    fund(ledger, BOB)
    return ledger


@pytest.fixture
def pool(ledger: InMemoryLedger, clock: FakeClock) -> Pool:
    """An empty pool."""
    return make_pool(ledger, clock)


@pytest.fixture
def seeded_pool(pool: Pool) -> Pool:
    """Pool with reserves (10, 1000) tokens and 100 shares, all owned by ALICE."""
    seed(pool, ALICE, 10 * UNIT, 1000 * UNIT)
    return pool
