"""Tests for Pool.remove_liquidity."""

import pytest

from simpleswap.assets import InsufficientBalance
from simpleswap.errors import (
    DeadlineExpired,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidRecipient,
    InvalidToken,
)
from simpleswap.models.events import LiquidityRemoved
from simpleswap.pool import Pool
from tests.helpers import (
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
    seed,
)


def remove(pool: Pool, shares_in: int, mins: tuple[int, int] = (0, 0), **overrides):
    params = {
        "caller": ALICE,
        "token_a": TOKEN_A,
        "token_b": TOKEN_B,
        "shares_in": shares_in,
        "amount_a_min": mins[0],
        "amount_b_min": mins[1],
        "recipient": ALICE,
        "deadline": DEADLINE,
    }
    params.update(overrides)
    return pool.remove_liquidity(**params)


class TestWithdrawal:
    """Tests for successful withdrawals."""

    def test_full_withdrawal(self, seeded_pool, ledger):
        """Burning every share returns the full reserves and empties the pool."""
        result = remove(seeded_pool, 100 * UNIT, (10 * UNIT, 1000 * UNIT))

        assert (result.amount_a, result.amount_b) == (10 * UNIT, 1000 * UNIT)
        assert (seeded_pool.reserve_a, seeded_pool.reserve_b) == (0, 0)
        assert seeded_pool.total_shares == 0
        assert ledger.balance_of(POOL_ADDRESS, ALICE) == 0
        assert ledger.balance_of(TOKEN_A, ALICE) == INITIAL_BALANCE
        assert ledger.balance_of(TOKEN_B, ALICE) == INITIAL_BALANCE

    def test_partial_withdrawal(self, seeded_pool):
        """A quarter of the shares returns a quarter of each reserve."""
        result = remove(seeded_pool, 25 * UNIT)

        assert (result.amount_a, result.amount_b) == (5 * UNIT // 2, 250 * UNIT)
        assert seeded_pool.total_shares == 75 * UNIT
        assert (seeded_pool.reserve_a, seeded_pool.reserve_b) == (15 * UNIT // 2, 750 * UNIT)

    def test_rounds_down(self, pool):
        """Withdrawal amounts floor toward the pool."""
        seed(pool, ALICE, 3, 5)
        result = remove(pool, 1)
        assert (result.amount_a, result.amount_b) == (1, 1)
        assert (pool.reserve_a, pool.reserve_b) == (2, 4)

    def test_assets_go_to_recipient(self, seeded_pool, ledger):
        """Assets go to the recipient; shares are burned from the caller."""
        remove(seeded_pool, 50 * UNIT, recipient=BOB)

        assert ledger.balance_of(TOKEN_A, BOB) == INITIAL_BALANCE + 5 * UNIT
        assert ledger.balance_of(TOKEN_B, BOB) == INITIAL_BALANCE + 500 * UNIT
        assert ledger.balance_of(POOL_ADDRESS, ALICE) == 50 * UNIT

    def test_pair_in_either_order(self, seeded_pool):
        """Tokens given as (B, A) return amounts in that order."""
        result = remove(
            seeded_pool, 50 * UNIT, (500 * UNIT, 5 * UNIT), token_a=TOKEN_B, token_b=TOKEN_A
        )
        assert (result.amount_a, result.amount_b) == (500 * UNIT, 5 * UNIT)

    def test_emits_event(self, seeded_pool):
        """A successful withdrawal emits one LiquidityRemoved record."""
        remove(seeded_pool, 50 * UNIT, recipient=BOB)

        assert seeded_pool.events[-1] == LiquidityRemoved(
            withdrawer=ALICE,
            recipient=BOB,
            shares_in=50 * UNIT,
            amount_a=5 * UNIT,
            amount_b=500 * UNIT,
        )
        assert len(seeded_pool.events) == 2


class TestFailures:
    """Tests for rejected withdrawals."""

    def test_below_minimum(self, seeded_pool, ledger):
        """Fails when either amount is below its minimum."""
        before = ledger.snapshot()
        with pytest.raises(InsufficientLiquidity):
            remove(seeded_pool, 100 * UNIT, (10 * UNIT + 100, 1000 * UNIT + 100))

        assert ledger.snapshot() == before
        assert seeded_pool.total_shares == 100 * UNIT

    def test_empty_pool(self, pool):
        """An uninitialized pool has nothing to withdraw."""
        with pytest.raises(InsufficientLiquidity):
            remove(pool, 0)

    def test_more_than_supply(self, seeded_pool):
        """Burning more shares than exist is rejected."""
        with pytest.raises(InsufficientLiquidity):
            remove(seeded_pool, 100 * UNIT + 1)

    def test_caller_without_shares(self, seeded_pool, ledger):
        """A caller without enough shares fails and nothing moves."""
        before = ledger.snapshot()
        with pytest.raises(InsufficientBalance):
            remove(seeded_pool, 10 * UNIT, caller=BOB, recipient=BOB)

        assert ledger.snapshot() == before
        assert seeded_pool.total_shares == 100 * UNIT
        assert len(seeded_pool.events) == 1

    def test_deadline_expired(self, seeded_pool):
        """A deadline before the current time is rejected."""
        with pytest.raises(DeadlineExpired):
            remove(seeded_pool, UNIT, deadline=NOW - 1)

    def test_deadline_checked_first(self, seeded_pool, ledger):
        """An expired deadline wins over every other problem and nothing moves."""
        before = ledger.snapshot()

        with pytest.raises(DeadlineExpired):
            remove(
                seeded_pool,
                -1,
                token_b=STRANGER_TOKEN,
                recipient=ZERO_ADDRESS,
                deadline=NOW - 1,
            )

        assert ledger.snapshot() == before
        assert seeded_pool.total_shares == 100 * UNIT

    def test_zero_recipient(self, seeded_pool):
        """The zero address cannot receive assets."""
        with pytest.raises(InvalidRecipient):
            remove(seeded_pool, UNIT, recipient=ZERO_ADDRESS)

    def test_invalid_token(self, seeded_pool):
        """Only the pool's own pair is accepted."""
        with pytest.raises(InvalidToken):
            remove(seeded_pool, UNIT, token_b=STRANGER_TOKEN)

    def test_invalid_amount(self, seeded_pool):
        """Share amounts must be uint256 integers."""
        with pytest.raises(InvalidAmount):
            remove(seeded_pool, -1)
