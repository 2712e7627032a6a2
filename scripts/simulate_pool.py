#!/usr/bin/env python3
"""Replay a reference liquidity/swap scenario against an in-memory ledger.

Seeds a pool with 10 A and 1000 B, adds ratio-optimal liquidity,
swaps A for B, then withdraws everything, printing reserves and the
emitted outcome records after each step.

Usage:
    python scripts/simulate_pool.py
    python scripts/simulate_pool.py --swap-amount 2 --json-logs
"""

import argparse
import sys

import structlog

from simpleswap import InMemoryLedger, Pool, PoolConfig
from simpleswap.errors import PoolError
from simpleswap.logs import configure_logging

logger = structlog.get_logger()

UNIT = 10**18

TOKEN_A = "0x" + "aa" * 20
TOKEN_B = "0x" + "bb" * 20
POOL = "0x" + "50" * 20
TRADER = "0x" + "0d" * 20

# Fixed block time, deadlines are relative to it
NOW = 1_700_000_000


def print_state(label: str, pool: Pool) -> None:
    print(
        f"{label:<24} reserve_a={pool.reserve_a / UNIT:>12.6f} "
        f"reserve_b={pool.reserve_b / UNIT:>12.6f} shares={pool.total_shares / UNIT:>12.6f}"
    )


def run(swap_amount: int, config: PoolConfig) -> Pool:
    ledger = InMemoryLedger()
    pool = Pool(POOL, TOKEN_A, TOKEN_B, ledger, clock=lambda: NOW, config=config)
    pool.subscribe(lambda event: print(f"  event {event.name}: {event.model_dump()}"))

    for asset in (TOKEN_A, TOKEN_B):
        ledger.mint(asset, TRADER, 10_000 * UNIT)
        ledger.approve(asset, TRADER, POOL, 10_000 * UNIT)

    deadline = NOW + 60
    pool.add_liquidity(
        TRADER, TOKEN_A, TOKEN_B, 10 * UNIT, 1000 * UNIT, 10 * UNIT, 1000 * UNIT, TRADER, deadline
    )
    print_state("seeded", pool)

    pool.add_liquidity(
        TRADER, TOKEN_A, TOKEN_B, 2 * UNIT, 250 * UNIT, 2 * UNIT, 200 * UNIT, TRADER, deadline
    )
    print_state("added", pool)

    price = pool.quote_price(TOKEN_A, TOKEN_B)
    print(f"  price A in B: {price / config.price_scale}")

    pool.swap_exact_tokens_for_tokens(
        TRADER, swap_amount * UNIT, 0, [TOKEN_A, TOKEN_B], TRADER, deadline
    )
    print_state("swapped", pool)

    shares = ledger.balance_of(POOL, TRADER)
    pool.remove_liquidity(TRADER, TOKEN_A, TOKEN_B, shares, 0, 0, TRADER, deadline)
    print_state("drained", pool)
    return pool


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate a SimpleSwap pool")
    parser.add_argument(
        "--swap-amount",
        type=int,
        default=1,
        help="Whole units of A to swap for B (default: 1)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render logs as JSON lines",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    config = PoolConfig.from_env()
    configure_logging("DEBUG" if args.verbose else config.log_level, args.json_logs or config.log_json)

    try:
        pool = run(args.swap_amount, config)
    except PoolError as err:
        logger.error("simulation_failed", code=err.code, reason=str(err))
        return 1

    print(f"\n{len(pool.events)} events emitted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
