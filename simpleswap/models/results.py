"""Return values of the pool's mutating operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AddLiquidityResult:
    """Amounts actually deposited, in the caller's token order, and shares minted."""

    amount_a: int
    amount_b: int
    shares_minted: int


@dataclass(frozen=True)
class RemoveLiquidityResult:
    """Amounts withdrawn, in the caller's token order."""

    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class SwapResult:
    """Result of executing a swap through the pool."""

    amount_in: int
    amount_out: int
    token_in: str
    token_out: str
    pool_address: str
