"""Pydantic models and result types for the pool engine."""

from simpleswap.models.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from simpleswap.models.results import AddLiquidityResult, RemoveLiquidityResult, SwapResult
from simpleswap.models.types import (
    Address,
    Uint256,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "Uint256",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
    # Outcome records
    "PoolEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    # Results
    "AddLiquidityResult",
    "RemoveLiquidityResult",
    "SwapResult",
]
