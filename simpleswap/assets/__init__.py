"""Asset ledger capability and implementations."""

from simpleswap.assets.base import (
    AssetLedger,
    InsufficientAllowance,
    InsufficientBalance,
    LedgerError,
)
from simpleswap.assets.memory import InMemoryLedger, LedgerSnapshot

__all__ = [
    "AssetLedger",
    "LedgerError",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InMemoryLedger",
    "LedgerSnapshot",
]
