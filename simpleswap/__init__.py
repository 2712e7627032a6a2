"""SimpleSwap - two-asset constant-product pool engine."""

from simpleswap.amm import get_amount_out
from simpleswap.assets import AssetLedger, InMemoryLedger
from simpleswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from simpleswap.pool import Pool

__version__ = "0.1.0"
__all__ = [
    "Pool",
    "PoolConfig",
    "DEFAULT_POOL_CONFIG",
    "AssetLedger",
    "InMemoryLedger",
    "get_amount_out",
    "__version__",
]
