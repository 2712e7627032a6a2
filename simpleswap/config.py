"""Pool engine configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from simpleswap.constants import PRICE_SCALE

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for the pool engine.

    Attributes:
        price_scale: Fixed-point unit for quote_price (default: 1e18)
        check_invariant: If True, verify the reserve product did not
            decrease after every swap and abort the swap otherwise.
        log_level: Minimum level for structlog output (default: INFO)
        log_json: If True, render logs as JSON lines instead of console output
    """

    price_scale: int = PRICE_SCALE
    check_invariant: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive, got {self.price_scale}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PoolConfig:
        """Build a config from environment variables.

        - SIMPLESWAP_PRICE_SCALE: Fixed-point price unit (default: 10**18)
        - SIMPLESWAP_CHECK_INVARIANT: Verify swaps (default: true)
        - SIMPLESWAP_LOG_LEVEL: Log level name (default: INFO)
        - SIMPLESWAP_LOG_JSON: JSON log output (default: false)
        """
        env = os.environ if environ is None else environ
        return cls(
            price_scale=int(env.get("SIMPLESWAP_PRICE_SCALE", str(PRICE_SCALE))),
            check_invariant=env.get("SIMPLESWAP_CHECK_INVARIANT", "true").lower() in _TRUE_VALUES,
            log_level=env.get("SIMPLESWAP_LOG_LEVEL", "INFO").upper(),
            log_json=env.get("SIMPLESWAP_LOG_JSON", "false").lower() in _TRUE_VALUES,
        )


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
