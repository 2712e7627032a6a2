"""Pool error classes.

Each error is a distinct, caller-visible failure. The ``code`` attribute
mirrors the custom error name emitted by the on-chain pool, so callers can
match on a stable string regardless of the Python class hierarchy.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    code = "POOL_ERROR"


class DeadlineExpired(PoolError):
    """Current time is past the caller-supplied deadline."""

    code = "DEADLINE_EXPIRED"


class InvalidRecipient(PoolError):
    """Recipient is the zero address."""

    code = "INVALID_TO"


class InvalidToken(PoolError):
    """Asset is not one of the pool's assets, is repeated, or is the pool itself."""

    code = "INVALID_TOKEN"


class InvalidSwapRoute(PoolError):
    """Swap route does not have exactly two entries."""

    code = "INVALID_SWAP_ROUTE"


class InvalidAmount(PoolError):
    """Amount is not an integer in the uint256 range."""

    code = "INVALID_AMOUNT"


class UnbalancedLiquidityProvision(PoolError):
    """Ratio-optimal deposit cannot satisfy the caller's minimum amounts."""

    code = "UNBALANCED_LIQUIDITY_PROVISION"


class InsufficientLiquidity(PoolError):
    """Withdrawal below the caller's minimum, or a quote against a zero reserve."""

    code = "INSUFFICIENT_LIQUIDITY"


class InsufficientOutputAmount(PoolError):
    """Swap output is below the caller's minimum."""

    code = "INSUFFICIENT_OUTPUT_AMOUNT"


class InvariantViolation(PoolError):
    """Reserve product decreased across a swap."""

    code = "K"


__all__ = [
    "PoolError",
    "DeadlineExpired",
    "InvalidRecipient",
    "InvalidToken",
    "InvalidSwapRoute",
    "InvalidAmount",
    "UnbalancedLiquidityProvision",
    "InsufficientLiquidity",
    "InsufficientOutputAmount",
    "InvariantViolation",
]
