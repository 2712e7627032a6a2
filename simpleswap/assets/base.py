"""Asset ledger capability consumed by the pool.

The pool never moves balances itself. It computes amounts and asks an
injected ledger to move them. Any object with these methods works: an
in-memory ledger for tests and simulation, or an adapter over real token
contracts.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


class LedgerError(Exception):
    """Base error for asset ledger operations."""

    pass


class InsufficientBalance(LedgerError):
    """Holder balance is below the amount to move or burn."""

    pass


class InsufficientAllowance(LedgerError):
    """Spender is not approved for the amount to pull."""

    pass


@runtime_checkable
class AssetLedger(Protocol):
    """Protocol for fungible asset bookkeeping.

    Assets and holders are identified by address. The pool's share token is
    the asset whose identity equals the pool's address.

    All methods take effect immediately. ``atomic()`` groups several calls
    so that an exception inside the block undoes every call made in it.
    """

    def balance_of(self, asset: str, holder: str) -> int:
        """Current balance of holder in asset."""
        ...

    def transfer_from(self, asset: str, spender: str, owner: str, to: str, amount: int) -> None:
        """Move amount from owner to to, spending spender's allowance.

        Raises:
            InsufficientAllowance: If spender's allowance from owner is short
            InsufficientBalance: If owner's balance is short
        """
        ...

    def transfer(self, asset: str, sender: str, to: str, amount: int) -> None:
        """Move amount out of sender's own custody.

        Raises:
            InsufficientBalance: If sender's balance is short
        """
        ...

    def mint(self, asset: str, to: str, amount: int) -> None:
        """Create amount of asset for to."""
        ...

    def burn(self, asset: str, holder: str, amount: int) -> None:
        """Destroy amount of asset held by holder.

        Raises:
            InsufficientBalance: If holder's balance is short
        """
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Context manager that rolls back every change if the block raises."""
        ...


__all__ = [
    "AssetLedger",
    "LedgerError",
    "InsufficientBalance",
    "InsufficientAllowance",
]
