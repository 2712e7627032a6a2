"""In-memory asset ledger.

Models the ERC20 behaviour the pool relies on: balances, allowances,
mint, burn and total supply, for any number of assets keyed by address.
Used by tests and simulations in place of real token contracts.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog

from simpleswap.assets.base import InsufficientAllowance, InsufficientBalance
from simpleswap.models.types import normalize_address
from simpleswap.safe_math import to_uint256

logger = structlog.get_logger()


@dataclass
class LedgerSnapshot:
    """Point-in-time copy of every balance, allowance and supply."""

    balances: dict[str, dict[str, int]] = field(default_factory=dict)
    allowances: dict[str, dict[tuple[str, str], int]] = field(default_factory=dict)
    supplies: dict[str, int] = field(default_factory=dict)


class InMemoryLedger:
    """Multi-asset ledger held in dictionaries.

    Addresses are normalized to lowercase on every call, so callers may
    mix checksummed and lowercase forms.
    """

    def __init__(self) -> None:
        # asset -> holder -> balance
        self._balances: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        # asset -> (owner, spender) -> allowance
        self._allowances: dict[str, dict[tuple[str, str], int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._supplies: dict[str, int] = defaultdict(int)
        self._depth = 0

    # --- Queries ---

    def balance_of(self, asset: str, holder: str) -> int:
        """Current balance of holder in asset (0 if never funded)."""
        return self._balances[normalize_address(asset)].get(normalize_address(holder), 0)

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        """Amount spender may still pull from owner."""
        key = (normalize_address(owner), normalize_address(spender))
        return self._allowances[normalize_address(asset)].get(key, 0)

    def total_supply(self, asset: str) -> int:
        """Sum of all balances of asset."""
        return self._supplies.get(normalize_address(asset), 0)

    # --- Mutations ---

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance from owner, replacing any previous value."""
        key = (normalize_address(owner), normalize_address(spender))
        self._allowances[normalize_address(asset)][key] = to_uint256(amount)

    def mint(self, asset: str, to: str, amount: int) -> None:
        """Create amount of asset for to."""
        asset, to = normalize_address(asset), normalize_address(to)
        amount = to_uint256(amount)
        self._balances[asset][to] += amount
        self._supplies[asset] += amount

    def burn(self, asset: str, holder: str, amount: int) -> None:
        """Destroy amount of asset held by holder.

        Raises:
            InsufficientBalance: If holder's balance is short
        """
        asset, holder = normalize_address(asset), normalize_address(holder)
        self._debit(asset, holder, to_uint256(amount))
        self._supplies[asset] -= amount

    def transfer(self, asset: str, sender: str, to: str, amount: int) -> None:
        """Move amount from sender to to.

        Raises:
            InsufficientBalance: If sender's balance is short
        """
        asset, sender, to = normalize_address(asset), normalize_address(sender), normalize_address(to)
        amount = to_uint256(amount)
        self._debit(asset, sender, amount)
        self._balances[asset][to] += amount

    def transfer_from(self, asset: str, spender: str, owner: str, to: str, amount: int) -> None:
        """Move amount from owner to to on behalf of spender.

        Raises:
            InsufficientAllowance: If spender's allowance from owner is short
            InsufficientBalance: If owner's balance is short
        """
        asset = normalize_address(asset)
        key = (normalize_address(owner), normalize_address(spender))
        amount = to_uint256(amount)
        allowed = self._allowances[asset].get(key, 0)
        if allowed < amount:
            raise InsufficientAllowance(
                f"Allowance {allowed} of {key[1]} from {key[0]} is below {amount} for {asset}"
            )
        self.transfer(asset, owner, to, amount)
        self._allowances[asset][key] = allowed - amount

    def _debit(self, asset: str, holder: str, amount: int) -> None:
        balance = self._balances[asset].get(holder, 0)
        if balance < amount:
            raise InsufficientBalance(f"Balance {balance} of {holder} is below {amount} for {asset}")
        self._balances[asset][holder] = balance - amount

    # --- Transactions ---

    def snapshot(self) -> LedgerSnapshot:
        """Copy the full ledger state."""
        return LedgerSnapshot(
            balances={asset: dict(holders) for asset, holders in self._balances.items()},
            allowances={asset: dict(pairs) for asset, pairs in self._allowances.items()},
            supplies=dict(self._supplies),
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        """Replace the ledger state with a snapshot."""
        self._balances.clear()
        for asset, holders in snapshot.balances.items():
            self._balances[asset].update(holders)
        self._allowances.clear()
        for asset, pairs in snapshot.allowances.items():
            self._allowances[asset].update(pairs)
        self._supplies.clear()
        self._supplies.update(snapshot.supplies)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Roll back every change made in the block if it raises.

        Nested blocks roll back only to their own entry point.
        """
        saved = self.snapshot()
        self._depth += 1
        try:
            yield
        except Exception:
            self.restore(saved)
            logger.debug("ledger_rolled_back", depth=self._depth)
            raise
        finally:
            self._depth -= 1
