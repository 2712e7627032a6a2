"""Two-asset constant-product pool engine.

The pool owns the asset pair and the share supply. Reserves are never
cached: they are read from the asset ledger on every call, so they always
mirror what the pool actually holds.

Every mutating call runs in three phases:
1. Validate the parameters (deadline, recipient, tokens, amounts)
2. Quote against the current reserves and check slippage bounds
3. Apply all ledger effects inside one ``ledger.atomic()`` block, then
   update the share supply and publish the outcome record

Phases 1 and 2 raise before anything is touched. If any effect in phase 3
raises, the ledger rolls back and the share supply is left unchanged.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

import structlog

from simpleswap.amm.constant_product import (
    get_amount_out,
    resolve_deposit,
    shares_to_mint,
    spot_price,
    withdrawal_amounts,
)
from simpleswap.assets.base import AssetLedger, LedgerError
from simpleswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from simpleswap.errors import (
    DeadlineExpired,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidAmount,
    InvalidRecipient,
    InvalidSwapRoute,
    InvalidToken,
    InvariantViolation,
    PoolError,
)
from simpleswap.models.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from simpleswap.models.results import AddLiquidityResult, RemoveLiquidityResult, SwapResult
from simpleswap.models.types import is_valid_address, is_zero_address, normalize_address
from simpleswap.safe_math import checked_sub, is_uint256

logger = structlog.get_logger()

Clock = Callable[[], int]
EventListener = Callable[[PoolEvent], None]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def _as_address(value: object) -> str | None:
    """Normalize value to a lowercase address, or None if it is not one."""
    if not isinstance(value, str):
        return None
    addr = normalize_address(value)
    return addr if is_valid_address(addr) else None


class Pool:
    """Constant-product pool over two assets with a fungible share token.

    Args:
        address: The pool's own identity; also the share token's asset id
        asset_a: First tradable asset
        asset_b: Second tradable asset
        ledger: Asset ledger holding balances, including share balances
        clock: Returns the current time; supplied by the hosting
            environment and used for deadline checks
        config: Engine configuration

    Raises:
        InvalidToken: If an asset is null, the assets are equal, or an
            asset collides with the pool's own address
    """

    def __init__(
        self,
        address: str,
        asset_a: str,
        asset_b: str,
        ledger: AssetLedger,
        *,
        clock: Clock = system_clock,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        self._address = normalize_address(address, validate=True)
        token_a, token_b = _as_address(asset_a), _as_address(asset_b)
        if token_a is None or token_b is None or is_zero_address(token_a) or is_zero_address(token_b):
            raise InvalidToken(f"Pool assets must be non-null addresses: {asset_a}, {asset_b}")
        if token_a == token_b:
            raise InvalidToken(f"Pool assets must be distinct: {asset_a}")
        if self._address in (token_a, token_b):
            raise InvalidToken("Pool cannot hold its own share token as an asset")

        self._asset_a = token_a
        self._asset_b = token_b
        self._ledger = ledger
        self._clock = clock
        self._config = config
        self._total_shares = 0
        self._events: list[PoolEvent] = []
        self._listeners: list[EventListener] = []

    def __repr__(self) -> str:
        return (
            f"Pool(address={self._address}, asset_a={self._asset_a}, asset_b={self._asset_b}, "
            f"total_shares={self._total_shares})"
        )

    # --- State ---

    @property
    def address(self) -> str:
        return self._address

    @property
    def asset_a(self) -> str:
        return self._asset_a

    @property
    def asset_b(self) -> str:
        return self._asset_b

    @property
    def reserve_a(self) -> int:
        """Pool's current balance of asset A, read from the ledger."""
        return self._ledger.balance_of(self._asset_a, self._address)

    @property
    def reserve_b(self) -> int:
        """Pool's current balance of asset B, read from the ledger."""
        return self._ledger.balance_of(self._asset_b, self._address)

    @property
    def total_shares(self) -> int:
        """Outstanding share supply. Zero means the pool is uninitialized."""
        return self._total_shares

    @property
    def events(self) -> tuple[PoolEvent, ...]:
        """Every outcome record emitted so far, oldest first."""
        return tuple(self._events)

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a callback for new outcome records.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Queries ---

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out).

        Raises:
            InvalidToken: If token_in is not one of the pool's assets
        """
        token = _as_address(token_in)
        if token == self._asset_a:
            return self.reserve_a, self.reserve_b
        if token == self._asset_b:
            return self.reserve_b, self.reserve_a
        raise InvalidToken(f"Token {token_in} not in pool")

    def quote_output(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Output for selling amount_in against the given reserves.

        Formula: amount_out = amount_in * reserve_out // (reserve_in + amount_in)

        Raises:
            InvalidAmount: If any argument is not a uint256
            InsufficientLiquidity: If reserve_in is zero
        """
        self._require_amounts(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)
        return get_amount_out(amount_in, reserve_in, reserve_out)

    def quote_price(self, token_base: str, token_quote: str) -> int:
        """Spot price of token_base in token_quote, scaled by config.price_scale.

        Raises:
            InvalidToken: If the tokens are not the pool's two assets
            InsufficientLiquidity: If reserve A or the base reserve is zero
        """
        flipped = self._require_pair(token_base, token_quote)
        reserve_a, reserve_b = self.reserve_a, self.reserve_b
        if reserve_a == 0:
            raise InsufficientLiquidity("Pool has no liquidity")
        if flipped:
            return spot_price(reserve_b, reserve_a, self._config.price_scale)
        return spot_price(reserve_a, reserve_b, self._config.price_scale)

    # --- Mutating operations ---

    def add_liquidity(
        self,
        caller: str,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        recipient: str,
        deadline: int,
    ) -> AddLiquidityResult:
        """Deposit both assets at the current ratio and mint shares to recipient.

        The pair may be passed in either order; amounts and the result follow
        the order of (token_a, token_b) as given.

        Args:
            caller: Identity the assets are pulled from
            token_a: First asset of the pair
            token_b: Second asset of the pair
            amount_a_desired: Most of token_a to deposit
            amount_b_desired: Most of token_b to deposit
            amount_a_min: Least of token_a to deposit (slippage bound)
            amount_b_min: Least of token_b to deposit (slippage bound)
            recipient: Receives the minted shares
            deadline: Latest acceptable execution time

        Returns:
            AddLiquidityResult with amounts used and shares minted

        Raises:
            DeadlineExpired, InvalidRecipient, InvalidToken, InvalidAmount,
            UnbalancedLiquidityProvision, InsufficientLiquidity
        """
        with self._rejections("add_liquidity"):
            self._require_deadline(deadline)
            caller = normalize_address(caller, validate=True)
            recipient = self._require_recipient(recipient)
            flipped = self._require_pair(token_a, token_b)
            self._require_amounts(
                amount_a_desired=amount_a_desired,
                amount_b_desired=amount_b_desired,
                amount_a_min=amount_a_min,
                amount_b_min=amount_b_min,
            )
            if flipped:
                amount_a_desired, amount_b_desired = amount_b_desired, amount_a_desired
                amount_a_min, amount_b_min = amount_b_min, amount_a_min

            reserve_a, reserve_b = self.reserve_a, self.reserve_b
            amount_a, amount_b = resolve_deposit(
                amount_a_desired,
                amount_b_desired,
                amount_a_min,
                amount_b_min,
                reserve_a,
                reserve_b,
                self._total_shares,
            )
            shares = shares_to_mint(amount_a, amount_b, reserve_a, self._total_shares)
            if shares == 0:
                raise InsufficientLiquidity("Deposit too small to mint any shares")

            with self._ledger.atomic():
                self._ledger.transfer_from(self._asset_a, self._address, caller, self._address, amount_a)
                self._ledger.transfer_from(self._asset_b, self._address, caller, self._address, amount_b)
                self._ledger.mint(self._address, recipient, shares)
                event = LiquidityAdded(
                    provider=caller,
                    recipient=recipient,
                    amount_a=amount_a,
                    amount_b=amount_b,
                    shares_minted=shares,
                )

        self._total_shares += shares
        self._publish(event)
        logger.info(
            "liquidity_added",
            pool=self._address,
            provider=caller,
            recipient=recipient,
            amount_a=amount_a,
            amount_b=amount_b,
            shares_minted=shares,
            total_shares=self._total_shares,
        )

        if flipped:
            return AddLiquidityResult(amount_a=amount_b, amount_b=amount_a, shares_minted=shares)
        return AddLiquidityResult(amount_a=amount_a, amount_b=amount_b, shares_minted=shares)

    def remove_liquidity(
        self,
        caller: str,
        token_a: str,
        token_b: str,
        shares_in: int,
        amount_a_min: int,
        amount_b_min: int,
        recipient: str,
        deadline: int,
    ) -> RemoveLiquidityResult:
        """Burn caller's shares and send the proportional reserves to recipient.

        Raises:
            DeadlineExpired, InvalidRecipient, InvalidToken, InvalidAmount,
            InsufficientLiquidity
        """
        with self._rejections("remove_liquidity"):
            self._require_deadline(deadline)
            caller = normalize_address(caller, validate=True)
            recipient = self._require_recipient(recipient)
            flipped = self._require_pair(token_a, token_b)
            self._require_amounts(
                shares_in=shares_in, amount_a_min=amount_a_min, amount_b_min=amount_b_min
            )
            if flipped:
                amount_a_min, amount_b_min = amount_b_min, amount_a_min

            amount_a, amount_b = withdrawal_amounts(
                shares_in, self.reserve_a, self.reserve_b, self._total_shares
            )
            if amount_a < amount_a_min or amount_b < amount_b_min:
                raise InsufficientLiquidity(
                    f"Withdrawal ({amount_a}, {amount_b}) below minimum "
                    f"({amount_a_min}, {amount_b_min})"
                )

            with self._ledger.atomic():
                self._ledger.burn(self._address, caller, shares_in)
                self._ledger.transfer(self._asset_a, self._address, recipient, amount_a)
                self._ledger.transfer(self._asset_b, self._address, recipient, amount_b)
                event = LiquidityRemoved(
                    withdrawer=caller,
                    recipient=recipient,
                    shares_in=shares_in,
                    amount_a=amount_a,
                    amount_b=amount_b,
                )

        self._total_shares = checked_sub(self._total_shares, shares_in)
        self._publish(event)
        logger.info(
            "liquidity_removed",
            pool=self._address,
            withdrawer=caller,
            recipient=recipient,
            shares_in=shares_in,
            amount_a=amount_a,
            amount_b=amount_b,
            total_shares=self._total_shares,
        )

        if flipped:
            return RemoveLiquidityResult(amount_a=amount_b, amount_b=amount_a)
        return RemoveLiquidityResult(amount_a=amount_a, amount_b=amount_b)

    def swap_exact_tokens_for_tokens(
        self,
        caller: str,
        amount_in: int,
        amount_out_min: int,
        route: Sequence[str],
        recipient: str,
        deadline: int,
    ) -> SwapResult:
        """Sell exactly amount_in of route[0] for route[1].

        Args:
            caller: Identity the input is pulled from
            amount_in: Exact input amount
            amount_out_min: Minimum acceptable output (slippage bound)
            route: (token_in, token_out); must be the pool's two assets
            recipient: Receives the output
            deadline: Latest acceptable execution time

        Returns:
            SwapResult with the realized amounts

        Raises:
            DeadlineExpired, InvalidRecipient, InvalidSwapRoute, InvalidToken,
            InvalidAmount, InsufficientLiquidity, InsufficientOutputAmount
        """
        with self._rejections("swap_exact_tokens_for_tokens"):
            self._require_deadline(deadline)
            caller = normalize_address(caller, validate=True)
            recipient = self._require_recipient(recipient)
            token_in, token_out = self._require_route(route)
            self._require_amounts(amount_in=amount_in, amount_out_min=amount_out_min)

            reserve_in, reserve_out = self.get_reserves(token_in)
            amount_out = get_amount_out(amount_in, reserve_in, reserve_out)
            if amount_out < amount_out_min:
                raise InsufficientOutputAmount(
                    f"Output {amount_out} below minimum {amount_out_min}"
                )

            with self._ledger.atomic():
                self._ledger.transfer_from(token_in, self._address, caller, self._address, amount_in)
                self._ledger.transfer(token_out, self._address, recipient, amount_out)
                if self._config.check_invariant:
                    self._check_product(token_in, reserve_in * reserve_out)
                event = Swap(
                    caller=caller,
                    recipient=recipient,
                    token_in=token_in,
                    token_out=token_out,
                    amount_in=amount_in,
                    amount_out=amount_out,
                )

        self._publish(event)
        logger.info(
            "swap_executed",
            pool=self._address,
            caller=caller,
            recipient=recipient,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
        )

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            token_in=token_in,
            token_out=token_out,
            pool_address=self._address,
        )

    # --- Guards ---

    def _require_deadline(self, deadline: int) -> None:
        now = self._clock()
        if deadline < now:
            raise DeadlineExpired(f"Deadline {deadline} is before current time {now}")

    def _require_recipient(self, recipient: str) -> str:
        addr = _as_address(recipient)
        if addr is None or is_zero_address(addr):
            raise InvalidRecipient(f"Invalid recipient: {recipient}")
        return addr

    def _require_pair(self, token_a: str, token_b: str) -> bool:
        """Check the tokens are the pool's pair; True if given as (B, A)."""
        first, second = _as_address(token_a), _as_address(token_b)
        if self._address in (first, second):
            raise InvalidToken("Pool share token is not a tradable asset")
        if (first, second) == (self._asset_a, self._asset_b):
            return False
        if (first, second) == (self._asset_b, self._asset_a):
            return True
        raise InvalidToken(f"Tokens ({token_a}, {token_b}) are not this pool's pair")

    def _require_route(self, route: Sequence[str]) -> tuple[str, str]:
        if len(route) != 2:
            raise InvalidSwapRoute(f"Route must have exactly 2 tokens, got {len(route)}")
        token_in, token_out = _as_address(route[0]), _as_address(route[1])
        pool_assets = (self._asset_a, self._asset_b)
        if token_in not in pool_assets or token_out not in pool_assets or token_in == token_out:
            raise InvalidToken(f"Route {list(route)} is not this pool's pair")
        return token_in, token_out  # type: ignore[return-value]

    @staticmethod
    def _require_amounts(**amounts: int) -> None:
        for name, value in amounts.items():
            if not is_uint256(value):
                raise InvalidAmount(f"{name} must be a uint256 integer, got {value!r}")

    def _check_product(self, token_in: str, product_before: int) -> None:
        reserve_in, reserve_out = self.get_reserves(token_in)
        if reserve_in * reserve_out < product_before:
            raise InvariantViolation(
                f"Reserve product fell from {product_before} to {reserve_in * reserve_out}"
            )

    # --- Plumbing ---

    @contextmanager
    def _rejections(self, operation: str) -> Iterator[None]:
        """Log failed calls before re-raising them."""
        try:
            yield
        except (PoolError, LedgerError) as err:
            logger.debug(
                "pool_call_rejected",
                pool=self._address,
                operation=operation,
                error=type(err).__name__,
                code=getattr(err, "code", None),
                reason=str(err),
            )
            raise

    def _publish(self, event: PoolEvent) -> None:
        self._events.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as err:
                # Committed; listener errors are only logged.
                logger.warning(
                    "event_listener_failed",
                    pool=self._address,
                    event_name=event.name,
                    error=str(err),
                )


__all__ = ["Pool", "Clock", "EventListener", "system_clock"]
