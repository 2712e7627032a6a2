"""Constant-product AMM math.

The pool follows x * y = k with no trading fee:

    amount_out = amount_in * reserve_out / (reserve_in + amount_in)

Every division floors. Rounding down on the output side means the
reserve product can only grow across a swap, and rounding down on the
share and withdrawal side means nobody can extract more than their
proportional claim.
"""

from __future__ import annotations

from simpleswap.errors import InsufficientLiquidity, UnbalancedLiquidityProvision
from simpleswap.safe_math import DivisionByZero, mul_div, sqrt_floor


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate output amount using the constant product formula.

    Formula: amount_out = (in * res_out) / (res_in + in)

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool

    Returns:
        Output token amount (floored)

    Raises:
        InsufficientLiquidity: If reserve_in is zero
    """
    if reserve_in == 0:
        raise InsufficientLiquidity("Input reserve is empty")
    return mul_div(amount_in, reserve_out, reserve_in + amount_in)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B that matches amount_a at the current reserve ratio.

    Raises:
        InsufficientLiquidity: If reserve_a is zero
    """
    try:
        return mul_div(amount_a, reserve_b, reserve_a)
    except DivisionByZero as err:
        raise InsufficientLiquidity("Cannot price against an empty reserve") from err


def spot_price(reserve_base: int, reserve_quote: int, scale: int) -> int:
    """Price of one base unit in quote units, as a fixed-point integer.

    Raises:
        InsufficientLiquidity: If reserve_base is zero
    """
    if reserve_base == 0:
        raise InsufficientLiquidity("Pool has no liquidity")
    return mul_div(reserve_quote, scale, reserve_base)


def resolve_deposit(
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int,
    amount_b_min: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> tuple[int, int]:
    """Pick deposit amounts that keep the reserve ratio unchanged.

    Tries the full desired A first and fills B at the current ratio. If
    that needs more B than desired, uses the full desired B and fills A
    instead. The minimums guard against the ratio moving between the
    caller's snapshot and execution.

    An uninitialized pool (no shares outstanding) accepts the desired
    amounts as-is; they set the initial ratio.

    Args:
        amount_a_desired: Maximum A the caller wants to deposit
        amount_b_desired: Maximum B the caller wants to deposit
        amount_a_min: Minimum A the caller accepts depositing
        amount_b_min: Minimum B the caller accepts depositing
        reserve_a: Current pool reserve of A
        reserve_b: Current pool reserve of B
        total_shares: Outstanding share supply

    Returns:
        Tuple of (amount_a, amount_b) to deposit

    Raises:
        UnbalancedLiquidityProvision: If no ratio-preserving pair meets the minimums
        InsufficientLiquidity: If shares are outstanding but a reserve is zero
    """
    if total_shares == 0:
        amount_a, amount_b = amount_a_desired, amount_b_desired
    else:
        amount_b_optimal = quote(amount_a_desired, reserve_a, reserve_b)
        if amount_b_optimal <= amount_b_desired:
            if amount_b_optimal < amount_b_min:
                raise UnbalancedLiquidityProvision(
                    f"Optimal B {amount_b_optimal} below minimum {amount_b_min}"
                )
            amount_a, amount_b = amount_a_desired, amount_b_optimal
        else:
            amount_a_optimal = quote(amount_b_desired, reserve_b, reserve_a)
            if amount_a_optimal < amount_a_min:
                raise UnbalancedLiquidityProvision(
                    f"Optimal A {amount_a_optimal} below minimum {amount_a_min}"
                )
            amount_a, amount_b = amount_a_optimal, amount_b_desired

    if amount_a < amount_a_min or amount_b < amount_b_min:
        raise UnbalancedLiquidityProvision(
            f"Deposit ({amount_a}, {amount_b}) below minimum ({amount_a_min}, {amount_b_min})"
        )
    return amount_a, amount_b


def shares_to_mint(amount_a: int, amount_b: int, reserve_a: int, total_shares: int) -> int:
    """Shares minted for depositing (amount_a, amount_b).

    The first deposit mints floor(sqrt(a * b)), anchoring the share value
    at the geometric mean. Later deposits mint in proportion to the A side;
    the deposit is ratio-preserving so the B side gives the same result.

    Raises:
        InsufficientLiquidity: If reserve_a is zero while shares are outstanding
    """
    if total_shares == 0:
        return sqrt_floor(amount_a * amount_b)
    try:
        return mul_div(total_shares, amount_a, reserve_a)
    except DivisionByZero as err:
        raise InsufficientLiquidity("Pool has shares but no A reserve") from err


def withdrawal_amounts(
    shares_in: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> tuple[int, int]:
    """Proportional amounts returned for burning shares_in.

    Raises:
        InsufficientLiquidity: If there are no shares, or shares_in exceeds supply
    """
    if total_shares == 0:
        raise InsufficientLiquidity("Pool has no outstanding shares")
    if shares_in > total_shares:
        raise InsufficientLiquidity(f"Shares {shares_in} exceed supply {total_shares}")
    return (
        mul_div(reserve_a, shares_in, total_shares),
        mul_div(reserve_b, shares_in, total_shares),
    )


__all__ = [
    "get_amount_out",
    "quote",
    "spot_price",
    "resolve_deposit",
    "shares_to_mint",
    "withdrawal_amounts",
]
