"""Constant-product AMM math."""

from simpleswap.amm.constant_product import (
    get_amount_out,
    quote,
    resolve_deposit,
    shares_to_mint,
    spot_price,
    withdrawal_amounts,
)

__all__ = [
    "get_amount_out",
    "quote",
    "resolve_deposit",
    "shares_to_mint",
    "spot_price",
    "withdrawal_amounts",
]
