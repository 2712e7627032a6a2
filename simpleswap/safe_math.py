"""Checked integer arithmetic for token amounts.

Pool math runs on plain Python ints with floor division. The helpers here
make the failure modes explicit instead of leaking ZeroDivisionError or
producing negative balances:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Values outside uint256 raise Uint256Overflow

Usage pattern:
    from simpleswap.safe_math import mul_div, checked_sub

    shares = mul_div(total_shares, amount_a, reserve_a)  # Raises if reserve_a == 0
    remaining = checked_sub(balance, amount)             # Raises if amount > balance
"""

from __future__ import annotations

import math

from simpleswap.constants import UINT256_MAX


class SafeMathError(ArithmeticError):
    """Base class for checked arithmetic errors."""

    pass


class DivisionByZero(SafeMathError):
    """Division by zero."""

    pass


class Underflow(SafeMathError):
    """Result would be negative."""

    pass


class Uint256Overflow(SafeMathError):
    """Value does not fit in uint256."""

    pass


def is_uint256(value: object) -> bool:
    """Check if value is an int (not bool) within [0, 2^256-1]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= UINT256_MAX


def to_uint256(value: int) -> int:
    """Return value unchanged after validating uint256 bounds.

    Raises:
        Uint256Overflow: If value is negative or exceeds 2^256-1
    """
    if value < 0:
        raise Uint256Overflow(f"Negative value cannot be uint256: {value}")
    if value > UINT256_MAX:
        raise Uint256Overflow(f"Value exceeds uint256 max: {value}")
    return value


def checked_sub(a: int, b: int) -> int:
    """Subtract b from a.

    Raises:
        Underflow: If b > a
    """
    result = a - b
    if result < 0:
        raise Underflow(f"Underflow: {a} - {b} = {result}")
    return result


def floor_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero for non-negative operands.

    Raises:
        DivisionByZero: If denominator is zero
    """
    if denominator == 0:
        raise DivisionByZero(f"Division by zero: {numerator} // 0")
    return numerator // denominator


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute floor(a * b / denominator) without intermediate rounding.

    Raises:
        DivisionByZero: If denominator is zero
    """
    return floor_div(a * b, denominator)


def sqrt_floor(value: int) -> int:
    """Integer square root, floor(sqrt(value)).

    Raises:
        Underflow: If value is negative
    """
    if value < 0:
        raise Underflow(f"Square root of negative value: {value}")
    return math.isqrt(value)


__all__ = [
    "SafeMathError",
    "DivisionByZero",
    "Underflow",
    "Uint256Overflow",
    "is_uint256",
    "to_uint256",
    "checked_sub",
    "floor_div",
    "mul_div",
    "sqrt_floor",
]
