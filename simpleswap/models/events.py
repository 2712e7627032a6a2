"""Outcome records emitted by the pool.

Each successful mutating call emits exactly one record. Records are
immutable pydantic models; ``to_log()`` renders them in the shape of an
EVM log (topic0 plus ABI-encoded data) so indexers that read chain logs
can consume the same records.
"""

from __future__ import annotations

from typing import Any, ClassVar

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak
from pydantic import BaseModel

from simpleswap.models.types import Address, Uint256


class PoolEvent(BaseModel):
    """Base class for pool outcome records.

    Subclasses declare their Solidity-style ``SIGNATURE`` and the ABI type
    of each field, in field declaration order.
    """

    SIGNATURE: ClassVar[str]
    ABI_TYPES: ClassVar[tuple[str, ...]]

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        """Event name, e.g. "Swap"."""
        return self.SIGNATURE.split("(", 1)[0]

    @classmethod
    def topic(cls) -> str:
        """keccak256 of the event signature, 0x-prefixed."""
        return "0x" + keccak(text=cls.SIGNATURE).hex()

    def _abi_values(self) -> list[Any]:
        values: list[Any] = []
        for abi_type, value in zip(self.ABI_TYPES, self.model_dump().values(), strict=True):
            if abi_type == "address":
                values.append(bytes.fromhex(value[2:]))
            else:
                values.append(value)
        return values

    def to_log(self) -> tuple[list[str], str]:
        """Encode as an EVM-style log.

        No field is indexed, so topics holds only the signature hash and
        every field is ABI-encoded into data.

        Returns:
            Tuple of (topics, data) with data as 0x-prefixed hex
        """
        data = encode(list(self.ABI_TYPES), self._abi_values())
        return [self.topic()], "0x" + data.hex()


class LiquidityAdded(PoolEvent):
    """Liquidity was deposited and shares minted."""

    SIGNATURE: ClassVar[str] = "LiquidityAdded(address,address,uint256,uint256,uint256)"
    ABI_TYPES: ClassVar[tuple[str, ...]] = ("address", "address", "uint256", "uint256", "uint256")

    provider: Address
    recipient: Address
    amount_a: Uint256
    amount_b: Uint256
    shares_minted: Uint256


class LiquidityRemoved(PoolEvent):
    """Shares were burned and the proportional reserves withdrawn."""

    SIGNATURE: ClassVar[str] = "LiquidityRemoved(address,address,uint256,uint256,uint256)"
    ABI_TYPES: ClassVar[tuple[str, ...]] = ("address", "address", "uint256", "uint256", "uint256")

    withdrawer: Address
    recipient: Address
    shares_in: Uint256
    amount_a: Uint256
    amount_b: Uint256


class Swap(PoolEvent):
    """One asset was exchanged for the other."""

    SIGNATURE: ClassVar[str] = "Swap(address,address,address,address,uint256,uint256)"
    ABI_TYPES: ClassVar[tuple[str, ...]] = (
        "address",
        "address",
        "address",
        "address",
        "uint256",
        "uint256",
    )

    caller: Address
    recipient: Address
    token_in: Address
    token_out: Address
    amount_in: Uint256
    amount_out: Uint256


__all__ = ["PoolEvent", "LiquidityAdded", "LiquidityRemoved", "Swap"]
