"""
Core types for the tracker.

Assets and trades as returned by the Dedust API. All of them are frozen:
a snapshot is rebuilt on every fetch and never mutated.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

DEFAULT_DECIMALS = 9


class AssetKind(Enum):
    NATIVE = "native"
    JETTON = "jetton"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AssetKind":
        if value == "native":
            return cls.NATIVE
        if value == "jetton":
            return cls.JETTON
        return cls.UNKNOWN


@dataclass(frozen=True)
class Asset:
    """
    Pool asset with its metadata.

    TON is the native asset and has no address. Decimals fall back to 9
    when the API provides no metadata.
    """
    kind: AssetKind
    address: str = ""
    name: str = ""
    symbol: str = ""
    image: str = ""
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative: {self.decimals}")

    @property
    def is_native(self) -> bool:
        return self.kind is AssetKind.NATIVE

    def __str__(self) -> str:
        if self.symbol:
            return self.symbol
        if self.is_native:
            return "TON"
        return f"{self.address[:8]}.." if self.address else self.kind.value


@dataclass(frozen=True)
class TradeAsset:
    """Asset reference inside a trade (no metadata)."""
    kind: AssetKind
    address: str = ""

    def matches(self, asset: Asset) -> bool:
        return self.kind is asset.kind and self.address == asset.address


@dataclass(frozen=True)
class Trade:
    """
    Swap executed in a pool.

    `lt` is the logical time assigned by the chain. It only orders trades
    and is used as the pagination cursor; it is not a timestamp.
    """
    sender: str
    asset_in: TradeAsset
    asset_out: TradeAsset
    amount_in: int
    amount_out: int
    lt: int
    created_at: datetime

    def __str__(self) -> str:
        return f"Trade(lt={self.lt}, {self.amount_in} {self.asset_in.kind.value} -> {self.amount_out} {self.asset_out.kind.value})"

