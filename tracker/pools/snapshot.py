"""Pool snapshot model."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from tracker.errors import PoolNotFound
from tracker.types import Asset
from .base import PoolKind
from .pricing import quote_left_to_right, quote_right_to_left


@dataclass(frozen=True)
class PoolStats:
    """Fees and volume for the last 24 hours, in raw units."""
    left_fees: int = 0
    right_fees: int = 0
    left_volume: int = 0
    right_volume: int = 0


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Two-asset liquidity pool at the moment it was fetched.

    Left and right keep the order returned by the API; prices are only
    meaningful relative to that order. `last_price` comes from the API
    and may be inverted depending on the last trade direction, use
    `price_per_left` / `price_per_right` for a fixed direction.
    """
    address: str
    kind: PoolKind
    left: Asset
    right: Asset
    left_reserve: int
    right_reserve: int
    lt: int = 0
    total_supply: int = 0
    trade_fee_percent: float = 0.0
    last_price: Optional[float] = None
    stats: PoolStats = field(default_factory=PoolStats)

    def __post_init__(self):
        if self.left_reserve < 0 or self.right_reserve < 0:
            raise ValueError(f"Reserves must be non-negative: ({self.left_reserve}, {self.right_reserve})")

    @property
    def trade_fee(self) -> float:
        """Trade fee as a fraction in [0, 1]."""
        return self.trade_fee_percent / 100.0

    @property
    def price_per_left(self) -> float:
        """Right tokens per one left token (without trade fee)."""
        return quote_left_to_right(self, 1.0)

    @property
    def price_per_right(self) -> float:
        """Left tokens per one right token (without trade fee)."""
        return quote_right_to_left(self, 1.0)

    def quote_left_to_right(
        self, left_amount: float, left_decimals: Optional[int] = None, right_decimals: Optional[int] = None
    ) -> float:
        return quote_left_to_right(self, left_amount, left_decimals, right_decimals)

    def quote_right_to_left(
        self, right_amount: float, left_decimals: Optional[int] = None, right_decimals: Optional[int] = None
    ) -> float:
        return quote_right_to_left(self, right_amount, left_decimals, right_decimals)

    def __str__(self) -> str:
        return f"{self.left}/{self.right} {self.kind.value} pool {self.address[:8]}.."


def find_pool(pools: Iterable[PoolSnapshot], address: str) -> PoolSnapshot:
    """Pick a pool by address from a fetched pool set."""
    for pool in pools:
        if pool.address == address:
            return pool
    raise PoolNotFound(address)
