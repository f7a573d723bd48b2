"""Notification model and sink protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from tracker.pools import PoolSnapshot
from tracker.types import Trade


@dataclass(frozen=True)
class Notification:
    """New trades of one poll cycle with the settled price."""
    trades: Tuple[Trade, ...]
    price: float  # native asset per tracked token
    secondary_price: float  # USD per tracked token
    price_change: float  # fraction, new / last - 1
    quote_pool: Optional[PoolSnapshot] = None  # native/USD pool used for trade values

    @property
    def is_up(self) -> bool:
        return self.price_change >= 0


class NotificationSink(Protocol):
    """Delivers notifications. Raises NotificationError on failure."""

    async def send(self, notification: Notification) -> None:
        ...
