"""Data source protocol for pools and trades."""

from typing import List, Optional, Protocol

from tracker.pools import PoolSnapshot
from tracker.types import Trade


class PoolSource(Protocol):
    """
    Interface for pool data providers (Dedust REST API, fixtures in tests).

    Both methods raise TransientFetchError on network failures, timeouts
    and non-success responses.
    """

    async def fetch_pools(self) -> List[PoolSnapshot]:
        """Fetch all available pools."""
        ...

    async def fetch_trades(
        self, pool_address: str, count: Optional[int] = None, after_lt: Optional[int] = None
    ) -> List[Trade]:
        """
        Fetch trades of a pool ordered by ascending lt.

        Without `after_lt` the latest `count` trades are returned, otherwise
        up to `count` trades with lt strictly greater than `after_lt`.
        """
        ...
