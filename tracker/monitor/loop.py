"""
Trade monitoring loop.

    bootstrap -> poll -> (no trades) poll
                      -> (new trades) settle -> emit -> poll

A single task owns the trade cursor and the last reported price. The
cursor lives in memory only: after a restart the loop reseeds at the
latest trade and trades seen in between are not reported.
"""

import logging
from typing import List, Optional, Tuple

from config.settings import Settings
from tracker.errors import MonitorStopped, NotificationError, PoolNotFound, TransientFetchError
from tracker.fetching import PoolSource
from tracker.notify.base import Notification, NotificationSink
from tracker.pools import PoolSnapshot, find_pool
from tracker.types import Trade
from .clock import AsyncioClock, Clock
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


class TradeMonitor:
    """Polls a pool for new trades and emits them with a freshly settled price."""

    def __init__(
        self,
        source: PoolSource,
        sink: NotificationSink,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        self.source = source
        self.sink = sink
        self.settings = settings or Settings()
        self.clock = clock or AsyncioClock()
        self.cursor: Optional[int] = None
        self.last_price: Optional[float] = None
        self.stats = {
            "polls": 0,
            "fetch_errors": 0,
            "trades_reported": 0,
            "quote_evaluations": 0,
        }
        self._bootstrap_policy = RetryPolicy(delay=0.0)
        self._settle_policy = RetryPolicy(delay=self.settings.settle_delay)

    # ---- quotes ----

    def quote(self, pool: PoolSnapshot) -> float:
        """Native units per one tracked token."""
        self.stats["quote_evaluations"] += 1
        return pool.quote_right_to_left(1.0, right_decimals=self.settings.asset_decimals)

    def secondary_quote(self, quote_pool: PoolSnapshot, price: float) -> float:
        """USD value of `price` native units."""
        return quote_pool.quote_left_to_right(price) if price > 0 else 0.0

    async def _fetch_pool(self, address: str) -> PoolSnapshot:
        return find_pool(await self.source.fetch_pools(), address)

    async def _fetch_pools(self) -> Tuple[PoolSnapshot, PoolSnapshot]:
        pools = await self.source.fetch_pools()
        return find_pool(pools, self.settings.pool_address), find_pool(pools, self.settings.quote_pool_address)

    # ---- states ----

    async def bootstrap(self):
        """Seed the cursor with the latest trade. Retries until it succeeds."""

        async def seed():
            trades = await self.source.fetch_trades(self.settings.pool_address, 1)
            if not trades:
                raise TransientFetchError(f"No trades in pool {self.settings.pool_address}")
            pool = await self._fetch_pool(self.settings.pool_address)
            return trades[-1], pool

        trade, pool = await self._bootstrap_policy.call(seed, self.clock, "fetch first trade")
        self.cursor = trade.lt
        self.last_price = self.quote(pool)
        logger.info(f"Tracking {pool} from lt {self.cursor}, price {self.last_price:.6f}")
        await self.clock.sleep(self.settings.warmup_delay)

    async def poll_once(self) -> Optional[Notification]:
        """One poll cycle. Returns the emitted notification when new trades were found."""
        if self.cursor is None:
            raise RuntimeError("bootstrap() must run before polling")
        self.stats["polls"] += 1
        try:
            trades = await self.source.fetch_trades(
                self.settings.pool_address, self.settings.trade_page_size, self.cursor
            )
            if trades:
                await self.clock.sleep(self.settings.prefetch_delay)
                pool, quote_pool = await self._fetch_pools()
        except TransientFetchError as e:
            self.stats["fetch_errors"] += 1
            logger.error(f"Unable to fetch last trades: {e}. Retrying after {self.settings.error_backoff} seconds")
            await self.clock.sleep(self.settings.error_backoff)
            return None
        except PoolNotFound as e:
            self.stats["fetch_errors"] += 1
            logger.error(f"Unable to find tracked pools: {e}. Retrying after {self.settings.error_backoff} seconds")
            await self.clock.sleep(self.settings.error_backoff)
            return None

        notification = None
        if trades:
            logger.info(f"{len(trades)} new trades after lt {self.cursor}")
            price = await self.settle(pool)
            notification = await self.emit(trades, price, quote_pool)
        await self.clock.sleep(self.settings.poll_interval)
        return notification

    async def settle(self, pool: PoolSnapshot) -> float:
        """
        Wait for the price to move after new trades.

        Reserves may lag behind the trade list, so the pool is re-fetched
        while the quote still equals the last reported one, at most
        `settle_retries` times. Fetch failures do not use up a retry.
        """
        price = self.quote(pool)
        retries = 0
        while price == self.last_price and retries < self.settings.settle_retries:
            await self.clock.sleep(self.settings.settle_delay)
            pool = await self._settle_policy.call(
                lambda: self._fetch_pool(self.settings.pool_address), self.clock, "refresh pool while settling price"
            )
            price = self.quote(pool)
            retries += 1
        if price == self.last_price:
            logger.debug(f"Price did not move after {retries} retries")
        return price

    async def emit(self, trades: List[Trade], price: float, quote_pool: PoolSnapshot) -> Notification:
        """Hand the batch to the sink and advance the cursor."""
        last = self.last_price
        change = price / last - 1.0 if last else 0.0
        notification = Notification(
            trades=tuple(trades),
            price=price,
            secondary_price=self.secondary_quote(quote_pool, price),
            price_change=change,
            quote_pool=quote_pool,
        )
        self.last_price = price
        self.cursor = max(self.cursor, trades[-1].lt)
        self.stats["trades_reported"] += len(trades)
        try:
            await self.sink.send(notification)
        except NotificationError as e:
            logger.error(f"Unable to send notification for lt {self.cursor}: {e}")
        return notification

    # ---- lifecycle ----

    async def run(self):
        """Bootstrap and poll until stopped."""
        try:
            await self.bootstrap()
            while True:
                await self.poll_once()
        except MonitorStopped:
            logger.info(f"Monitor stopped at lt {self.cursor}")

    def stop(self):
        """Request shutdown; the loop exits at its next wait."""
        stop = getattr(self.clock, "stop", None)
        if stop is None:
            raise RuntimeError(f"{type(self.clock).__name__} does not support stopping")
        stop()
