"""Dedust REST API client."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from tracker.errors import ParseError, TransientFetchError
from tracker.pools import PoolSnapshot
from tracker.types import Trade
from .parsing import parse_pool, parse_trade

logger = logging.getLogger(__name__)

API_VERSION = "2"
BASE_URL = f"https://api.dedust.io/v{API_VERSION}/"
POOLS = "pools"
TRADES = "trades"


class DedustClient:
    """
    Async client for the Dedust v2 REST API.

    Every failure (connection error, timeout, non-200 status, garbage body)
    is raised as TransientFetchError; callers are expected to retry.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 100.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def connect(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True
            logger.info(f"Dedust client ready ({self.base_url})")

    async def disconnect(self):
        if self._session and self._owns_session:
            await self._session.close()
            logger.info("Dedust client closed")
        if self._owns_session:
            self._session = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET `path` and decode the JSON body."""
        if self._session is None:
            await self.connect()
        url = f"{self.base_url}{path}"
        try:
            async with self._session.get(url, params=params) as response:
                body = await response.read()
                logger.debug(f"GET {url} {params or ''} -> {response.status}: {body.decode('utf-8', errors='replace')}")
                if response.status != 200:
                    raise TransientFetchError(f"Bad status code: {response.status}", status=response.status)
        except aiohttp.ClientError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransientFetchError(f"Request to {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Request to {url} timed out")
            raise TransientFetchError(f"Request to {url} timed out") from e
        except TransientFetchError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            logger.error(f"Request to {url} returned invalid JSON: {e}")
            raise TransientFetchError(f"Invalid JSON from {url}") from e

    async def fetch_pools(self) -> List[PoolSnapshot]:
        """Fetch available pools and their reserves. Malformed entries are skipped."""
        data = await self._get(POOLS)
        if not isinstance(data, list):
            raise TransientFetchError(f"Unexpected pools payload: {type(data).__name__}")
        pools = []
        for entry in data:
            try:
                pools.append(parse_pool(entry))
            except (ParseError, ValueError) as e:
                logger.debug(f"Failed to parse pool: {e}")
        logger.debug(f"{len(pools)} pools fetched successfully")
        return pools

    async def fetch_trades(
        self, pool_address: str, count: Optional[int] = None, after_lt: Optional[int] = None
    ) -> List[Trade]:
        """
        Fetch the latest trades of a pool.

        Args:
            pool_address: Address of the pool
            count: Number of trades (API default is 50). Fewer are returned
                when there are not enough trades after `after_lt`.
            after_lt: Only return trades with greater lt. Without it the
                latest `count` trades are returned.
        """
        params = {}
        if count is not None:
            params["page_size"] = str(count)
        if after_lt is not None:
            params["after_lt"] = str(after_lt)
        data = await self._get(f"{POOLS}/{quote(pool_address, safe='')}/{TRADES}", params)
        if not isinstance(data, list):
            raise TransientFetchError(f"Unexpected trades payload: {type(data).__name__}")
        try:
            trades = [parse_trade(entry) for entry in data]
        except (ParseError, ValueError) as e:
            raise TransientFetchError(f"Malformed trade from pool {pool_address}: {e}") from e
        logger.debug(f"{len(trades)} trades from pool {pool_address} fetched successfully")
        return sorted(trades, key=lambda t: t.lt)
