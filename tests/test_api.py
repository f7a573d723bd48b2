"""Tests for Dedust payload parsing and the REST client."""

import asyncio
from datetime import datetime, timezone

import aiohttp
import pytest

from tracker.api import DedustClient, parse_pool, parse_trade
from tracker.errors import ParseError, TransientFetchError
from tracker.pools import PoolKind
from tracker.types import AssetKind
from tests.fakes import POOL_PAYLOAD, TRADE_PAYLOAD, StubResponse, StubSession


class TestParsing:

    def test_parse_pool(self):
        pool = parse_pool(POOL_PAYLOAD)
        assert pool.kind is PoolKind.VOLATILE
        assert pool.lt == 44570580000003
        assert pool.total_supply == 123000000000000
        assert pool.left_reserve == 2 ** 128 - 1
        assert pool.right_reserve == 2_000_000_000_000
        assert pool.trade_fee_percent == 0.25
        assert pool.last_price == pytest.approx(0.00012)
        assert pool.stats.left_fees == 10 and pool.stats.right_volume == 2000
        assert pool.left.kind is AssetKind.NATIVE and pool.left.symbol == "TON"
        assert pool.right.kind is AssetKind.JETTON
        assert pool.right.decimals == 9  # no metadata -> default
        assert pool.right.address.startswith("EQDf84FT")

    def test_parse_pool_defaults(self):
        payload = dict(POOL_PAYLOAD, type="weird", lastPrice=None, stats=None)
        pool = parse_pool(payload)
        assert pool.kind is PoolKind.UNKNOWN
        assert pool.last_price is None
        assert pool.stats.left_fees == 0 and pool.stats.right_volume == 0

    @pytest.mark.parametrize("patch", [
        {"assets": []},
        {"reserves": ["1"]},
        {"reserves": ["-5", "1"]},
        {"lt": "abc"},
        {"tradeFee": "x"},
        {"tradeFee": [1]},
        {"assets": "ab"},
        {"assets": [None, POOL_PAYLOAD["assets"][1]]},
        {"assets": [{"type": "native", "metadata": "x"}, POOL_PAYLOAD["assets"][1]]},
        {"reserves": 5},
        {"stats": [1, 2]},
        {"stats": {"fees": "10"}},
    ])
    def test_parse_pool_rejects_malformed(self, patch):
        with pytest.raises(ParseError):
            parse_pool(dict(POOL_PAYLOAD, **patch))

    def test_parse_trade(self):
        trade = parse_trade(TRADE_PAYLOAD)
        assert trade.asset_in.kind is AssetKind.NATIVE and trade.asset_in.address == ""
        assert trade.asset_out.kind is AssetKind.JETTON
        assert trade.amount_in == 5_000_000_000
        assert trade.lt == 44570580000004
        assert trade.created_at == datetime(2024, 2, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)

    def test_parse_trade_missing_field(self):
        payload = {k: v for k, v in TRADE_PAYLOAD.items() if k != "lt"}
        with pytest.raises(ParseError):
            parse_trade(payload)

    @pytest.mark.parametrize("patch", [
        {"assetIn": None},
        {"assetOut": "jetton"},
        {"createdAt": 1706790645},
        {"amountIn": {"value": 1}},
    ])
    def test_parse_trade_rejects_malformed(self, patch):
        with pytest.raises(ParseError):
            parse_trade(dict(TRADE_PAYLOAD, **patch))

    def test_parse_trade_rejects_non_object(self):
        with pytest.raises(ParseError):
            parse_trade(["not", "a", "trade"])


class TestDedustClient:

    @pytest.mark.asyncio
    async def test_fetch_pools(self):
        bad = dict(POOL_PAYLOAD, assets=[{"type": "native"}])
        session = StubSession(StubResponse(200, [POOL_PAYLOAD, bad]))
        client = DedustClient(session=session)
        pools = await client.fetch_pools()
        assert len(pools) == 1  # malformed pool skipped
        assert session.calls == [("https://api.dedust.io/v2/pools", None)]

    @pytest.mark.asyncio
    async def test_fetch_pools_skips_wrongly_typed_entries(self):
        broken = [
            dict(POOL_PAYLOAD, assets=[None, POOL_PAYLOAD["assets"][1]]),
            dict(POOL_PAYLOAD, stats=[1, 2]),
            "EQnotapool",
        ]
        client = DedustClient(session=StubSession(StubResponse(200, broken + [POOL_PAYLOAD])))
        pools = await client.fetch_pools()
        assert [p.address for p in pools] == [POOL_PAYLOAD["address"]]

    @pytest.mark.asyncio
    async def test_fetch_trades_query(self):
        older = dict(TRADE_PAYLOAD, lt="10")
        session = StubSession(StubResponse(200, [TRADE_PAYLOAD, older]))
        client = DedustClient(session=session)
        trades = await client.fetch_trades("EQPool", 5, 42)
        url, params = session.calls[0]
        assert url == "https://api.dedust.io/v2/pools/EQPool/trades"
        assert params == {"page_size": "5", "after_lt": "42"}
        assert [t.lt for t in trades] == [10, 44570580000004]

    @pytest.mark.asyncio
    async def test_fetch_trades_latest(self):
        session = StubSession(StubResponse(200, [TRADE_PAYLOAD]))
        await DedustClient(session=session).fetch_trades("EQPool", 1)
        assert session.calls[0][1] == {"page_size": "1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [
        StubResponse(500, "Internal Server Error"),
        StubResponse(429, {"error": "rate limited"}),
        StubResponse(200, "<html>not json</html>"),
        StubResponse(200, b"\xff\xfe[garbage"),
        StubResponse(200, {"error": "not a list"}),
        aiohttp.ClientConnectionError("connection reset"),
        asyncio.TimeoutError(),
    ])
    async def test_failures_are_transient(self, failure):
        client = DedustClient(session=StubSession(failure))
        with pytest.raises(TransientFetchError):
            await client.fetch_pools()

    @pytest.mark.asyncio
    async def test_bad_status_carries_code(self):
        client = DedustClient(session=StubSession(StubResponse(503, "")))
        with pytest.raises(TransientFetchError) as exc_info:
            await client.fetch_trades("EQPool", 5)
        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_malformed_trade_is_transient(self):
        session = StubSession(StubResponse(200, [{"sender": "x"}]))
        with pytest.raises(TransientFetchError):
            await DedustClient(session=session).fetch_trades("EQPool", 5)

    @pytest.mark.asyncio
    async def test_wrongly_typed_trade_is_transient(self):
        session = StubSession(StubResponse(200, [dict(TRADE_PAYLOAD, assetIn=None)]))
        with pytest.raises(TransientFetchError):
            await DedustClient(session=session).fetch_trades("EQPool", 5)

    @pytest.mark.asyncio
    async def test_non_utf8_trades_body_is_transient(self):
        session = StubSession(StubResponse(200, "[]".encode("utf-16")))
        with pytest.raises(TransientFetchError):
            await DedustClient(session=session).fetch_trades("EQPool", 5)

    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self):
        session = StubSession()
        async with DedustClient(session=session):
            pass
        assert not session.closed
