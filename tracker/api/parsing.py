"""Conversion of Dedust API payloads into snapshots."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from tracker.errors import ParseError
from tracker.pools import PoolKind, PoolSnapshot, PoolStats
from tracker.types import DEFAULT_DECIMALS, Asset, AssetKind, Trade, TradeAsset


def _uint(value: Any, field: str) -> int:
    """Unsigned integers come as decimal strings (they overflow JSON numbers)."""
    try:
        result = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ParseError(f"{field}: expected unsigned integer, got {value!r}")
    if result < 0:
        raise ParseError(f"{field}: expected unsigned integer, got {value!r}")
    return result


def _float(value: Any, field: str) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ParseError(f"{field}: expected number, got {value!r}")


def _object(value: Any, field: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"{field}: expected object, got {type(value).__name__}")
    return value


def _pair(values: Optional[Sequence[Any]], field: str) -> List[int]:
    if values is None:
        return [0, 0]
    if not isinstance(values, (list, tuple)):
        raise ParseError(f"{field}: expected list, got {type(values).__name__}")
    if len(values) != 2:
        raise ParseError(f"{field}: expected 2 values, got {len(values)}")
    return [_uint(v, field) for v in values]


def _timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ParseError(f"createdAt: expected ISO timestamp, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ParseError(f"createdAt: bad timestamp {value!r}")
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def parse_asset(data: Dict[str, Any]) -> Asset:
    data = _object(data, "asset")
    meta = _object(data.get("metadata") or {}, "metadata")
    decimals = meta.get("decimals")
    return Asset(
        kind=AssetKind.parse(data.get("type")),
        address=data.get("address") or "",
        name=meta.get("name") or "",
        symbol=meta.get("symbol") or "",
        image=meta.get("image") or "",
        decimals=DEFAULT_DECIMALS if decimals is None else _uint(decimals, "metadata.decimals"),
    )


def parse_trade_asset(data: Dict[str, Any]) -> TradeAsset:
    data = _object(data, "trade asset")
    return TradeAsset(kind=AssetKind.parse(data.get("type")), address=data.get("address") or "")


def parse_pool(data: Dict[str, Any]) -> PoolSnapshot:
    """
    Parse one entry of `GET /pools`.

        {"address": "EQ..", "lt": "4457..", "totalSupply": "1230..", "type": "volatile",
         "tradeFee": "0.25", "assets": [{"type": "native"}, {"type": "jetton", ...}],
         "reserves": ["..", ".."], "lastPrice": null, "stats": {"fees": [..], "volume": [..]}}
    """
    if not isinstance(data, dict):
        raise ParseError(f"pool: expected object, got {type(data).__name__}")
    assets = data.get("assets") or []
    if not isinstance(assets, list) or len(assets) != 2:
        raise ParseError(f"pool {data.get('address')}: expected 2 assets, got {assets!r}")
    reserves = _pair(data.get("reserves"), "reserves")
    stats = _object(data.get("stats") or {}, "stats")
    fees = _pair(stats.get("fees"), "stats.fees")
    volume = _pair(stats.get("volume"), "stats.volume")
    return PoolSnapshot(
        address=data.get("address") or "",
        kind=PoolKind.parse(data.get("type")),
        left=parse_asset(assets[0]),
        right=parse_asset(assets[1]),
        left_reserve=reserves[0],
        right_reserve=reserves[1],
        lt=_uint(data.get("lt", 0), "lt"),
        total_supply=_uint(data.get("totalSupply", 0), "totalSupply"),
        trade_fee_percent=_float(data.get("tradeFee"), "tradeFee") or 0.0,
        last_price=_float(data.get("lastPrice"), "lastPrice"),
        stats=PoolStats(left_fees=fees[0], right_fees=fees[1], left_volume=volume[0], right_volume=volume[1]),
    )


def parse_trade(data: Dict[str, Any]) -> Trade:
    """Parse one entry of `GET /pools/{address}/trades`."""
    if not isinstance(data, dict):
        raise ParseError(f"trade: expected object, got {type(data).__name__}")
    try:
        return Trade(
            sender=data["sender"],
            asset_in=parse_trade_asset(data["assetIn"]),
            asset_out=parse_trade_asset(data["assetOut"]),
            amount_in=_uint(data["amountIn"], "amountIn"),
            amount_out=_uint(data["amountOut"], "amountOut"),
            lt=_uint(data["lt"], "lt"),
            created_at=_timestamp(data["createdAt"]),
        )
    except KeyError as e:
        raise ParseError(f"trade: missing field {e}")
