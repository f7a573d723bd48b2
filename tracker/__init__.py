"""
Dedust pool trade tracker.

Structure:
    tracker/
    ├── types.py          # Asset, Trade
    ├── errors.py         # Exception taxonomy
    ├── pools/            # Pool snapshots and AMM invariants
    ├── api/              # Dedust REST client
    ├── fetching/         # Data source protocol
    ├── monitor/          # Trade monitoring loop
    └── notify/           # Message rendering and Telegram sink

Usage:
    from tracker import Asset, Trade
    from tracker.pools import PoolSnapshot, quote_left_to_right
    from tracker.api import DedustClient
    from tracker.monitor import TradeMonitor
    from tracker.notify import TelegramSink, TradeWriter
"""

from .types import Asset, AssetKind, Trade, TradeAsset

__all__ = [
    # Types
    "Asset",
    "AssetKind",
    "Trade",
    "TradeAsset",
]
