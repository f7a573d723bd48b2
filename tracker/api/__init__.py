"""Dedust API access."""

from .client import BASE_URL, DedustClient
from .parsing import parse_asset, parse_pool, parse_trade

__all__ = ["BASE_URL", "DedustClient", "parse_asset", "parse_pool", "parse_trade"]
