"""Pool and trade fetching."""

from .client import PoolSource

__all__ = ["PoolSource"]
