"""Volatile pools - constant product AMM (x * y = k)."""

from typing import ClassVar

from .base import Invariant, PoolKind


class VolatileInvariant(Invariant):
    """Constant product curve used by Dedust volatile pools."""
    POOL_KIND: ClassVar[PoolKind] = PoolKind.VOLATILE

    def constant(self, reserve_in: float, reserve_out: float) -> float:
        return reserve_in * reserve_out

    def quote(self, reserve_in: float, reserve_out: float, amount_in: float) -> float:
        """output = reserve_out - k / (reserve_in + amount_in)"""
        k = self.constant(reserve_in, reserve_out)
        return reserve_out - k / (reserve_in + amount_in)


invariant = VolatileInvariant()
