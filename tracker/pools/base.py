"""Base classes for pool invariants."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Optional


class PoolKind(Enum):
    VOLATILE = "volatile"
    STABLE = "stable"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PoolKind":
        if value == "volatile":
            return cls.VOLATILE
        if value == "stable":
            return cls.STABLE
        return cls.UNKNOWN


class Invariant(ABC):
    """
    AMM curve used to quote swaps.

    Reserves passed in are already normalized by the asset decimals
    (human units) and the quote ignores the pool trade fee.
    """
    POOL_KIND: ClassVar[PoolKind] = PoolKind.UNKNOWN

    @abstractmethod
    def constant(self, reserve_in: float, reserve_out: float) -> float:
        """Invariant value k for the given reserves."""
        ...

    @abstractmethod
    def quote(self, reserve_in: float, reserve_out: float, amount_in: float) -> float:
        """Amount of the output asset received for `amount_in` of the input asset."""
        ...
