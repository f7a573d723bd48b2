"""Pool model and AMM pricing for Dedust pools."""

from .base import Invariant, PoolKind
from .pricing import INVARIANTS, get_invariant, quote_left_to_right, quote_right_to_left, reset_unknown_warnings
from .snapshot import PoolSnapshot, PoolStats, find_pool
from .stable import StableInvariant, solve_depressed_cubic
from .volatile import VolatileInvariant

__all__ = [
    "Invariant", "PoolKind", "PoolSnapshot", "PoolStats", "find_pool",
    "VolatileInvariant", "StableInvariant", "solve_depressed_cubic",
    "INVARIANTS", "get_invariant", "quote_left_to_right", "quote_right_to_left",
    "reset_unknown_warnings",
]
