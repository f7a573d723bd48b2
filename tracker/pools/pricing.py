"""Swap quotes for pool snapshots."""

import logging
from typing import TYPE_CHECKING, Dict, Optional, Set

from tracker.errors import InvalidArgument
from .base import Invariant, PoolKind
from .stable import invariant as stable_invariant
from .volatile import invariant as volatile_invariant

if TYPE_CHECKING:
    from .snapshot import PoolSnapshot

logger = logging.getLogger(__name__)

# Invariant registry
INVARIANTS: Dict[PoolKind, Invariant] = {
    PoolKind.VOLATILE: volatile_invariant,
    PoolKind.STABLE: stable_invariant,
}

_warned_unknown: Set[str] = set()


def get_invariant(kind: PoolKind, pool_address: str = "") -> Invariant:
    """
    Invariant for a pool kind. Unknown kinds are priced as volatile.

    The fallback warning is logged once per pool address for the lifetime
    of the process; `reset_unknown_warnings` clears that memory.
    """
    if kind in INVARIANTS:
        return INVARIANTS[kind]
    if pool_address not in _warned_unknown:
        _warned_unknown.add(pool_address)
        logger.warning(f"Pool {pool_address or '?'} has unknown type, pricing it as volatile")
    return volatile_invariant


def reset_unknown_warnings():
    _warned_unknown.clear()


def _normalize(reserve: int, decimals: int) -> float:
    return reserve / 10 ** decimals


def _check_amount(amount: float, name: str):
    if amount <= 0:
        raise InvalidArgument(f"{name} must be greater than zero, got {amount}")


def quote_left_to_right(
    pool: "PoolSnapshot",
    left_amount: float,
    left_decimals: Optional[int] = None,
    right_decimals: Optional[int] = None,
) -> float:
    """
    Amount of right asset received for swapping `left_amount` of the left asset.

    Amounts are in human units. The trade fee is not applied. Returns 0 when
    the pool has no liquidity on either side.

    Raises:
        InvalidArgument: if `left_amount` is not positive
    """
    _check_amount(left_amount, "left_amount")
    if pool.left_reserve == 0 or pool.right_reserve == 0:
        return 0.0
    left = _normalize(pool.left_reserve, pool.left.decimals if left_decimals is None else left_decimals)
    right = _normalize(pool.right_reserve, pool.right.decimals if right_decimals is None else right_decimals)
    return get_invariant(pool.kind, pool.address).quote(left, right, left_amount)


def quote_right_to_left(
    pool: "PoolSnapshot",
    right_amount: float,
    left_decimals: Optional[int] = None,
    right_decimals: Optional[int] = None,
) -> float:
    """
    Amount of left asset received for swapping `right_amount` of the right asset.

    Same rules as `quote_left_to_right`. Decimal overrides are used when the
    asset metadata is missing or wrong (the default of 9 is then assumed).
    """
    _check_amount(right_amount, "right_amount")
    if pool.left_reserve == 0 or pool.right_reserve == 0:
        return 0.0
    left = _normalize(pool.left_reserve, pool.left.decimals if left_decimals is None else left_decimals)
    right = _normalize(pool.right_reserve, pool.right.decimals if right_decimals is None else right_decimals)
    return get_invariant(pool.kind, pool.address).quote(right, left, right_amount)
