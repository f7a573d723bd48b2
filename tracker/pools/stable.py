"""
Stable pools - cubic invariant x^3 * y + y^3 * x = k.

After adding the input amount the invariant becomes a cubic in the output
reserve with no quadratic term:

    x' * t^3 + x'^3 * t - k = 0

which is solved in closed form (Cardano) by `solve_depressed_cubic`.
"""

import math
from typing import ClassVar

from .base import Invariant, PoolKind


def _cbrt(value: float) -> float:
    """Real cube root keeping the sign."""
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


def solve_depressed_cubic(a: float, c: float, d: float) -> float:
    """
    Real root of a * t^3 + c * t + d = 0.

    Only meant for the reserve balance equation above, where a > 0, c > 0
    and d < 0. There the discriminant is positive and the cubic has exactly
    one real root. It is not a general cubic solver.
    """
    c /= a
    d /= a
    h = math.sqrt(d * d / 4.0 + c * c * c / 27.0)
    s = _cbrt(-d / 2.0 + h)
    u = _cbrt(-d / 2.0 - h)
    return s + u


class StableInvariant(Invariant):
    """Curve used by Dedust stable pools."""
    POOL_KIND: ClassVar[PoolKind] = PoolKind.STABLE

    def constant(self, reserve_in: float, reserve_out: float) -> float:
        return reserve_in ** 3 * reserve_out + reserve_out ** 3 * reserve_in

    def new_reserve_out(self, reserve_in: float, reserve_out: float, amount_in: float) -> float:
        """Output side reserve that keeps k after `amount_in` is added to the input side."""
        k = self.constant(reserve_in, reserve_out)
        x = reserve_in + amount_in
        return solve_depressed_cubic(x, x ** 3, -k)

    def quote(self, reserve_in: float, reserve_out: float, amount_in: float) -> float:
        return reserve_out - self.new_reserve_out(reserve_in, reserve_out, amount_in)


invariant = StableInvariant()
