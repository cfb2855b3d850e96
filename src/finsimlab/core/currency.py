"""
Precision handling for FinSimLab balances.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from enum import Enum


class RoundingPolicy(Enum):
    """Rounding policies for money values."""

    BANKERS = ROUND_HALF_EVEN
    HALF_UP = ROUND_HALF_UP


MONEY_DECIMALS = 2


def round_money(
    value: float,
    decimals: int = MONEY_DECIMALS,
    rounding: RoundingPolicy = RoundingPolicy.HALF_UP,
) -> float:
    """
    Round a float balance to ``decimals`` places.

    The float is converted to its exact binary Decimal expansion before
    quantizing, so ``1.005`` (stored as 1.00499999...) rounds to ``1.0``
    while an exact tie such as ``0.125`` rounds away from zero to ``0.13``.
    Negative zero is normalised to ``0.0``.

    Args:
        value: Value to round
        decimals: Number of decimal places (default: 2)
        rounding: Tie-breaking policy (default: half away from zero)

    Returns:
        The rounded value as a float
    """
    quantum = Decimal("1").scaleb(-decimals)
    rounded = float(Decimal(value).quantize(quantum, rounding=rounding.value))
    return rounded + 0.0


def rounded_total(values: Iterable[float]) -> float:
    """
    Net worth of already rounded balances.

    Components are rounded first, summed, and the sum is rounded again to
    strip float noise introduced by the addition.
    """
    return round_money(sum(round_money(v) for v in values))
