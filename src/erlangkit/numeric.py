# src/erlangkit/numeric.py
from __future__ import annotations

import math


def min_max(value: float, lo: float, hi: float) -> float:
    """Bound value to [lo, hi]."""
    return max(min(value, hi), lo)


def clamp_probability(value: float) -> float:
    return min_max(float(value), 0.0, 1.0)


def secs(hours: float) -> int:
    """Convert a number of hours into whole seconds, rounding half up."""
    return int(math.floor(hours * 3600.0 + 0.5))


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10.0**digits
    return math.floor(value * scale + 0.5) / scale


def int_ceiling(value: float) -> int:
    """
    Round away from zero to the next whole number.

    Values already within 0.0001 of an integer stay on it:
      int_ceiling(2.00001) == 2, int_ceiling(2.1) == 3, int_ceiling(-2.1) == -4
    """
    if value < 0:
        return int(math.floor(value - 0.9999))
    return int(math.floor(value + 0.9999))


def scaled_exp(scale: float, exponent: float) -> float:
    """
    scale * exp(exponent), with overflow reported as +inf.

    A zero scale short-circuits so that 0 * inf never produces nan.
    """
    if scale == 0:
        return 0.0
    try:
        return scale * math.exp(exponent)
    except OverflowError:
        return math.inf if scale > 0 else -math.inf


__all__ = [
    "min_max",
    "clamp_probability",
    "secs",
    "round_half_up",
    "int_ceiling",
    "scaled_exp",
]
