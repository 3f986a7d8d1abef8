"""Scalar interpolation helpers shared by the estimators."""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return min(high, max(low, value))


def inv_lerp(a: float, b: float, value: float) -> float:
    """Position of ``value`` between ``a`` and ``b`` (0 when the edges coincide)."""
    if a == b:
        return 0.0
    return (value - a) / (b - a)


def smooth_step(edge0: float, edge1: float, x: float) -> float:
    """
    Cubic Hermite step from 0 at ``edge0`` to 1 at ``edge1``.

    Args:
        edge0: Input value where the step starts
        edge1: Input value where the step is complete
        x: Input value

    Returns:
        t² (3 - 2t) with t = clamp((x - edge0) / (edge1 - edge0), 0, 1)
    """
    t = clamp(inv_lerp(edge0, edge1, x), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (like JavaScript `Math.round`)."""
    return int(math.floor(value + 0.5))
