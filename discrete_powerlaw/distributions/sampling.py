"""Inverse-CDF search helpers for drawing from a discrete survival function.

All functions here are pure: they take the survival function as a callable
(``cdf(x) = P(X >= x)``, non-increasing in x) and know nothing about the model
that produced it.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Tuple

import numpy as np

# Largest value the bracketing step will reach; keeps draws representable as int64.
MAX_SAMPLE_VALUE = 2**62

SurvivalFunction = Callable[[int], float]


def bracket_inverse_cdf(cdf: SurvivalFunction, start: int, target: float) -> Tuple[int, int]:
    """Double an upper bound from ``start`` until ``cdf(upper) < target``.

    Returns ``(low, high)`` with ``cdf(low) >= target > cdf(high)`` whenever
    ``cdf(start) >= target``.
    """
    high = max(int(start), 1)
    while True:
        low = high
        high = 2 * low
        if high >= MAX_SAMPLE_VALUE:
            return low, MAX_SAMPLE_VALUE
        if cdf(high) < target:
            return low, high


def search_inverse_cdf(cdf: SurvivalFunction, low: int, high: int, target: float) -> int:
    """Largest x in [low, high) with ``cdf(x) >= target``.

    This is the integer whose survival step straddles the target:
    ``cdf(x) >= target > cdf(x + 1)``. Requires ``cdf(high) < target``; when
    ``cdf(low) < target`` as well, ``low`` is returned.
    """
    while high - low > 1:
        mid = low + (high - low) // 2
        if cdf(mid) >= target:
            low = mid
        else:
            high = mid
    return low


def inverse_cdf_sample(cdf: SurvivalFunction, xmin: int, target: float) -> int:
    """Draw for uniform ``target`` in (0, 1]: bracket from ``xmin`` then bisect."""
    low, high = bracket_inverse_cdf(cdf, xmin, target)
    return search_inverse_cdf(cdf, low, high, target)


def table_inverse_cdf(table: np.ndarray, xmin: int, targets: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised inverse over a precomputed survival table.

    Returns the draws and a mask of targets that fall at or below the last
    table entry (``cdf(xmax) >= target``); those need the caller to continue
    past the table.
    """
    ascending = table[::-1]
    covered = table.size - np.searchsorted(ascending, targets, side="left")
    draws = xmin + covered - 1
    beyond = covered >= table.size
    return draws.astype(np.int64), beyond


def approximate_sample(
    alpha: float,
    xmin: int,
    uniforms: np.ndarray,
    xmax: Optional[int] = None,
) -> np.ndarray:
    """Continuous approximation: floor((xmin - 1/2)(1 - r)^(-1/(alpha-1)) + 1/2).

    Values above ``MAX_SAMPLE_VALUE`` are clipped; truncation to ``xmax`` is
    left to the caller.
    """
    exponent = -1.0 / (alpha - 1.0)
    with np.errstate(over="ignore", divide="ignore"):
        values = np.floor((xmin - 0.5) * np.power(1.0 - uniforms, exponent) + 0.5)
    values = np.clip(values, xmin, float(MAX_SAMPLE_VALUE))
    if xmax is not None and not math.isinf(xmax):
        values = np.where(values > xmax, -1.0, values)
    return values.astype(np.int64)


__all__ = [
    "MAX_SAMPLE_VALUE",
    "bracket_inverse_cdf",
    "search_inverse_cdf",
    "inverse_cdf_sample",
    "table_inverse_cdf",
    "approximate_sample",
]
