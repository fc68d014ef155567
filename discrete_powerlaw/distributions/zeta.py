"""Hurwitz zeta evaluation used to normalise the discrete power law."""

from __future__ import annotations

import numpy as np
from scipy import special


def zeta(s, q):
    """Return ζ(s, q) = Σ_{k>=0} (k + q)^-s for s > 1, q > 0.

    Accepts scalars or arrays for either argument and broadcasts like any
    numpy ufunc. Scalars in give a Python float back.
    """
    result = special.zeta(s, q)
    if np.ndim(result) == 0:
        return float(result)
    return result


def tail_mass(alpha, xmin: int, xmax: int | None = None):
    """Normalising constant of P(X = x) ∝ x^-alpha over [xmin, xmax].

    ``xmax=None`` means the tail is unbounded above.
    """
    total = zeta(alpha, xmin)
    if xmax is None:
        return total
    return total - zeta(alpha, xmax + 1)


__all__ = ["zeta", "tail_mass"]
