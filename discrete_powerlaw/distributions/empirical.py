"""Empirical survival CDF of a truncated integer sample."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np


class EmpiricalDistribution:
    """Step CDF in survival form: ``cdf(x)`` is the fraction of tail values >= x.

    The sample is filtered to ``[xmin, xmax]`` and sorted once; the table
    covers every integer in that range so lookups are O(1). This has to agree
    with ``PowerLawModel.cdf``, which also reports P(X >= x).
    """

    def __init__(self, sample: Sequence[int] | np.ndarray, xmin: Optional[int] = None, xmax: Optional[int] = None) -> None:
        values = np.asarray(sample, dtype=np.int64)
        if xmin is not None:
            values = values[values >= xmin]
        if xmax is not None:
            values = values[values <= xmax]
        tail = np.sort(values)

        self.n = int(tail.size)
        self._cdf = np.empty(0, dtype=float)
        if self.n == 0:
            self.xmin = xmin
            self.xmax = xmax
            return

        self.xmin = int(xmin) if xmin is not None else int(tail[0])
        self.xmax = int(tail[-1])
        self._precalculate_cdf(tail)

    def _precalculate_cdf(self, sorted_tail: np.ndarray) -> None:
        # Entry k holds P(X >= xmin + k) = 1 - #(values <= xmin + k - 1) / n.
        below = np.arange(self.xmin, self.xmax, dtype=np.int64)
        counts = np.searchsorted(sorted_tail, below, side="right")
        cdf = np.empty(self.xmax - self.xmin + 1, dtype=float)
        cdf[0] = 1.0
        cdf[1:] = 1.0 - counts / float(self.n)
        cdf.flags.writeable = False
        self._cdf = cdf

    @property
    def is_empty(self) -> bool:
        return self.n == 0

    @property
    def table(self) -> np.ndarray:
        return self._cdf

    def cdf(self, x: int) -> float:
        if self.is_empty:
            return 0.0
        if x < self.xmin:
            return 1.0
        if x > self.xmax:
            return 0.0
        return float(self._cdf[x - self.xmin])

    def cdf_range(self, lower: int, upper: int) -> np.ndarray:
        """Vectorised ``cdf`` over the integers ``lower..upper`` inclusive."""
        xs = np.arange(lower, upper + 1, dtype=np.int64)
        out = np.zeros(xs.size, dtype=float)
        if self.is_empty:
            return out
        out[xs < self.xmin] = 1.0
        inside = (xs >= self.xmin) & (xs <= self.xmax)
        out[inside] = self._cdf[xs[inside] - self.xmin]
        return out

    def __repr__(self) -> str:
        return f"EmpiricalDistribution(n={self.n}, xmin={self.xmin}, xmax={self.xmax})"


__all__ = ["EmpiricalDistribution"]
