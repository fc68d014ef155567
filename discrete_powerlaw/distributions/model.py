"""Discrete power-law model: CDF/PDF tables, sampling and fit statistics.

A ``PowerLawModel`` is immutable once built. Estimation lives in
``discrete_powerlaw.distributions.power_law``; this module only knows how to
evaluate and draw from a model whose parameters are already fixed.

Convention: ``cdf(x)`` is the survival function P(X >= x), matching
``EmpiricalDistribution``. It is 1.0 at and below xmin.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from discrete_powerlaw.distributions.empirical import EmpiricalDistribution
from discrete_powerlaw.distributions.sampling import (
    approximate_sample,
    bracket_inverse_cdf,
    inverse_cdf_sample,
    search_inverse_cdf,
    table_inverse_cdf,
)
from discrete_powerlaw.distributions.statistics import compare_distributions
from discrete_powerlaw.distributions.zeta import tail_mass, zeta
from discrete_powerlaw.exceptions import InvalidModelError
from discrete_powerlaw.interfaces.distribution import (
    DistributionType,
    ModelState,
    SamplingMethod,
    TestStatisticType,
)
from discrete_powerlaw.schema.fit_config import FitConfig
from discrete_powerlaw.utils.random_source import UniformRandomSource, as_random_source


def _parameters_ok(alpha: float, xmin: int, xmax: int) -> bool:
    return math.isfinite(alpha) and alpha > 1.0 and 1 <= xmin < xmax


class PowerLawModel:
    """P(X = x) ∝ x^-alpha on [xmin, inf) or [xmin, xmax].

    For a left-bounded model ``xmax`` is only the extent of the precomputed
    table (the sample maximum); ``cdf`` past it falls back to the closed form.
    For a bounded model the support really ends at ``xmax``.

    Invalid models keep their ``state`` and degrade every numeric accessor:
    floats become NaN (or +inf for the statistic), ints become ``None``.
    """

    def __init__(
        self,
        alpha: float,
        xmin: int,
        xmax: int,
        *,
        config: Optional[FitConfig] = None,
        sample_size: Optional[int] = None,
        log_likelihood: float = math.nan,
        test_statistic: float = math.inf,
    ) -> None:
        self._alpha = float(alpha)
        self._xmin = int(xmin)
        self._xmax = int(xmax)
        self._sample_size = sample_size
        self._log_likelihood = float(log_likelihood)
        self._test_statistic = float(test_statistic)
        valid = _parameters_ok(self._alpha, self._xmin, self._xmax)
        self._state = ModelState.VALID if valid else ModelState.INVALID_INPUT
        if config is None:
            config = FitConfig(known_alpha=self._alpha, known_xmin=self._xmin) if valid else FitConfig()
        self._config = config
        self._cdf = np.empty(0, dtype=float)
        self._norm = math.nan
        if self._state is ModelState.VALID:
            self._precalculate_cdf()

    @classmethod
    def from_parameters(
        cls,
        alpha: float,
        xmin: int,
        xmax: int,
        distribution_type: DistributionType = DistributionType.LEFT_BOUNDED,
    ) -> "PowerLawModel":
        """Pure parametric model; no sample, so no statistic or standard error.

        Out-of-domain parameters (alpha <= 1, xmin < 1, xmax <= xmin) give an
        INVALID_INPUT model rather than an error.
        """
        distribution_type = DistributionType(distribution_type)
        if not _parameters_ok(alpha, xmin, xmax):
            return cls.invalid(
                ModelState.INVALID_INPUT,
                FitConfig(distribution_type=distribution_type, test_statistic=TestStatisticType.NONE),
            )
        config = FitConfig(
            known_alpha=alpha,
            known_xmin=xmin,
            known_xmax=xmax if distribution_type.bounded else None,
            distribution_type=distribution_type,
            test_statistic=TestStatisticType.NONE,
        )
        return cls(alpha, xmin, xmax, config=config)

    @classmethod
    def from_sample(
        cls,
        alpha: float,
        xmin: int,
        xmax: int,
        data: Sequence[int] | np.ndarray,
        *,
        config: FitConfig,
        sample_size: int,
        log_likelihood: float,
    ) -> "PowerLawModel":
        """Fitted model carrying its ``config.test_statistic`` against ``data``."""
        model = cls(alpha, xmin, xmax, config=config, sample_size=sample_size, log_likelihood=log_likelihood)
        if model.is_valid:
            model._test_statistic = model.calculate_test_statistic(data, config.test_statistic)
        return model

    @classmethod
    def invalid(cls, state: ModelState, config: Optional[FitConfig] = None, sample_size: Optional[int] = None) -> "PowerLawModel":
        model = cls.__new__(cls)
        model._config = config or FitConfig()
        model._alpha = math.nan
        model._xmin = 0
        model._xmax = 0
        model._sample_size = sample_size
        model._log_likelihood = math.nan
        model._test_statistic = math.inf
        model._state = ModelState(state)
        model._cdf = np.empty(0, dtype=float)
        model._norm = math.nan
        return model

    def _precalculate_cdf(self) -> None:
        xs = np.arange(self._xmin, self._xmax + 1, dtype=float)
        upper = self._xmax if self.bounded else None
        self._norm = tail_mass(self._alpha, self._xmin, upper)
        numerators = zeta(self._alpha, xs)
        if self.bounded:
            numerators = numerators - zeta(self._alpha, self._xmax + 1)
        table = np.asarray(numerators / self._norm, dtype=float)
        table[0] = 1.0
        table.flags.writeable = False
        self._cdf = table

    # ------------------------------------------------------------------
    # State and accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_valid(self) -> bool:
        return self._state is ModelState.VALID

    def require_valid(self) -> "PowerLawModel":
        if not self.is_valid:
            raise InvalidModelError(f"power-law model is not usable: state={self._state.value}")
        return self

    @property
    def config(self) -> FitConfig:
        return self._config

    @property
    def distribution_type(self) -> DistributionType:
        return self._config.distribution_type

    @property
    def bounded(self) -> bool:
        return self._config.distribution_type.bounded

    @property
    def precision(self) -> float:
        return self._config.precision

    @property
    def test_statistic_type(self) -> TestStatisticType:
        return self._config.test_statistic

    @property
    def alpha(self) -> float:
        return self._alpha if self.is_valid else math.nan

    @property
    def xmin(self) -> Optional[int]:
        return self._xmin if self.is_valid else None

    @property
    def xmax(self) -> Optional[int]:
        return self._xmax if self.is_valid else None

    @property
    def sample_size(self) -> Optional[int]:
        return self._sample_size if self.is_valid else None

    @property
    def standard_error(self) -> float:
        if not self.is_valid or not self._sample_size:
            return math.nan
        return (self._alpha - 1.0) / float(self._sample_size)

    @property
    def test_statistic(self) -> float:
        return self._test_statistic if self.is_valid else math.inf

    @property
    def log_likelihood(self) -> float:
        return self._log_likelihood if self.is_valid else math.nan

    @property
    def cdf_table(self) -> np.ndarray:
        return self._cdf

    # ------------------------------------------------------------------
    # CDF / PDF
    # ------------------------------------------------------------------

    def cdf(self, x: int) -> float:
        if not self.is_valid:
            return math.nan
        if x < self._xmin:
            return 1.0
        if x <= self._xmax:
            return float(self._cdf[x - self._xmin])
        if self.bounded:
            return 0.0
        return zeta(self._alpha, float(x)) / self._norm

    def cdf_range(self, lower: int, upper: int) -> np.ndarray:
        xs = np.arange(lower, upper + 1, dtype=np.int64)
        if not self.is_valid:
            return np.full(xs.size, math.nan)
        out = np.ones(xs.size, dtype=float)
        inside = (xs >= self._xmin) & (xs <= self._xmax)
        out[inside] = self._cdf[xs[inside] - self._xmin]
        above = xs > self._xmax
        if above.any():
            out[above] = 0.0 if self.bounded else zeta(self._alpha, xs[above].astype(float)) / self._norm
        return out

    def pdf(self, x: int) -> float:
        if not self.is_valid:
            return math.nan
        if x < self._xmin or (self.bounded and x > self._xmax):
            return 0.0
        return float(x) ** -self._alpha / self._norm

    def pdf_range(self, lower: int, upper: int) -> np.ndarray:
        xs = np.arange(lower, upper + 1, dtype=np.int64)
        if not self.is_valid:
            return np.full(xs.size, math.nan)
        out = np.zeros(xs.size, dtype=float)
        support = xs >= self._xmin
        if self.bounded:
            support &= xs <= self._xmax
        out[support] = np.power(xs[support].astype(float), -self._alpha) / self._norm
        return out

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def sample_one(
        self,
        rng: UniformRandomSource | int | None = None,
        method: SamplingMethod = SamplingMethod.PRECISE,
    ) -> Optional[int]:
        """One draw; ``None`` when the model is not valid."""
        if not self.is_valid:
            return None
        if SamplingMethod(method) is SamplingMethod.APPROXIMATE:
            return int(self.sample(1, rng, method)[0])
        source = as_random_source(rng)
        target = 1.0 - source.uniform01()
        return inverse_cdf_sample(self.cdf, self._xmin, target)

    def sample(
        self,
        n: int,
        rng: UniformRandomSource | int | None = None,
        method: SamplingMethod = SamplingMethod.PRECISE,
    ) -> np.ndarray:
        """``n`` draws as int64; empty when the model is not valid.

        PRECISE consumes one uniform per draw. Targets that land inside the
        table are resolved with one vectorised search; the rest (left-bounded
        tail past xmax) go through the bracket-and-bisect path.
        """
        if not self.is_valid or n <= 0:
            return np.empty(0, dtype=np.int64)
        source = as_random_source(rng)
        if SamplingMethod(method) is SamplingMethod.APPROXIMATE:
            return self._sample_approximate(n, source)

        targets = 1.0 - source.uniform01_array(n)
        draws, beyond = table_inverse_cdf(self._cdf, self._xmin, targets)
        if beyond.any():
            if self.bounded:
                draws[beyond] = self._xmax
            else:
                for i in np.flatnonzero(beyond):
                    low, high = bracket_inverse_cdf(self.cdf, self._xmax, targets[i])
                    draws[i] = search_inverse_cdf(self.cdf, low, high, targets[i])
        return draws

    def _sample_approximate(self, n: int, source: UniformRandomSource) -> np.ndarray:
        upper = self._xmax if self.bounded else None
        draws = approximate_sample(self._alpha, self._xmin, source.uniform01_array(n), upper)
        rejected = draws < 0
        while rejected.any():
            draws[rejected] = approximate_sample(
                self._alpha, self._xmin, source.uniform01_array(int(rejected.sum())), upper
            )
            rejected = draws < 0
        return draws

    # ------------------------------------------------------------------
    # Fit statistics
    # ------------------------------------------------------------------

    def calculate_test_statistic(
        self,
        data: Sequence[int] | np.ndarray,
        statistic: Optional[TestStatisticType] = None,
    ) -> float:
        """Statistic of this model against ``data`` truncated to the model domain."""
        if not self.is_valid or self._xmin >= self._xmax:
            return math.inf
        statistic = TestStatisticType(statistic or self.test_statistic_type)
        upper = self._xmax if self.bounded else None
        empirical = EmpiricalDistribution(data, xmin=self._xmin, xmax=upper)
        return compare_distributions(empirical, self, statistic)

    def log_likelihood_of(self, data: Sequence[int] | np.ndarray) -> float:
        if not self.is_valid:
            return math.nan
        values = np.asarray(data, dtype=np.int64)
        mask = values >= self._xmin
        if self.bounded:
            mask &= values <= self._xmax
        tail = values[mask]
        return float(-tail.size * math.log(self._norm) - self._alpha * np.log(tail).sum())

    # ------------------------------------------------------------------
    # Copy / summary
    # ------------------------------------------------------------------

    def copy(self) -> "PowerLawModel":
        clone = PowerLawModel.__new__(PowerLawModel)
        clone.__dict__.update(self.__dict__)
        clone._cdf = self._cdf.copy()
        clone._cdf.flags.writeable = False
        return clone

    def to_dict(self) -> dict:
        return {
            "state": self._state.value,
            "distribution_type": self.distribution_type.value,
            "alpha": self.alpha,
            "standard_error": self.standard_error,
            "xmin": self.xmin,
            "xmax": self.xmax,
            "sample_size": self.sample_size,
            "test_statistic_type": self.test_statistic_type.value,
            "test_statistic": self.test_statistic,
            "log_likelihood": self.log_likelihood,
        }

    def __repr__(self) -> str:
        if not self.is_valid:
            return f"PowerLawModel(state={self._state.value})"
        return (
            f"PowerLawModel(alpha={self._alpha:.3f}, xmin={self._xmin}, xmax={self._xmax}, "
            f"type={self.distribution_type.value})"
        )


__all__ = ["PowerLawModel"]
