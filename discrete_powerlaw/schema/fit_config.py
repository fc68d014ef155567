"""Fit configuration schema and validation."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Tuple

from discrete_powerlaw.exceptions import ConfigValidationError
from discrete_powerlaw.interfaces.distribution import DistributionType, TestStatisticType

DEFAULT_PRECISION = 0.01
DEFAULT_ALPHA_RANGE = (1.50, 3.51)


@dataclass(slots=True)
class FitConfig:
    """Which parameters are known up front and how the rest are estimated.

    Attributes:
        known_alpha: Fixed scaling exponent; requires ``known_xmin``.
        known_xmin: Fixed lower cutoff; estimated by KS minimisation when unset.
        known_xmax: Fixed upper cutoff (bounded models only).
        precision: Step of the alpha likelihood grid.
        test_statistic: Statistic reported on the fitted model.
        distribution_type: Left bounded or left-and-right bounded.
        smallest_interval: Minimum xmax - xmin considered when estimating xmax.
        alpha_range: Half-open interval swept by the alpha grid.
    """

    known_alpha: Optional[float] = None
    known_xmin: Optional[int] = None
    known_xmax: Optional[int] = None
    precision: float = DEFAULT_PRECISION
    test_statistic: TestStatisticType = TestStatisticType.KOLMOGOROV_SMIRNOV
    distribution_type: DistributionType = DistributionType.LEFT_BOUNDED
    smallest_interval: int = 1
    alpha_range: Tuple[float, float] = DEFAULT_ALPHA_RANGE

    def __post_init__(self) -> None:
        try:
            self.test_statistic = TestStatisticType(self.test_statistic)
            self.distribution_type = DistributionType(self.distribution_type)
        except ValueError as exc:
            raise ConfigValidationError(str(exc)) from exc
        if not self.precision or self.precision <= 0:
            raise ConfigValidationError("precision must be > 0")
        lower, upper = self.alpha_range
        if lower <= 1.0 or upper <= lower:
            raise ConfigValidationError("alpha_range must satisfy 1 < lower < upper")
        if upper - lower < self.precision:
            raise ConfigValidationError("alpha_range is narrower than one precision step")
        if self.smallest_interval < 1:
            raise ConfigValidationError("smallest_interval must be >= 1")
        if self.known_alpha is not None:
            if self.known_xmin is None:
                raise ConfigValidationError("known_alpha requires known_xmin")
            if self.known_alpha <= 1.0:
                raise ConfigValidationError("known_alpha must be > 1")
        if self.known_xmax is not None and not self.distribution_type.bounded:
            raise ConfigValidationError("known_xmax requires a left_and_right_bounded distribution")

    @property
    def estimates_xmin(self) -> bool:
        return self.known_xmin is None

    def replace(self, **changes) -> "FitConfig":
        values = self.to_dict()
        values.update(changes)
        return FitConfig(**values)

    @classmethod
    def from_dict(cls, data: dict) -> "FitConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(f"Unknown fit config keys: {sorted(unknown)}")
        values = dict(data)
        if "alpha_range" in values and values["alpha_range"] is not None:
            values["alpha_range"] = tuple(values["alpha_range"])
        return cls(**values)

    def to_dict(self) -> dict:
        return {
            "known_alpha": self.known_alpha,
            "known_xmin": self.known_xmin,
            "known_xmax": self.known_xmax,
            "precision": self.precision,
            "test_statistic": self.test_statistic,
            "distribution_type": self.distribution_type,
            "smallest_interval": self.smallest_interval,
            "alpha_range": self.alpha_range,
        }


__all__ = ["FitConfig", "DEFAULT_PRECISION", "DEFAULT_ALPHA_RANGE"]
