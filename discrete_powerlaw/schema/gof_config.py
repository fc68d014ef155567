"""Bootstrap goodness-of-fit configuration schema."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from discrete_powerlaw.exceptions import ConfigValidationError
from discrete_powerlaw.interfaces.distribution import RuntimeMode, SamplingMethod, SyntheticMode

DEFAULT_REPLICAS = 1000


@dataclass(slots=True)
class GofConfig:
    replicas: int = DEFAULT_REPLICAS
    mode: SyntheticMode = SyntheticMode.SEMI_PARAMETRIC
    runtime: RuntimeMode = RuntimeMode.MULTI_THREAD
    sampling: SamplingMethod = SamplingMethod.PRECISE
    seed: Optional[int] = None
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            self.mode = SyntheticMode(self.mode)
            self.runtime = RuntimeMode(self.runtime)
            self.sampling = SamplingMethod(self.sampling)
        except ValueError as exc:
            raise ConfigValidationError(str(exc)) from exc
        if self.replicas is None or self.replicas <= 0:
            raise ConfigValidationError("replicas must be > 0")
        if self.seed is not None and self.seed < 0:
            raise ConfigValidationError("seed must be non-negative")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError("max_workers must be positive when set")

    @classmethod
    def from_dict(cls, data: dict) -> "GofConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(f"Unknown gof config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "replicas": self.replicas,
            "mode": self.mode,
            "runtime": self.runtime,
            "sampling": self.sampling,
            "seed": self.seed,
            "max_workers": self.max_workers,
        }


__all__ = ["GofConfig", "DEFAULT_REPLICAS"]
