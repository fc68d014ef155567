"""CLI validation helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from discrete_powerlaw.exceptions import ConfigConflictError, ConfigValidationError
from discrete_powerlaw.interfaces.distribution import TestStatisticType


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in {"1", "true", "yes", "on"}


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def require_one_source(data: str | None, file: Path | str | None) -> None:
    if data and file:
        raise ConfigConflictError("use either --data or --file, not both")
    if not data and not file:
        raise ConfigValidationError("a sample is required: pass --data or --file")


def validate_fit_inputs(*, xmin: int | None, xmax: int | None, statistic: str, precision: float) -> None:
    require_positive("precision", precision)
    if xmin is not None:
        require_positive("xmin", xmin)
    if xmax is not None and xmin is not None and xmax <= xmin:
        raise ConfigValidationError("xmax must be greater than xmin")
    allowed = {t.value for t in TestStatisticType if t is not TestStatisticType.NONE}
    if statistic.lower() not in allowed:
        raise ConfigValidationError(f"statistic must be one of {sorted(allowed)}")


def validate_gof_inputs(*, replicas: int, seed: int | None, max_workers: int | None) -> None:
    require_positive("replicas", replicas)
    if seed is not None and seed < 0:
        raise ConfigValidationError("seed must be non-negative")
    if max_workers is not None:
        require_positive("max_workers", max_workers)


__all__ = [
    "as_bool",
    "require_one_source",
    "require_positive",
    "validate_fit_inputs",
    "validate_gof_inputs",
]
