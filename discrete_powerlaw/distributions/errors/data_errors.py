"""Unusable-input handling for power-law fits.

Bad input never raises here: the helpers log the reason and hand back a model
whose state records it.
"""

from __future__ import annotations

from typing import Optional

from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.interfaces.distribution import ModelState
from discrete_powerlaw.schema.fit_config import FitConfig
from discrete_powerlaw.utils.logging import get_logger

log = get_logger(__name__, component="distribution_errors")


def handle_no_input(config: Optional[FitConfig] = None) -> PowerLawModel:
    """Model for an empty sample."""

    log.warning(
        "Skipping fit: empty sample",
        extra={"n_samples": 0, "state": ModelState.NO_INPUT.value},
    )
    return PowerLawModel.invalid(ModelState.NO_INPUT, config, sample_size=0)


def handle_invalid_input(
    reason: str,
    *,
    n_samples: int,
    config: Optional[FitConfig] = None,
    xmin: Optional[int] = None,
    xmax: Optional[int] = None,
) -> PowerLawModel:
    """Model for bounds that are incompatible with the sample range."""

    extra = {
        "n_samples": n_samples,
        "state": ModelState.INVALID_INPUT.value,
        "reason": reason,
    }
    if xmin is not None:
        extra["xmin"] = xmin
    if xmax is not None:
        extra["xmax"] = xmax
    log.warning(f"Invalid fit input: {reason}", extra=extra)
    return PowerLawModel.invalid(ModelState.INVALID_INPUT, config, sample_size=n_samples)


__all__ = ["handle_invalid_input", "handle_no_input"]
