"""Bookkeeping for bootstrap replicas whose refit did not produce a statistic."""

from __future__ import annotations

from typing import Optional

from discrete_powerlaw.interfaces.distribution import ModelState
from discrete_powerlaw.utils.logging import get_logger

log = get_logger(__name__, component="distribution_errors")


def record_replica_failure(
    index: int,
    *,
    n_samples: int,
    state: ModelState | None = None,
    error: Exception | str | None = None,
) -> None:
    """Log a replica that is dropped from the p-value."""

    extra = {
        "replica": index,
        "n_samples": n_samples,
        "status": "FAILED",
    }
    if state is not None:
        extra["state"] = ModelState(state).value
    if error is not None:
        extra["error"] = str(error)
    log.debug("Replica refit failed", extra=extra)


def failure_ratio(failed: int, replicas: int) -> Optional[float]:
    if replicas <= 0:
        return None
    return failed / replicas


__all__ = ["record_replica_failure", "failure_ratio"]
