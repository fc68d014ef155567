"""Bootstrap goodness-of-fit test for fitted power-law models.

The observed statistic of the fitted model is compared against statistics of
models refitted to synthetic replicas drawn from it. The p-value is the share
of replica statistics strictly above the observed one.

Each replica runs as an independent task: generate, refit with the original
fit configuration, measure. Replicas get their own random streams spawned from
one seed sequence per run, so the result for a fixed seed does not depend on
the runtime mode or on task completion order.
"""

from __future__ import annotations

import math
import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import numpy as np

from discrete_powerlaw.distributions.errors import record_replica_failure
from discrete_powerlaw.distributions.errors.replica_errors import failure_ratio
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import as_sample, fit
from discrete_powerlaw.interfaces.distribution import (
    RuntimeMode,
    SamplingMethod,
    SyntheticMode,
    TestStatisticType,
)
from discrete_powerlaw.mc.synthetic import SyntheticReplicaGenerator
from discrete_powerlaw.schema.fit_config import FitConfig
from discrete_powerlaw.schema.gof_config import DEFAULT_REPLICAS, GofConfig
from discrete_powerlaw.utils.logging import get_logger
from discrete_powerlaw.utils.random_source import UniformRandomSource

log = get_logger(__name__, component="simulation.gof")

ProgressCallback = Callable[[int, int], None]

# Share of failed replicas above which a run is reported at WARNING level.
FAILURE_WARN_RATIO = 0.05


@dataclass(slots=True)
class GofResult:
    """Outcome of one bootstrap run."""

    p_value: float
    observed_statistic: float
    statistic: TestStatisticType
    replicas: int
    failed_replicas: int = 0
    replica_statistics: np.ndarray = field(default_factory=lambda: np.empty(0))
    mode: SyntheticMode = SyntheticMode.SEMI_PARAMETRIC
    seed: Optional[int] = None

    @property
    def used_replicas(self) -> int:
        return self.replicas - self.failed_replicas

    def to_dict(self) -> dict:
        return {
            "p_value": self.p_value,
            "observed_statistic": self.observed_statistic,
            "statistic": self.statistic.value,
            "replicas": self.replicas,
            "failed_replicas": self.failed_replicas,
            "mode": self.mode.value,
            "seed": self.seed,
        }


def _clamp_workers(max_workers: int | None) -> int:
    cpu_count = os.cpu_count() or 1
    if max_workers is None:
        return cpu_count
    return max(1, min(int(max_workers), cpu_count))


def _replica_statistic(
    generator: SyntheticReplicaGenerator,
    refit_config: FitConfig,
    seed: np.random.SeedSequence,
    index: int,
) -> float:
    """Statistic of one refitted replica; NaN when the refit is unusable."""
    replica = generator.generate(UniformRandomSource(seed))
    model = fit(replica, refit_config)
    statistic = model.test_statistic
    if not model.is_valid or not math.isfinite(statistic):
        record_replica_failure(index, n_samples=int(replica.size), state=model.state)
        return math.nan
    return statistic


def bootstrap_p_value(observed: float, replica_statistics: np.ndarray) -> tuple[float, int]:
    """(p-value, failed count); failed replicas are NaN and are left out."""
    finite = np.isfinite(replica_statistics)
    failed = int(replica_statistics.size - finite.sum())
    used = replica_statistics[finite]
    if used.size == 0:
        return 0.0, failed
    return float(np.count_nonzero(used > observed)) / float(used.size), failed


class GoodnessOfFitEngine:
    """Runs bootstrap replicas serially or on an executor.

    The executor belongs to the caller; when none is given and the runtime
    mode is multi-threaded, a thread pool is created for the duration of
    ``run`` and shut down afterwards.
    """

    def __init__(self, config: GofConfig | None = None, executor: Executor | None = None) -> None:
        self.config = config or GofConfig()
        self.executor = executor

    def run(
        self,
        model: PowerLawModel,
        sample: Sequence[int] | np.ndarray,
        progress: ProgressCallback | None = None,
    ) -> GofResult:
        cfg = self.config
        statistic = model.test_statistic_type
        if statistic is TestStatisticType.NONE:
            statistic = TestStatisticType.KOLMOGOROV_SMIRNOV

        if not model.is_valid:
            log.warning("Model is not valid; reporting p-value 0", extra={"state": model.state.value})
            return GofResult(0.0, math.inf, statistic, cfg.replicas, mode=cfg.mode, seed=cfg.seed)

        data = as_sample(sample)
        observed = model.calculate_test_statistic(data, statistic)
        if not math.isfinite(observed):
            log.warning(
                "Observed statistic is not finite; reporting p-value 0",
                extra={"n_samples": int(data.size), "xmin": model.xmin, "xmax": model.xmax},
            )
            return GofResult(0.0, observed, statistic, cfg.replicas, mode=cfg.mode, seed=cfg.seed)

        generator = SyntheticReplicaGenerator(
            model,
            data,
            mode=cfg.mode,
            replica_size=int(data.size),
            sampling=cfg.sampling,
        )
        refit_config = model.config.replace(test_statistic=statistic)
        seeds = UniformRandomSource(cfg.seed).spawn_sequences(cfg.replicas)

        start = time.perf_counter()
        log.info(
            "Starting bootstrap",
            extra={"replicas": cfg.replicas, "n_samples": int(data.size), "statistic": statistic.value},
        )
        if cfg.runtime is RuntimeMode.SINGLE_THREAD:
            statistics = self._run_serial(generator, refit_config, seeds, progress)
        elif self.executor is not None:
            statistics = self._run_on(self.executor, generator, refit_config, seeds, progress)
        else:
            with ThreadPoolExecutor(max_workers=_clamp_workers(cfg.max_workers)) as executor:
                statistics = self._run_on(executor, generator, refit_config, seeds, progress)

        p_value, failed = bootstrap_p_value(observed, statistics)
        duration_ms = (time.perf_counter() - start) * 1000
        ratio = failure_ratio(failed, cfg.replicas) or 0.0
        level = log.warning if ratio > FAILURE_WARN_RATIO else log.info
        level(
            "Bootstrap complete",
            extra={
                "replicas": cfg.replicas,
                "failed_replicas": failed,
                "statistic": observed,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return GofResult(
            p_value=p_value,
            observed_statistic=observed,
            statistic=statistic,
            replicas=cfg.replicas,
            failed_replicas=failed,
            replica_statistics=statistics,
            mode=cfg.mode,
            seed=cfg.seed,
        )

    @staticmethod
    def _run_serial(
        generator: SyntheticReplicaGenerator,
        refit_config: FitConfig,
        seeds: list[np.random.SeedSequence],
        progress: ProgressCallback | None,
    ) -> np.ndarray:
        statistics = np.empty(len(seeds), dtype=float)
        for index, seed in enumerate(seeds):
            statistics[index] = _replica_statistic(generator, refit_config, seed, index)
            if progress is not None:
                progress(index + 1, len(seeds))
        return statistics

    @staticmethod
    def _run_on(
        executor: Executor,
        generator: SyntheticReplicaGenerator,
        refit_config: FitConfig,
        seeds: list[np.random.SeedSequence],
        progress: ProgressCallback | None,
    ) -> np.ndarray:
        statistics = np.empty(len(seeds), dtype=float)
        future_map = {
            executor.submit(_replica_statistic, generator, refit_config, seed, index): index
            for index, seed in enumerate(seeds)
        }
        for done, future in enumerate(as_completed(future_map), start=1):
            statistics[future_map[future]] = future.result()
            if progress is not None:
                progress(done, len(seeds))
        return statistics


def calculate_gof(
    model: PowerLawModel,
    sample: Sequence[int] | np.ndarray,
    replicas: int = DEFAULT_REPLICAS,
    mode: SyntheticMode = SyntheticMode.SEMI_PARAMETRIC,
    runtime: RuntimeMode = RuntimeMode.MULTI_THREAD,
    seed: Optional[int] = None,
    executor: Executor | None = None,
    sampling: SamplingMethod = SamplingMethod.PRECISE,
    max_workers: Optional[int] = None,
) -> float:
    """Bootstrap p-value in [0, 1]; exactly 0.0 for an invalid model."""
    config = GofConfig(
        replicas=replicas,
        mode=mode,
        runtime=runtime,
        sampling=sampling,
        seed=seed,
        max_workers=max_workers,
    )
    return GoodnessOfFitEngine(config, executor=executor).run(model, sample).p_value


__all__ = [
    "GofResult",
    "GoodnessOfFitEngine",
    "bootstrap_p_value",
    "calculate_gof",
]
