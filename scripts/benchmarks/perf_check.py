"""Lightweight performance budget checks.

Times a full fit (xmin scan plus alpha grid), model sampling and a small
bootstrap run on synthetic data. Kept free of fixtures so it can run in
constrained CI environments.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import fit
from discrete_powerlaw.interfaces.distribution import RuntimeMode
from discrete_powerlaw.simulation.gof import calculate_gof
from discrete_powerlaw.utils.random_source import UniformRandomSource

BUDGETS_MS = {
    "fit_ms": 2_000.0,
    "sampling_ms": 1_000.0,
    "gof_ms": 20_000.0,
}


def synthetic_sample(n: int = 2_000, alpha: float = 2.5, seed: int = 42):
    model = PowerLawModel.from_parameters(alpha, 1, 1_000)
    return model.sample(n, UniformRandomSource(seed))


def benchmark_fit(sample) -> float:
    start = time.perf_counter()
    _ = fit(sample)
    return (time.perf_counter() - start) * 1000


def benchmark_sampling(n: int = 100_000) -> float:
    model = PowerLawModel.from_parameters(2.5, 1, 1_000)
    start = time.perf_counter()
    _ = model.sample(n, UniformRandomSource(7))
    return (time.perf_counter() - start) * 1000


def benchmark_gof(sample, replicas: int = 50) -> float:
    model = fit(sample)
    start = time.perf_counter()
    _ = calculate_gof(model, sample, replicas=replicas, runtime=RuntimeMode.MULTI_THREAD, seed=11)
    return (time.perf_counter() - start) * 1000


def main() -> None:
    parser = argparse.ArgumentParser(description="Performance budget checks")
    parser.add_argument("--size", type=int, default=2_000, help="Sample size used for fit and GoF timings")
    parser.add_argument("--replicas", type=int, default=50, help="Bootstrap replicas for the GoF timing")
    parser.add_argument("--out", type=Path, default=None, help="Optional file to write timings (JSON)")
    args = parser.parse_args()

    sample = synthetic_sample(args.size)
    metrics = {
        "fit_ms": benchmark_fit(sample),
        "sampling_ms": benchmark_sampling(),
        "gof_ms": benchmark_gof(sample, args.replicas),
    }

    for key, value in metrics.items():
        flag = "" if value <= BUDGETS_MS[key] else "  (over budget)"
        print(f"{key}: {value:.2f} ms{flag}")

    if args.out:
        args.out.write_text(json.dumps(metrics, indent=2))


if __name__ == "__main__":
    main()
