import math

import numpy as np
import pytest

from discrete_powerlaw import (
    FitConfig,
    ModelState,
    RuntimeMode,
    calculate_gof,
    calculate_ks_statistic_of_fit,
    fit,
    generate_synthetic_sample,
)

SCENARIO = [1, 1, 2, 2, 2, 3, 4, 5, 10, 27]


def test_scenario_end_to_end() -> None:
    model = fit(SCENARIO)
    assert model.xmin in {1, 2}
    assert model.alpha > 1.0
    ks = calculate_ks_statistic_of_fit(model, SCENARIO)
    assert math.isfinite(ks) and ks <= 1.0
    p_value = calculate_gof(model, SCENARIO, replicas=200, seed=2024)
    assert 0.0 <= p_value <= 1.0


def test_empty_sample_end_to_end() -> None:
    model = fit([])
    assert model.state is ModelState.NO_INPUT
    assert math.isnan(model.alpha)
    assert calculate_gof(model, []) == 0.0


def test_gof_is_reproducible_for_seed() -> None:
    model = fit(SCENARIO)
    first = calculate_gof(model, SCENARIO, replicas=30, seed=77, runtime=RuntimeMode.MULTI_THREAD)
    second = calculate_gof(model, SCENARIO, replicas=30, seed=77, runtime=RuntimeMode.MULTI_THREAD)
    assert first == second


def test_geometric_sample_is_rejected() -> None:
    sample = np.random.default_rng(31).geometric(0.3, size=300)
    model = fit(sample, FitConfig(known_xmin=1))
    p_value = calculate_gof(model, sample, replicas=30, seed=5)
    assert p_value < 0.05


def test_refit_of_synthetic_replica_stays_close() -> None:
    model = fit(SCENARIO)
    replica = generate_synthetic_sample(model, size=5_000, seed=12)
    refit = fit(replica, known_xmin=model.xmin)
    assert refit.alpha == pytest.approx(model.alpha, abs=0.1)
    assert np.all(replica >= model.xmin)
