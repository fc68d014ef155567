from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import fit
from discrete_powerlaw.interfaces.distribution import (
    RuntimeMode,
    SamplingMethod,
    SyntheticMode,
    TestStatisticType,
)
from discrete_powerlaw.schema.gof_config import GofConfig
from discrete_powerlaw.simulation.gof import (
    GoodnessOfFitEngine,
    _clamp_workers,
    bootstrap_p_value,
    calculate_gof,
)

SCENARIO = [1, 1, 2, 2, 2, 3, 4, 5, 10, 27]


def test_bootstrap_p_value_counts_strictly_greater() -> None:
    p_value, failed = bootstrap_p_value(0.5, np.array([0.1, 0.5, 0.6, 0.9]))
    assert p_value == 0.5
    assert failed == 0


def test_failed_replicas_leave_numerator_and_denominator() -> None:
    p_value, failed = bootstrap_p_value(0.5, np.array([0.1, 0.6, np.nan, 0.9]))
    assert p_value == pytest.approx(2 / 3)
    assert failed == 1


def test_all_failed_replicas_give_zero() -> None:
    p_value, failed = bootstrap_p_value(0.5, np.array([np.nan, np.nan]))
    assert p_value == 0.0
    assert failed == 2


def test_clamp_workers_bounds() -> None:
    assert _clamp_workers(0) == 1
    assert _clamp_workers(1) == 1
    assert _clamp_workers(None) >= 1


def test_invalid_model_gives_zero() -> None:
    assert calculate_gof(fit([]), [], replicas=10, seed=1) == 0.0


def test_p_value_in_unit_interval() -> None:
    model = fit(SCENARIO)
    p_value = calculate_gof(model, SCENARIO, replicas=40, runtime=RuntimeMode.SINGLE_THREAD, seed=3)
    assert 0.0 <= p_value <= 1.0


def test_same_seed_same_result_across_runtime_modes() -> None:
    model = fit(SCENARIO)
    single = GoodnessOfFitEngine(GofConfig(replicas=24, runtime=RuntimeMode.SINGLE_THREAD, seed=9)).run(model, SCENARIO)
    multi = GoodnessOfFitEngine(GofConfig(replicas=24, runtime=RuntimeMode.MULTI_THREAD, seed=9, max_workers=4)).run(
        model, SCENARIO
    )
    assert single.p_value == multi.p_value
    assert np.array_equal(single.replica_statistics, multi.replica_statistics, equal_nan=True)


def test_injected_executor_is_used_and_left_open() -> None:
    model = fit(SCENARIO)
    expected = calculate_gof(model, SCENARIO, replicas=12, runtime=RuntimeMode.SINGLE_THREAD, seed=5)
    with ThreadPoolExecutor(max_workers=2) as executor:
        first = calculate_gof(model, SCENARIO, replicas=12, seed=5, executor=executor)
        second = calculate_gof(model, SCENARIO, replicas=12, seed=5, executor=executor)
    assert first == expected
    assert second == expected


def test_progress_reports_every_replica() -> None:
    calls = []
    engine = GoodnessOfFitEngine(GofConfig(replicas=6, runtime=RuntimeMode.SINGLE_THREAD, seed=2))
    engine.run(fit(SCENARIO), SCENARIO, progress=lambda done, total: calls.append((done, total)))
    assert calls[-1] == (6, 6)
    assert len(calls) == 6


def test_result_fields() -> None:
    model = fit(SCENARIO, test_statistic="cvm")
    result = GoodnessOfFitEngine(GofConfig(replicas=8, runtime=RuntimeMode.SINGLE_THREAD, seed=4)).run(model, SCENARIO)
    assert result.statistic is TestStatisticType.CRAMER_VON_MISES
    assert result.replicas == 8
    assert result.used_replicas + result.failed_replicas == 8
    assert result.replica_statistics.shape == (8,)
    assert result.observed_statistic == pytest.approx(model.test_statistic)
    assert result.to_dict()["mode"] == "semi_parametric"


def test_parametric_model_uses_ks() -> None:
    model = PowerLawModel.from_parameters(2.0, 1, 30)
    result = GoodnessOfFitEngine(GofConfig(replicas=5, runtime=RuntimeMode.SINGLE_THREAD, seed=6)).run(model, SCENARIO)
    assert result.statistic is TestStatisticType.KOLMOGOROV_SMIRNOV
    assert 0.0 <= result.p_value <= 1.0


@pytest.mark.parametrize(
    ("mode", "sampling"),
    [
        (SyntheticMode.FULL_PARAMETRIC, SamplingMethod.PRECISE),
        (SyntheticMode.SEMI_PARAMETRIC, SamplingMethod.APPROXIMATE),
    ],
)
def test_modes_and_sampling_methods(mode: SyntheticMode, sampling: SamplingMethod) -> None:
    p_value = calculate_gof(
        fit(SCENARIO),
        SCENARIO,
        replicas=10,
        mode=mode,
        sampling=sampling,
        runtime=RuntimeMode.SINGLE_THREAD,
        seed=8,
    )
    assert 0.0 <= p_value <= 1.0
