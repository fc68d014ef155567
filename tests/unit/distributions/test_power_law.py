import math
from types import SimpleNamespace

import numpy as np
import pytest

from discrete_powerlaw.distributions import power_law
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import (
    alpha_grid,
    calculate_ks_statistic_of_fit,
    estimate_alpha,
    estimate_alpha_approximate,
    estimate_lower_bound,
    estimate_upper_bound,
    fit,
    log_likelihood,
)
from discrete_powerlaw.distributions.zeta import zeta
from discrete_powerlaw.interfaces.distribution import DistributionType, ModelState, TestStatisticType
from discrete_powerlaw.schema.fit_config import FitConfig
from discrete_powerlaw.utils.random_source import UniformRandomSource

SCENARIO = [1, 1, 2, 2, 2, 3, 4, 5, 10, 27]


def _proportional_sample(alpha: float, n: int, upper: int = 2000) -> np.ndarray:
    xs = np.arange(1, upper + 1)
    counts = np.rint(n * xs**-alpha / zeta(alpha, 1)).astype(int)
    return np.repeat(xs, counts)


def test_alpha_grid_spans_default_range() -> None:
    grid = alpha_grid()
    assert grid.size == 201
    assert grid[0] == 1.5
    assert grid[-1] == 3.5


def test_scenario_fit() -> None:
    model = fit(SCENARIO)
    assert model.state is ModelState.VALID
    assert model.xmin in {1, 2}
    assert model.alpha > 1.0
    assert math.isfinite(model.test_statistic)
    assert model.test_statistic <= 1.0
    tail = sum(1 for x in SCENARIO if x >= model.xmin)
    assert model.sample_size == tail
    assert model.standard_error == pytest.approx((model.alpha - 1.0) / tail)


def test_empty_sample_is_no_input() -> None:
    model = fit([])
    assert model.state is ModelState.NO_INPUT
    assert math.isnan(model.alpha)
    assert model.xmin is None


def test_known_xmin_at_or_above_max_is_invalid() -> None:
    assert fit(SCENARIO, known_xmin=27).state is ModelState.INVALID_INPUT
    assert fit(SCENARIO, known_xmin=0).state is ModelState.INVALID_INPUT


def test_constant_sample_is_invalid() -> None:
    assert fit([4, 4, 4, 4]).state is ModelState.INVALID_INPUT


def test_known_xmax_below_min_is_invalid() -> None:
    config = FitConfig(known_xmax=3, distribution_type=DistributionType.LEFT_AND_RIGHT_BOUNDED)
    assert fit([5, 6, 9, 12], config).state is ModelState.INVALID_INPUT


def test_estimate_alpha_picks_grid_maximum() -> None:
    data = np.array(SCENARIO)
    alpha = estimate_alpha(data, 2)
    grid = alpha_grid()
    likelihoods = log_likelihood(data, grid, 2)
    assert alpha in grid
    assert log_likelihood(data, alpha, 2) == pytest.approx(likelihoods.max())


def test_estimate_alpha_empty_tail_is_nan() -> None:
    assert math.isnan(estimate_alpha(SCENARIO, 100))


def test_log_likelihood_vectorises_over_alpha() -> None:
    values = log_likelihood(SCENARIO, np.array([1.8, 2.0, 2.2]), 2)
    assert values.shape == (3,)
    assert values[1] == pytest.approx(log_likelihood(SCENARIO, 2.0, 2))


def test_approximate_estimator_is_close_to_mle() -> None:
    draws = PowerLawModel.from_parameters(2.2, 6, 1000).sample(20_000, UniformRandomSource(5))
    assert estimate_alpha_approximate(draws, 6) == pytest.approx(estimate_alpha(draws, 6), abs=0.05)


def _first_local_minimum(curve: dict[int, float]) -> int:
    best_x, best = None, math.inf
    for x, value in curve.items():
        if value > best:
            break
        if value < best:
            best_x, best = x, value
    return best_x


def test_lower_bound_scan_stops_at_first_local_minimum(monkeypatch) -> None:
    curve = {1: 0.40, 2: 0.20, 3: 0.30, 4: 0.05, 5: 0.10, 6: 0.15, 7: 0.20, 8: 0.25, 9: 0.30}

    def fake_fit(data, config, xmax=None, model_config=None):
        return SimpleNamespace(test_statistic=curve[config.known_xmin])

    monkeypatch.setattr(power_law, "_fit_known_xmin", fake_fit)
    # The global minimum sits at 4; the scan must stop at the first dip.
    assert estimate_lower_bound(np.arange(1, 11)) == 2


def test_lower_bound_without_increase_keeps_running_minimum(monkeypatch) -> None:
    def fake_fit(data, config, xmax=None, model_config=None):
        return SimpleNamespace(test_statistic=1.0 / config.known_xmin)

    monkeypatch.setattr(power_law, "_fit_known_xmin", fake_fit)
    assert estimate_lower_bound(np.arange(1, 11)) == 9


def test_lower_bound_matches_ks_curve_of_real_sample() -> None:
    data = np.array(SCENARIO)
    curve = {
        x: power_law._fit_known_xmin(data, FitConfig(known_xmin=x)).test_statistic
        for x in range(1, 27)
    }
    assert estimate_lower_bound(data) == _first_local_minimum(curve)


def test_upper_bound_is_global_ks_minimiser() -> None:
    data = np.array(SCENARIO)
    candidates = list(range(2 + 1, 27))
    statistics = [
        power_law._fit_known_xmin(
            data,
            FitConfig(known_xmin=2, known_xmax=x, distribution_type=DistributionType.LEFT_AND_RIGHT_BOUNDED),
        ).test_statistic
        for x in candidates
    ]
    assert estimate_upper_bound(data, 2) == candidates[int(np.argmin(statistics))]


def test_upper_bound_respects_smallest_interval() -> None:
    data = np.array(SCENARIO)
    xmax = estimate_upper_bound(data, 2, smallest_interval=5)
    assert 7 <= xmax <= 27
    assert estimate_upper_bound(data, 2, smallest_interval=30) == 27


def test_bounded_fit_with_xmax_not_above_xmin_is_invalid() -> None:
    model = fit(SCENARIO, known_xmin=5, known_xmax=3, distribution_type="left_and_right_bounded")
    assert model.state is ModelState.INVALID_INPUT


def test_known_alpha_and_xmin_only_measure_statistic() -> None:
    model = fit(SCENARIO, known_alpha=2.0, known_xmin=2)
    assert model.alpha == 2.0
    assert model.xmin == 2
    assert math.isfinite(model.test_statistic)


def test_bounded_fit_with_known_xmax() -> None:
    config = FitConfig(known_xmin=1, known_xmax=10, distribution_type="left_and_right_bounded")
    model = fit(SCENARIO, config)
    assert model.bounded
    assert model.xmax == 10
    assert model.sample_size == 9
    assert model.pdf(11) == 0.0


def test_bounded_fit_estimates_xmax() -> None:
    draws = PowerLawModel.from_parameters(2.0, 1, 30, "left_and_right_bounded").sample(
        400, UniformRandomSource(8)
    )
    model = fit(draws, distribution_type="left_and_right_bounded")
    assert model.is_valid
    assert model.xmin < model.xmax <= int(draws.max())


def test_overrides_select_statistic() -> None:
    model = fit(SCENARIO, test_statistic="ad")
    assert model.test_statistic_type is TestStatisticType.ANDERSON_DARLING
    assert model.test_statistic >= 0.0


def test_fitted_model_keeps_caller_config() -> None:
    model = fit(SCENARIO)
    assert model.config.estimates_xmin


def test_ks_of_fit_matches_ks_fit_statistic() -> None:
    model = fit(SCENARIO)
    assert calculate_ks_statistic_of_fit(model, SCENARIO) == pytest.approx(model.test_statistic)


def test_ks_shrinks_for_model_proportional_samples() -> None:
    model = PowerLawModel.from_parameters(2.5, 1, 2000)
    small = model.calculate_test_statistic(_proportional_sample(2.5, 100), TestStatisticType.KOLMOGOROV_SMIRNOV)
    large = model.calculate_test_statistic(_proportional_sample(2.5, 100_000), TestStatisticType.KOLMOGOROV_SMIRNOV)
    assert large < small
    assert large < 0.01
