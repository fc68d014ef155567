import math

import numpy as np
import pytest

from discrete_powerlaw.distributions.empirical import EmpiricalDistribution
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.statistics import (
    ad_statistic,
    compare_distributions,
    compute_statistic,
    cvm_statistic,
    ks_statistic,
)
from discrete_powerlaw.interfaces.distribution import TestStatisticType


def test_ks_is_largest_absolute_gap() -> None:
    emp = np.array([1.0, 0.5, 0.2])
    model = np.array([1.0, 0.6, 0.1])
    assert ks_statistic(emp, model) == pytest.approx(0.1)


def test_cvm_weights_squared_gap_by_pdf() -> None:
    emp = np.array([1.0, 0.5])
    model = np.array([1.0, 0.7])
    pdf = np.array([0.3, 0.2])
    assert cvm_statistic(emp, model, pdf, 10) == pytest.approx(10 * 0.04 * 0.2)


def test_ad_skips_zero_denominators() -> None:
    emp = np.array([1.0, 0.5])
    model = np.array([1.0, 0.7])
    pdf = np.array([0.3, 0.2])
    expected = 10 * 0.04 * 0.2 / (0.7 * 0.3)
    assert ad_statistic(emp, model, pdf, 10) == pytest.approx(expected)


def test_none_statistic_is_infinite() -> None:
    emp = np.array([1.0])
    assert compute_statistic(TestStatisticType.NONE, emp, emp, emp, 1) == math.inf


def test_empty_empirical_gives_infinity() -> None:
    model = PowerLawModel.from_parameters(2.0, 1, 10)
    empirical = EmpiricalDistribution([50, 60], xmin=1, xmax=10)
    assert compare_distributions(empirical, model, TestStatisticType.KOLMOGOROV_SMIRNOV) == math.inf


def test_statistics_are_non_negative_on_real_fit() -> None:
    model = PowerLawModel.from_parameters(2.0, 1, 30)
    data = [1, 1, 1, 2, 2, 3, 5, 8, 13, 30]
    for statistic in (
        TestStatisticType.KOLMOGOROV_SMIRNOV,
        TestStatisticType.CRAMER_VON_MISES,
        TestStatisticType.ANDERSON_DARLING,
    ):
        value = model.calculate_test_statistic(data, statistic)
        assert math.isfinite(value)
        assert value >= 0.0
