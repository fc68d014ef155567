"""Discrepancy statistics between an empirical and a model survival CDF."""

from __future__ import annotations

import math

import numpy as np

from discrete_powerlaw.distributions.empirical import EmpiricalDistribution
from discrete_powerlaw.interfaces.distribution import TestStatisticType


def ks_statistic(empirical_cdf: np.ndarray, model_cdf: np.ndarray) -> float:
    """max_x |E(x) - F(x)|."""
    if empirical_cdf.size == 0:
        return math.inf
    return float(np.max(np.abs(empirical_cdf - model_cdf)))


def cvm_statistic(empirical_cdf: np.ndarray, model_cdf: np.ndarray, model_pdf: np.ndarray, n: int) -> float:
    """N * Σ (E(x) - F(x))^2 p(x)."""
    if empirical_cdf.size == 0:
        return math.inf
    diff = empirical_cdf - model_cdf
    return float(n * np.sum(diff * diff * model_pdf))


def ad_statistic(empirical_cdf: np.ndarray, model_cdf: np.ndarray, model_pdf: np.ndarray, n: int) -> float:
    """N * Σ (E(x) - F(x))^2 p(x) / (F(x)(1 - F(x))); zero denominators add nothing."""
    if empirical_cdf.size == 0:
        return math.inf
    diff = empirical_cdf - model_cdf
    denominator = model_cdf * (1.0 - model_cdf)
    terms = np.zeros_like(diff)
    nonzero = denominator != 0.0
    terms[nonzero] = diff[nonzero] ** 2 * model_pdf[nonzero] / denominator[nonzero]
    return float(n * np.sum(terms))


def compute_statistic(
    statistic: TestStatisticType,
    empirical_cdf: np.ndarray,
    model_cdf: np.ndarray,
    model_pdf: np.ndarray,
    n: int,
) -> float:
    statistic = TestStatisticType(statistic)
    if statistic is TestStatisticType.KOLMOGOROV_SMIRNOV:
        return ks_statistic(empirical_cdf, model_cdf)
    if statistic is TestStatisticType.CRAMER_VON_MISES:
        return cvm_statistic(empirical_cdf, model_cdf, model_pdf, n)
    if statistic is TestStatisticType.ANDERSON_DARLING:
        return ad_statistic(empirical_cdf, model_cdf, model_pdf, n)
    return math.inf


def compare_distributions(empirical: EmpiricalDistribution, model, statistic: TestStatisticType) -> float:
    """Evaluate ``statistic`` over the model's domain ``[model.xmin, model.xmax]``.

    ``model`` needs ``xmin``/``xmax`` plus ``cdf_range``/``pdf_range``; any
    degenerate case (empty tail, xmin >= xmax) reports +inf.
    """
    xmin, xmax = model.xmin, model.xmax
    if empirical.is_empty or xmin is None or xmax is None or xmin >= xmax:
        return math.inf
    empirical_cdf = empirical.cdf_range(xmin, xmax)
    model_cdf = model.cdf_range(xmin, xmax)
    model_pdf = model.pdf_range(xmin, xmax)
    return compute_statistic(statistic, empirical_cdf, model_cdf, model_pdf, empirical.n)


__all__ = [
    "ks_statistic",
    "cvm_statistic",
    "ad_statistic",
    "compute_statistic",
    "compare_distributions",
]
