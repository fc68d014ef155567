"""Discrete power-law model, empirical comparator and test statistics."""

from discrete_powerlaw.distributions.empirical import EmpiricalDistribution
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import (
    calculate_ks_statistic_of_fit,
    estimate_alpha,
    estimate_alpha_approximate,
    estimate_lower_bound,
    estimate_upper_bound,
    fit,
    log_likelihood,
)
from discrete_powerlaw.distributions.statistics import compute_statistic

__all__ = [
    "EmpiricalDistribution",
    "PowerLawModel",
    "calculate_ks_statistic_of_fit",
    "compute_statistic",
    "estimate_alpha",
    "estimate_alpha_approximate",
    "estimate_lower_bound",
    "estimate_upper_bound",
    "fit",
    "log_likelihood",
]
