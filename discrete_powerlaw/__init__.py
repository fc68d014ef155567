"""Discrete power-law fitting with a bootstrap goodness-of-fit test.

Typical use::

    from discrete_powerlaw import fit, calculate_gof

    model = fit([1, 1, 2, 2, 2, 3, 4, 5, 10, 27])
    p_value = calculate_gof(model, [1, 1, 2, 2, 2, 3, 4, 5, 10, 27], replicas=200, seed=7)
"""

from discrete_powerlaw.distributions.empirical import EmpiricalDistribution
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import calculate_ks_statistic_of_fit, fit
from discrete_powerlaw.distributions.zeta import zeta
from discrete_powerlaw.interfaces.distribution import (
    DistributionType,
    ModelState,
    RuntimeMode,
    SamplingMethod,
    SyntheticMode,
    TestStatisticType,
)
from discrete_powerlaw.mc.synthetic import SyntheticReplicaGenerator, generate_synthetic_sample
from discrete_powerlaw.schema.fit_config import FitConfig
from discrete_powerlaw.schema.gof_config import GofConfig
from discrete_powerlaw.simulation.gof import GofResult, GoodnessOfFitEngine, calculate_gof
from discrete_powerlaw.utils.random_source import UniformRandomSource

__version__ = "0.1.0"

__all__ = [
    "DistributionType",
    "EmpiricalDistribution",
    "FitConfig",
    "GofConfig",
    "GofResult",
    "GoodnessOfFitEngine",
    "ModelState",
    "PowerLawModel",
    "RuntimeMode",
    "SamplingMethod",
    "SyntheticMode",
    "SyntheticReplicaGenerator",
    "TestStatisticType",
    "UniformRandomSource",
    "calculate_gof",
    "calculate_ks_statistic_of_fit",
    "fit",
    "generate_synthetic_sample",
    "zeta",
]
