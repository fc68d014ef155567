"""Shared enums and interfaces for the power-law fitting core."""

from discrete_powerlaw.interfaces.distribution import (
    DistributionType,
    ModelState,
    RuntimeMode,
    SamplingMethod,
    SyntheticMode,
    TestStatisticType,
)

__all__ = [
    "DistributionType",
    "ModelState",
    "RuntimeMode",
    "SamplingMethod",
    "SyntheticMode",
    "TestStatisticType",
]
