"""Tagged variants shared by the model, the generator and the bootstrap engine."""

from __future__ import annotations

from enum import Enum


class DistributionType(str, Enum):
    LEFT_BOUNDED = "left_bounded"
    LEFT_AND_RIGHT_BOUNDED = "left_and_right_bounded"

    @property
    def bounded(self) -> bool:
        return self is DistributionType.LEFT_AND_RIGHT_BOUNDED


class TestStatisticType(str, Enum):
    KOLMOGOROV_SMIRNOV = "ks"
    CRAMER_VON_MISES = "cvm"
    ANDERSON_DARLING = "ad"
    NONE = "none"

    __test__ = False  # keep pytest from collecting the enum


class ModelState(str, Enum):
    VALID = "valid"
    NO_INPUT = "no_input"
    INVALID_INPUT = "invalid_input"


class SyntheticMode(str, Enum):
    SEMI_PARAMETRIC = "semi_parametric"
    FULL_PARAMETRIC = "full_parametric"


class RuntimeMode(str, Enum):
    SINGLE_THREAD = "single_thread"
    MULTI_THREAD = "multi_thread"


class SamplingMethod(str, Enum):
    PRECISE = "precise"
    APPROXIMATE = "approximate"


__all__ = [
    "DistributionType",
    "TestStatisticType",
    "ModelState",
    "SyntheticMode",
    "RuntimeMode",
    "SamplingMethod",
]
