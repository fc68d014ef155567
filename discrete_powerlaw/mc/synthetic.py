"""Synthetic replica generator for the bootstrap goodness-of-fit test."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.exceptions import GoodnessOfFitError
from discrete_powerlaw.interfaces.distribution import SamplingMethod, SyntheticMode
from discrete_powerlaw.utils.logging import get_logger
from discrete_powerlaw.utils.random_source import UniformRandomSource, as_random_source

log = get_logger(__name__, component="mc.synthetic")


class SyntheticReplicaGenerator:
    """Draw replicas that mix model-tail samples with resampled bulk data.

    Semi-parametric mode keeps the sample values outside the model's domain
    (the "bulk") and resamples them with replacement; the rest of each
    replica comes from the model. Full-parametric mode draws everything from
    the model.

    The generator owns a private copy of the model, so replicas generated
    concurrently never see a shared object.
    """

    def __init__(
        self,
        model: PowerLawModel,
        sample: Optional[Sequence[int] | np.ndarray] = None,
        mode: SyntheticMode = SyntheticMode.SEMI_PARAMETRIC,
        replica_size: Optional[int] = None,
        sampling: SamplingMethod = SamplingMethod.PRECISE,
    ) -> None:
        model.require_valid()
        self.mode = SyntheticMode(mode)
        self.sampling = SamplingMethod(sampling)
        self._model = model.copy()

        values = np.asarray(sample if sample is not None else [], dtype=np.int64)
        if self.mode is SyntheticMode.SEMI_PARAMETRIC:
            if values.size == 0:
                raise GoodnessOfFitError("semi-parametric replicas need the original sample")
            outside = values < self._model.xmin
            if self._model.bounded:
                outside |= values > self._model.xmax
            self._bulk = values[outside].copy()
            self._size = int(values.size)
            self.tail_probability = 1.0 - self._bulk.size / float(values.size)
        else:
            size = replica_size if replica_size is not None else int(values.size)
            if size <= 0:
                raise GoodnessOfFitError("full-parametric replicas need a positive replica size")
            self._bulk = np.empty(0, dtype=np.int64)
            self._size = int(size)
            self.tail_probability = 1.0
        self._bulk.flags.writeable = False

    @property
    def model(self) -> PowerLawModel:
        return self._model

    @property
    def bulk(self) -> np.ndarray:
        return self._bulk

    @property
    def replica_size(self) -> int:
        return self._size

    @property
    def tail_count(self) -> int:
        """Number of replica values drawn from the model."""
        if self._bulk.size == 0:
            return self._size
        return int(math.floor(self.tail_probability * self._size))

    def generate(self, rng: UniformRandomSource | int | None = None) -> np.ndarray:
        source = as_random_source(rng)
        n_tail = self.tail_count
        tail = self._model.sample(n_tail, source, self.sampling)
        n_bulk = self._size - n_tail
        if n_bulk == 0:
            return tail
        picks = source.uniform_int_array(self._bulk.size - 1, n_bulk)
        return np.concatenate([tail, self._bulk[picks]])


def generate_synthetic_sample(
    model: PowerLawModel,
    sample: Optional[Sequence[int] | np.ndarray] = None,
    size: Optional[int] = None,
    mode: Optional[SyntheticMode] = None,
    seed: UniformRandomSource | int | None = None,
    sampling: SamplingMethod = SamplingMethod.PRECISE,
) -> np.ndarray:
    """One replica from ``model``.

    With a sample and no explicit mode the replica is semi-parametric; with
    only ``size`` it is full-parametric. An invalid model yields an empty
    array.
    """
    if not model.is_valid:
        log.warning("Model is not valid; no synthetic sample drawn", extra={"state": model.state.value})
        return np.empty(0, dtype=np.int64)
    if mode is None:
        mode = SyntheticMode.SEMI_PARAMETRIC if sample is not None else SyntheticMode.FULL_PARAMETRIC
    generator = SyntheticReplicaGenerator(model, sample, mode=mode, replica_size=size, sampling=sampling)
    return generator.generate(seed)


__all__ = ["SyntheticReplicaGenerator", "generate_synthetic_sample"]
