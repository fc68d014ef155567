"""Seedable uniform random source backed by numpy generators."""

from __future__ import annotations

from typing import List, Optional

import numpy as np


class UniformRandomSource:
    """Uniform real/int draws with explicit seeding.

    Each instance owns its generator; nothing here touches numpy's global
    state. ``spawn`` derives independent child sources from the same seed
    sequence, which is how bootstrap replicas get their own streams.
    """

    def __init__(self, seed: Optional[int | np.random.SeedSequence] = None) -> None:
        self.seed(seed)

    def seed(self, value: Optional[int | np.random.SeedSequence] = None) -> None:
        """(Re)seed the source; ``None`` draws fresh OS entropy."""
        if isinstance(value, np.random.SeedSequence):
            self._seed_seq = value
        else:
            self._seed_seq = np.random.SeedSequence(value)
        self._rng = np.random.default_rng(self._seed_seq)

    @property
    def entropy(self) -> int | None:
        entropy = self._seed_seq.entropy
        return int(entropy) if isinstance(entropy, (int, np.integer)) else None

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def uniform01(self) -> float:
        return float(self._rng.random())

    def uniform_int(self, max_inclusive: int) -> int:
        return int(self._rng.integers(0, max_inclusive, endpoint=True))

    def uniform01_array(self, size: int) -> np.ndarray:
        return self._rng.random(size)

    def uniform_int_array(self, max_inclusive: int, size: int) -> np.ndarray:
        return self._rng.integers(0, max_inclusive, size=size, endpoint=True)

    def spawn(self, n: int) -> List["UniformRandomSource"]:
        return [UniformRandomSource(child) for child in self._seed_seq.spawn(n)]

    def spawn_sequences(self, n: int) -> List[np.random.SeedSequence]:
        """Child seed sequences, for handing to worker processes."""
        return self._seed_seq.spawn(n)


def as_random_source(rng: "UniformRandomSource | int | None") -> UniformRandomSource:
    if isinstance(rng, UniformRandomSource):
        return rng
    return UniformRandomSource(rng)


__all__ = ["UniformRandomSource", "as_random_source"]
