"""Synthetic replica generation."""

from discrete_powerlaw.mc.synthetic import SyntheticReplicaGenerator, generate_synthetic_sample

__all__ = ["SyntheticReplicaGenerator", "generate_synthetic_sample"]
