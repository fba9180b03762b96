"""Engine systems: deterministic randomness."""

from lightcycle.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
