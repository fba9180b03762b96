"""Domain-separated deterministic RNG using xxhash.

The outcome of tick T depends ONLY on Seed + MatchState at T-1.
Agent evaluation order must not matter.

Formula: RNG_Value = Hash(Seed, Domain, AgentID, Tick, Draw)
"""

from __future__ import annotations

import struct

import xxhash

from lightcycle.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, agent_id, tick, draw),
    so two agents deciding in the same tick never consume each other's
    randomness and replays are byte-identical.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, agent_id: int, tick: int, draw: int) -> int:
        payload = struct.pack("<qiqi", self._seed, domain.value, agent_id, tick) + struct.pack("<i", draw)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, agent_id: int, tick: int, draw: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, agent_id, tick, draw) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, agent_id: int, tick: int, low: int, high: int, draw: int = 0) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, agent_id, tick, draw)
        return low + int(f * (high - low + 1))

    def next_bool(
        self, domain: Domain, agent_id: int, tick: int, draw: int = 0, probability: float = 0.5,
    ) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, agent_id, tick, draw) < probability

    def choice_index(self, domain: Domain, agent_id: int, tick: int, count: int, draw: int = 0) -> int:
        """Uniform index in [0, count)."""
        return self.next_int(domain, agent_id, tick, 0, count - 1, draw)
