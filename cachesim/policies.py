"""Replacement policies that pick which way of a cache set to evict."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod


class ReplacementPolicy(ABC):
    """Chooses the way of a set that receives a new block on a miss."""

    def __init__(self, nsets: int, assoc: int) -> None:
        if nsets <= 0 or assoc <= 0:
            raise ValueError("nsets and assoc must be positive")
        self.nsets = nsets
        self.assoc = assoc

    @abstractmethod
    def choose_victim(self, set_index: int) -> int:
        """Return the way of ``set_index`` to overwrite."""

    def touch(self, set_index: int, way: int) -> None:
        """Record that ``way`` of ``set_index`` was just filled."""


class FifoPolicy(ReplacementPolicy):
    """Replaces the ways of each set in round-robin order."""

    def __init__(self, nsets: int, assoc: int) -> None:
        super().__init__(nsets, assoc)
        self._next = [0] * nsets

    def choose_victim(self, set_index: int) -> int:
        victim = self._next[set_index]
        self._next[set_index] = (victim + 1) % self.assoc
        return victim


class LruPolicy(ReplacementPolicy):
    """Replaces the way with the greatest age; filling a way resets its age."""

    def __init__(self, nsets: int, assoc: int) -> None:
        super().__init__(nsets, assoc)
        self._ages = [[0] * assoc for _ in range(nsets)]

    def choose_victim(self, set_index: int) -> int:
        ages = self._ages[set_index]
        # max() keeps the first of equal ages, so ties go to the lowest way.
        return max(range(self.assoc), key=ages.__getitem__)

    def touch(self, set_index: int, way: int) -> None:
        ages = self._ages[set_index]
        for other, age in enumerate(ages):
            if other == way:
                ages[other] = 0
            elif age < self.assoc - 1:
                ages[other] = age + 1


class RandomPolicy(ReplacementPolicy):
    """Replaces a uniformly chosen way."""

    def __init__(self, nsets: int, assoc: int, rng: random.Random | None = None) -> None:
        super().__init__(nsets, assoc)
        self._rng = rng if rng is not None else random.Random()

    def choose_victim(self, set_index: int) -> int:
        return self._rng.randrange(self.assoc)


def make_policy(
    name: str, nsets: int, assoc: int, rng: random.Random | None = None
) -> ReplacementPolicy:
    """Build a policy from its name; only the first letter (f, l or r) counts."""
    kind = name[:1]
    if kind == "f":
        return FifoPolicy(nsets, assoc)
    if kind == "l":
        return LruPolicy(nsets, assoc)
    if kind == "r":
        return RandomPolicy(nsets, assoc, rng)
    raise ValueError(f"invalid replacement policy: {name!r}")