from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class RNG:
    """
    Deterministic-friendly RNG wrapper around random.Random.

    Every random draw made while building a level goes through one instance of
    this class, so a fixed seed reproduces the same layout and population.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def random(self) -> float:
        """Return the next random float in the range [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def coin_flip(self) -> bool:
        """One fair coin flip."""
        return self.random() < 0.5

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one item with probability proportional to its weight."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("weights must sum to a positive value")
        roll = self.random() * total
        acc = 0.0
        for item, weight in zip(items, weights):
            acc += weight
            if roll < acc:
                return item
        return items[-1]
