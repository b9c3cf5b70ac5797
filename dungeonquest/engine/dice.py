"""Random draws for combat and flight."""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class Dice:
    """Wraps a ``random.Random`` so callers can inject a seeded or scripted source."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    @classmethod
    def seeded(cls, seed: int) -> "Dice":
        return cls(random.Random(seed))

    def roll(self) -> float:
        """Uniform draw in [0, 1)."""
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        """
        Draw once and compare against a probability.

        Args:
            probability: Success probability in [0, 1]

        Returns:
            True when the draw falls below ``probability``
        """
        return self.roll() < probability

    def variance(self, spread: int) -> int:
        """Uniform integer in [-spread, spread]."""
        return self._rng.randint(-spread, spread)

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return self._rng.choice(options)
