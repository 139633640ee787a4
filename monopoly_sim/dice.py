"""
Random number source for dice rolls and deck shuffling.
"""

import random
from typing import List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

Seed = Union[int, str, None]


class RandomSource:
    """Uniform integers for one simulation run.

    Each run owns its own instance so concurrent runs never share RNG state.
    """

    def __init__(self, seed: Seed = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in the closed range [low, high]."""
        return self._rng.randint(low, high)

    def roll_die(self, sides: int = 6) -> int:
        return self.randint(1, sides)

    def roll_dice(self) -> Tuple[int, int]:
        """Roll two six-sided dice."""
        return self.roll_die(), self.roll_die()

    def shuffle(self, items: List[T]) -> None:
        """Shuffle in place."""
        self._rng.shuffle(items)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"


def derive_seed(base: Optional[int], *parts: object) -> Seed:
    """Reproducible per-run seed from a base seed and run coordinates."""
    if base is None:
        return None
    return ":".join(str(p) for p in (base, *parts))
