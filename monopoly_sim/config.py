"""
Simulation configuration settings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from monopoly_sim.exceptions import InvalidStrategyError


class JailStrategy(str, Enum):
    """How the token leaves jail."""

    IMMEDIATE = "immediate"
    DOUBLES_OR_THREE = "doubles_or_three"

    @property
    def label(self) -> str:
        """Single-letter name used in reports."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Union["JailStrategy", str]) -> "JailStrategy":
        """Accept an enum member, its value, or the letters A/B."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for strategy, label in _LABELS.items():
                if key in (strategy.value, label.lower()):
                    return strategy
        raise InvalidStrategyError(
            f"Unknown jail strategy {value!r}; use one of "
            f"{', '.join(s.value for s in cls)} (or A/B)"
        )


_LABELS = {
    JailStrategy.IMMEDIATE: "A",
    JailStrategy.DOUBLES_OR_THREE: "B",
}


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for one simulation run."""

    strategy: JailStrategy
    turn_count: int
    seed: Optional[Union[int, str]] = None
    max_jail_attempts: int = 3

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", JailStrategy.parse(self.strategy))
        if isinstance(self.turn_count, bool) or not isinstance(self.turn_count, int):
            raise ValueError(f"turn_count must be an integer, got {self.turn_count!r}")
        if self.turn_count <= 0:
            raise ValueError(f"turn_count must be positive, got {self.turn_count}")
        if self.max_jail_attempts <= 0:
            raise ValueError("max_jail_attempts must be positive")
