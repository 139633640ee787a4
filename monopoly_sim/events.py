"""
Event logging for a single simulation run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class EventType(Enum):
    """Types of simulation events."""

    DICE_ROLL = "dice_roll"
    MOVE = "move"
    CARD_DRAW = "card_draw"
    RESHUFFLE = "reshuffle"
    GO_TO_JAIL = "go_to_jail"
    JAIL_ATTEMPT = "jail_attempt"
    JAIL_RELEASE = "jail_release"


@dataclass
class SimulationEvent:
    """A logged event in the run."""

    event_type: EventType
    turn: int
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"[T{self.turn}] {self.event_type.value}: {self.details}"


class EventLog:
    """Collects events for one run. Disabled logs drop everything."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.events: List[SimulationEvent] = []

    def log(self, event_type: EventType, turn: int, **details: Any) -> None:
        """Log a simulation event."""
        if self.enabled:
            self.events.append(SimulationEvent(event_type, turn, details))

    def get_events(self) -> List[SimulationEvent]:
        """Get all logged events."""
        return self.events.copy()

    def of_type(self, event_type: EventType) -> List[SimulationEvent]:
        return [e for e in self.events if e.event_type == event_type]

