"""
Jail release strategies.

Both strategies move the token to the jail square, record one visit there
and spend a held "Get Out of Jail Free" card if there is one. They differ
only in what happens when no card is held.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from monopoly_sim.cards import DeckKind
from monopoly_sim.config import JailStrategy
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidStrategyError
from monopoly_sim.spaces import JAIL_POSITION

if TYPE_CHECKING:
    from monopoly_sim.engine import TurnEngine

logger = logging.getLogger(__name__)


@dataclass
class JailOutcome:
    """What happened on one trip to jail."""

    used_card: Optional[DeckKind] = None
    attempts: int = 0
    rolled_double: bool = False


class JailPolicy(ABC):
    """Base class for jail strategies."""

    strategy: JailStrategy

    def send_to_jail(self, engine: "TurnEngine") -> JailOutcome:
        """Put the token in jail and apply the release rule."""
        state = engine.state
        state.position = JAIL_POSITION
        engine.board.record_visit(JAIL_POSITION)
        engine.event_log.log(EventType.GO_TO_JAIL, engine.turn, strategy=self.strategy.value)

        outcome = JailOutcome(used_card=self._spend_jail_card(engine))
        if outcome.used_card is None:
            self.release(engine, outcome)
        return outcome

    @staticmethod
    def _spend_jail_card(engine: "TurnEngine") -> Optional[DeckKind]:
        kind = engine.state.first_held_kind()
        if kind is None:
            return None
        card = engine.state.release_jail_card(kind)
        engine.decks[kind].return_jail_card(card)
        engine.event_log.log(EventType.JAIL_RELEASE, engine.turn, method="card", deck=kind.value)
        return kind

    @abstractmethod
    def release(self, engine: "TurnEngine", outcome: JailOutcome) -> None:
        """Release rule when no jail card was spent."""


class ImmediateRelease(JailPolicy):
    """Strategy A: the token leaves jail at once."""

    strategy = JailStrategy.IMMEDIATE

    def release(self, engine: "TurnEngine", outcome: JailOutcome) -> None:
        engine.event_log.log(EventType.JAIL_RELEASE, engine.turn, method="immediate")


class DoublesOrThree(JailPolicy):
    """
    Strategy B: roll for doubles up to max_attempts times.

    Every attempt uses up one turn of the run's budget. The token stays on
    the jail square while rolling; attempts record no visits.
    """

    strategy = JailStrategy.DOUBLES_OR_THREE

    def __init__(self, max_attempts: int = 3):
        self.max_attempts = max_attempts

    def release(self, engine: "TurnEngine", outcome: JailOutcome) -> None:
        while outcome.attempts < self.max_attempts:
            if not engine.budget.consume_jail_attempt():
                logger.debug(f"Turn budget ran out in jail after {outcome.attempts} attempts")
                break
            outcome.attempts += 1
            die1, die2 = engine.rng.roll_dice()
            outcome.rolled_double = die1 == die2
            engine.event_log.log(
                EventType.JAIL_ATTEMPT,
                engine.turn,
                attempt=outcome.attempts,
                die1=die1,
                die2=die2,
                doubles=outcome.rolled_double,
            )
            if outcome.rolled_double:
                break

        engine.event_log.log(
            EventType.JAIL_RELEASE,
            engine.turn,
            method="doubles" if outcome.rolled_double else "attempts_exhausted",
            attempts=outcome.attempts,
        )


def policy_for(strategy, max_attempts: int = 3) -> JailPolicy:
    """Build the jail policy for a strategy."""
    strategy = JailStrategy.parse(strategy)
    if strategy == JailStrategy.IMMEDIATE:
        return ImmediateRelease()
    if strategy == JailStrategy.DOUBLES_OR_THREE:
        return DoublesOrThree(max_attempts)
    raise InvalidStrategyError(f"No jail policy for {strategy!r}")
