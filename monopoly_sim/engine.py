"""
Turn engine and single-run entry point.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from monopoly_sim.board import Board, nearest_railroad, nearest_utility
from monopoly_sim.cards import Card, CardDeck, CardEffect, DeckKind, effect_for
from monopoly_sim.config import JailStrategy, SimulationConfig
from monopoly_sim.data import load_card_sets, load_squares
from monopoly_sim.dice import RandomSource
from monopoly_sim.events import EventLog, EventType, SimulationEvent
from monopoly_sim.exceptions import BoardDataError
from monopoly_sim.jail import JailOutcome, JailPolicy, policy_for
from monopoly_sim.player import BoardState, TurnBudget
from monopoly_sim.spaces import (
    BOARD_SIZE,
    CHANCE,
    COMMUNITY_CHEST,
    GO_TO_JAIL,
    RAILROAD_POSITIONS,
    UTILITY_POSITIONS,
    BoardSquare,
)

logger = logging.getLogger(__name__)


def wrap(position: int) -> int:
    """Map any position onto the board loop."""
    return position % BOARD_SIZE


class TurnEngine:
    """
    Plays turns for one token on one board.

    The engine owns the board, both decks, the token state and the turn
    budget for a single run. Nothing is shared between engines.
    """

    def __init__(
        self,
        board: Board,
        community_chest: CardDeck,
        chance: CardDeck,
        policy: JailPolicy,
        rng: RandomSource,
        budget: TurnBudget,
        state: Optional[BoardState] = None,
        event_log: Optional[EventLog] = None,
    ):
        self.board = board
        self.decks: Dict[DeckKind, CardDeck] = {
            DeckKind.COMMUNITY_CHEST: community_chest,
            DeckKind.CHANCE: chance,
        }
        self.policy = policy
        self.rng = rng
        self.budget = budget
        self.state = state if state is not None else BoardState()
        self.event_log = event_log if event_log is not None else EventLog(enabled=False)

        self.turn = 0
        self.jail_entries = 0
        self.last_jail_outcome: Optional[JailOutcome] = None

        self._check_card_destinations()

    def _check_card_destinations(self) -> None:
        """
        Fixed-destination cards must land on squares that draw nothing.

        Card relocations never draw again, so a card pointing at a card
        square would silently skip that square's effect.
        """
        for kind, deck in self.decks.items():
            for card in deck.draw_pile + deck.discard_pile + deck.held:
                if effect_for(kind, card) != CardEffect.ADVANCE_TO:
                    continue
                target = card.destination_position
                if not 0 <= target < BOARD_SIZE:
                    raise BoardDataError(f"{kind.value} card {card.id} points off the board: {target}")
                if self.board.is_card_square(target):
                    raise BoardDataError(
                        f"{kind.value} card {card.id} advances to card square {target}"
                    )
                square_name = self.board.name_at(target)
                if card.destination_name and card.destination_name != square_name:
                    raise BoardDataError(
                        f"{kind.value} card {card.id} names '{card.destination_name}' "
                        f"but square {target} is '{square_name}'"
                    )

    def roll_dice(self) -> Tuple[int, int]:
        die1, die2 = self.rng.roll_dice()
        self.event_log.log(
            EventType.DICE_ROLL,
            self.turn,
            die1=die1,
            die2=die2,
            total=die1 + die2,
            doubles=die1 == die2,
        )
        return die1, die2

    def move_to(self, position: int) -> None:
        """Put the token on a square and count the visit."""
        old_position = self.state.position
        self.state.position = position
        self.board.record_visit(position)
        self.event_log.log(EventType.MOVE, self.turn, from_position=old_position, to_position=position)

    def advance(self, steps: int) -> int:
        """Move the token forward (or back, for negative steps) around the loop."""
        self.move_to(wrap(self.state.position + steps))
        return self.state.position

    def play_turn(self) -> int:
        """
        Play one ordinary turn.

        Returns the token position at the end of the turn.
        """
        self.turn += 1
        die1, die2 = self.roll_dice()
        self.advance(die1 + die2)
        self.resolve_square()
        return self.state.position

    def resolve_square(self) -> None:
        """Apply the effect of the square the token just landed on."""
        name = self.board.name_at(self.state.position)
        if name == COMMUNITY_CHEST:
            self.draw_card(DeckKind.COMMUNITY_CHEST)
        elif name == CHANCE:
            self.draw_card(DeckKind.CHANCE)
        elif name == GO_TO_JAIL:
            self.go_to_jail()

    def draw_card(self, kind: DeckKind) -> Card:
        deck = self.decks[kind]
        reshuffles = deck.reshuffles
        card = deck.draw()
        if deck.reshuffles != reshuffles:
            self.event_log.log(EventType.RESHUFFLE, self.turn, deck=kind.value)
        self.event_log.log(EventType.CARD_DRAW, self.turn, deck=kind.value, card=card.id)
        self.apply_card(kind, card)
        return card

    def apply_card(self, kind: DeckKind, card: Card) -> None:
        """Carry out the movement effect of a drawn card."""
        effect = effect_for(kind, card)
        if effect is None:
            return

        position = self.state.position
        if effect == CardEffect.ADVANCE_TO:
            self.move_to(card.destination_position)
        elif effect == CardEffect.NEAREST_RAILROAD:
            self.move_to(nearest_railroad(position, RAILROAD_POSITIONS))
        elif effect == CardEffect.NEAREST_UTILITY:
            self.move_to(nearest_utility(position, UTILITY_POSITIONS))
        elif effect == CardEffect.GO_BACK_THREE:
            self.advance(-3)
        elif effect == CardEffect.GO_TO_JAIL:
            self.go_to_jail()
        elif effect == CardEffect.GET_OUT_OF_JAIL:
            self.state.hold_jail_card(kind, card)

    def go_to_jail(self) -> JailOutcome:
        self.jail_entries += 1
        self.last_jail_outcome = self.policy.send_to_jail(self)
        return self.last_jail_outcome

    def run(self) -> None:
        """Play ordinary turns until the budget is spent."""
        while self.budget.take_ordinary_turn():
            self.play_turn()


@dataclass
class SquareVisits:
    """Final visit count of one square."""

    position: int
    name: str
    visits: int


@dataclass
class SimulationResult:
    """Visit counts and bookkeeping from one run."""

    strategy: JailStrategy
    turn_count: int
    seed: Optional[object]
    squares: List[SquareVisits]
    ordinary_turns: int
    jail_turns: int
    jail_entries: int
    reshuffles: Dict[str, int] = field(default_factory=dict)
    elapsed_seconds: float = 0.0
    events: List[SimulationEvent] = field(default_factory=list)

    @classmethod
    def from_engine(
        cls, config: SimulationConfig, engine: TurnEngine, elapsed_seconds: float = 0.0
    ) -> "SimulationResult":
        return cls(
            strategy=config.strategy,
            turn_count=config.turn_count,
            seed=config.seed,
            squares=[SquareVisits(s.position, s.name, s.visit_count) for s in engine.board.squares],
            ordinary_turns=engine.budget.ordinary_turns,
            jail_turns=engine.budget.jail_turns,
            jail_entries=engine.jail_entries,
            reshuffles={kind.value: deck.reshuffles for kind, deck in engine.decks.items()},
            elapsed_seconds=elapsed_seconds,
            events=engine.event_log.get_events(),
        )

    @property
    def total_visits(self) -> int:
        return sum(s.visits for s in self.squares)

    def visit_counts(self) -> List[int]:
        return [s.visits for s in self.squares]

    def percentages(self) -> List[float]:
        """Visits per square as a percentage of the requested turn count."""
        return [s.visits / self.turn_count * 100 for s in self.squares]

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(
            [(s.position, s.name, s.visits) for s in self.squares],
            columns=["position", "name", "visits"],
        )
        df["percent"] = df["visits"] / self.turn_count * 100
        return df.set_index("position")


def build_engine(
    config: SimulationConfig,
    squares: Optional[Iterable[BoardSquare]] = None,
    card_sets: Optional[Mapping[DeckKind, Iterable[Card]]] = None,
    data_dir=None,
    record_events: bool = False,
) -> TurnEngine:
    """Fresh board, decks, state and budget for one run."""
    policy = policy_for(config.strategy, config.max_jail_attempts)
    rng = RandomSource(config.seed)

    board = Board(squares if squares is not None else load_squares(data_dir))
    if card_sets is None:
        card_sets = load_card_sets(data_dir)

    return TurnEngine(
        board=board,
        community_chest=CardDeck(DeckKind.COMMUNITY_CHEST, card_sets[DeckKind.COMMUNITY_CHEST], rng),
        chance=CardDeck(DeckKind.CHANCE, card_sets[DeckKind.CHANCE], rng),
        policy=policy,
        rng=rng,
        budget=TurnBudget(config.turn_count),
        event_log=EventLog(enabled=record_events),
    )


def run_simulation(
    config: SimulationConfig,
    squares: Optional[Iterable[BoardSquare]] = None,
    card_sets: Optional[Mapping[DeckKind, Iterable[Card]]] = None,
    data_dir=None,
    record_events: bool = False,
) -> SimulationResult:
    """Run config.turn_count turns from a fresh start and return the visit counts."""
    engine = build_engine(config, squares, card_sets, data_dir, record_events)

    logger.debug(f"Running {config.turn_count} turns, strategy {config.strategy.label}, seed {config.seed}")
    started = time.perf_counter()
    engine.run()
    elapsed = time.perf_counter() - started

    for deck in engine.decks.values():
        deck.check_conservation()

    return SimulationResult.from_engine(config, engine, elapsed)
