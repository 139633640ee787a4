"""Shared test fixtures for the occupancy simulator tests."""

from typing import Iterable, Optional

import pytest

from monopoly_sim.board import Board
from monopoly_sim.cards import Card, CardDeck, DeckKind
from monopoly_sim.data import load_card_sets, load_squares
from monopoly_sim.dice import RandomSource
from monopoly_sim.engine import TurnEngine
from monopoly_sim.events import EventLog
from monopoly_sim.jail import policy_for
from monopoly_sim.player import TurnBudget

JAIL_CARD_CC = Card(5, True, "Get Out of Jail Free")
JAIL_CARD_CHANCE = Card(9, True, "Get Out of Jail Free")
GO_TO_JAIL_CC = Card(6, True, "Go To Jail", 10)


class ScriptedRandom(RandomSource):
    """Random source whose die rolls come from a list, then fall back to the seed."""

    def __init__(self, rolls: Iterable[int] = (), seed=0):
        super().__init__(seed)
        self.rolls = list(rolls)

    def script(self, *rolls: int) -> None:
        self.rolls.extend(rolls)

    def roll_die(self, sides: int = 6) -> int:
        if self.rolls:
            return self.rolls.pop(0)
        return super().roll_die(sides)


@pytest.fixture
def rng():
    """Seeded random source for reproducibility."""
    return RandomSource(42)


@pytest.fixture
def scripted():
    return ScriptedRandom()


@pytest.fixture
def squares():
    """The 40 bundled board squares."""
    return load_squares()


@pytest.fixture
def card_sets():
    return load_card_sets()


@pytest.fixture
def board(squares):
    return Board(squares)


@pytest.fixture
def make_engine(squares, card_sets):
    """Factory for engines wired to a fresh board and decks."""

    def _make(
        strategy="immediate",
        rng: Optional[RandomSource] = None,
        turns: int = 100,
        record_events: bool = True,
    ) -> TurnEngine:
        rng = rng if rng is not None else ScriptedRandom()
        return TurnEngine(
            board=Board(squares),
            community_chest=CardDeck(DeckKind.COMMUNITY_CHEST, card_sets[DeckKind.COMMUNITY_CHEST], rng),
            chance=CardDeck(DeckKind.CHANCE, card_sets[DeckKind.CHANCE], rng),
            policy=policy_for(strategy),
            rng=rng,
            budget=TurnBudget(turns),
            event_log=EventLog(enabled=record_events),
        )

    return _make
