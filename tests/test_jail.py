"""
Tests specifically for jail mechanics.
"""

import pytest

from monopoly_sim.cards import DeckKind
from monopoly_sim.config import JailStrategy
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidStrategyError
from monopoly_sim.jail import DoublesOrThree, ImmediateRelease, policy_for

from conftest import JAIL_CARD_CC, JAIL_CARD_CHANCE, ScriptedRandom


def give_jail_card(engine, kind, card):
    """Move a deck's jail card into the player's hand as a draw would."""
    deck = engine.decks[kind]
    deck.draw_pile.remove(card)
    deck.held.append(card)
    engine.state.hold_jail_card(kind, card)


@pytest.mark.parametrize("strategy", ["immediate", "doubles_or_three"])
def test_landing_on_go_to_jail(make_engine, strategy):
    """
    Landing on Go To Jail sends the token to square 10 and counts one visit
    there, whatever the strategy.
    """
    rng = ScriptedRandom([4, 6, 2, 2])  # 20 -> 30, then a double in jail
    engine = make_engine(strategy, rng=rng)
    engine.state.position = 20

    engine.play_turn()

    assert engine.state.position == 10
    assert engine.board.square(30).visit_count == 1
    assert engine.board.square(10).visit_count == 1
    assert engine.jail_entries == 1


def test_immediate_release_rolls_nothing(make_engine):
    rng = ScriptedRandom()
    engine = make_engine("immediate", rng=rng, turns=10)
    rng.script(1, 2)

    outcome = engine.go_to_jail()

    assert outcome.attempts == 0
    assert rng.rolls == [1, 2]
    assert engine.budget.remaining == 10


def test_community_chest_card_spent_before_chance(make_engine):
    engine = make_engine("immediate")
    give_jail_card(engine, DeckKind.CHANCE, JAIL_CARD_CHANCE)
    give_jail_card(engine, DeckKind.COMMUNITY_CHEST, JAIL_CARD_CC)

    outcome = engine.go_to_jail()

    assert outcome.used_card == DeckKind.COMMUNITY_CHEST
    assert not engine.state.has_jail_card(DeckKind.COMMUNITY_CHEST)
    assert engine.state.has_jail_card(DeckKind.CHANCE)
    assert engine.decks[DeckKind.COMMUNITY_CHEST].discard_pile[-1] == JAIL_CARD_CC
    for deck in engine.decks.values():
        deck.check_conservation()


def test_jail_card_spent_exactly_once(make_engine):
    engine = make_engine("immediate")
    give_jail_card(engine, DeckKind.CHANCE, JAIL_CARD_CHANCE)

    first = engine.go_to_jail()
    second = engine.go_to_jail()

    assert first.used_card == DeckKind.CHANCE
    assert second.used_card is None
    assert engine.decks[DeckKind.CHANCE].discard_pile.count(JAIL_CARD_CHANCE) == 1
    assert engine.board.square(10).visit_count == 2


def test_doubles_or_three_with_card_rolls_nothing(make_engine):
    rng = ScriptedRandom()
    engine = make_engine("doubles_or_three", rng=rng, turns=10)
    give_jail_card(engine, DeckKind.COMMUNITY_CHEST, JAIL_CARD_CC)
    rng.script(1, 2)

    outcome = engine.go_to_jail()

    assert outcome.used_card == DeckKind.COMMUNITY_CHEST
    assert outcome.attempts == 0
    assert rng.rolls == [1, 2]
    assert engine.budget.jail_turns == 0


def test_doubles_on_second_attempt(make_engine):
    rng = ScriptedRandom([1, 2, 3, 3])
    engine = make_engine("doubles_or_three", rng=rng, turns=10)

    outcome = engine.go_to_jail()

    assert outcome.attempts == 2
    assert outcome.rolled_double
    assert engine.budget.jail_turns == 2
    assert engine.budget.remaining == 8
    assert engine.state.position == 10


def test_three_failed_attempts_consume_three_turns(make_engine):
    rng = ScriptedRandom([1, 2, 3, 4, 5, 6])
    engine = make_engine("doubles_or_three", rng=rng, turns=10)

    outcome = engine.go_to_jail()

    assert outcome.attempts == 3
    assert not outcome.rolled_double
    assert engine.budget.jail_turns == 3
    assert engine.budget.remaining == 7
    attempts = engine.event_log.of_type(EventType.JAIL_ATTEMPT)
    assert [e.details["doubles"] for e in attempts] == [False, False, False]


def test_jail_attempts_shorten_the_run(make_engine):
    """
    Turns spent in jail come out of the run's budget, so the driving loop
    plays fewer ordinary turns.
    """
    rng = ScriptedRandom([4, 6, 1, 2, 3, 4, 5, 6, 1, 2])  # 20 -> 30 -> jail, three misses
    engine = make_engine("doubles_or_three", rng=rng, turns=5)
    engine.state.position = 20

    engine.run()

    assert engine.budget.ordinary_turns == 2
    assert engine.budget.jail_turns == 3
    assert engine.budget.exhausted


def test_attempts_stop_when_budget_runs_out(make_engine):
    rng = ScriptedRandom([1, 2, 3, 4, 5, 6])
    engine = make_engine("doubles_or_three", rng=rng, turns=1)

    outcome = engine.go_to_jail()

    assert outcome.attempts == 1
    assert engine.budget.remaining == 0


def test_policy_for_strategies():
    assert isinstance(policy_for(JailStrategy.IMMEDIATE), ImmediateRelease)
    assert isinstance(policy_for("B"), DoublesOrThree)
    assert policy_for("doubles_or_three", max_attempts=5).max_attempts == 5


def test_policy_for_unknown_strategy():
    with pytest.raises(InvalidStrategyError):
        policy_for("C")
