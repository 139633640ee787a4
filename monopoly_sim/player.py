"""
Token state and the turn budget of one simulated player.
"""

from typing import Dict, Optional

from monopoly_sim.cards import Card, DeckKind


class BoardState:
    """Where the token is and which jail cards it holds."""

    def __init__(self, position: int = 0):
        self.position = position
        self.held_jail_cards: Dict[DeckKind, Card] = {}

    def hold_jail_card(self, kind: DeckKind, card: Card) -> None:
        self.held_jail_cards[kind] = card

    def has_jail_card(self, kind: DeckKind) -> bool:
        return kind in self.held_jail_cards

    def release_jail_card(self, kind: DeckKind) -> Card:
        """Give up the held card for a deck; KeyError if none is held."""
        return self.held_jail_cards.pop(kind)

    def first_held_kind(self) -> Optional[DeckKind]:
        """Deck of the card spent on jail entry, Community Chest before Chance."""
        for kind in (DeckKind.COMMUNITY_CHEST, DeckKind.CHANCE):
            if kind in self.held_jail_cards:
                return kind
        return None

    def __repr__(self) -> str:
        held = ", ".join(k.value for k in self.held_jail_cards) or "none"
        return f"BoardState(position={self.position}, held=[{held}])"


class TurnBudget:
    """
    Turns left in a run.

    Ordinary turns and turns spent rolling for doubles in jail draw from the
    same budget, so jail time shortens the run the caller is driving.
    """

    def __init__(self, total: int):
        if total < 0:
            raise ValueError("turn budget cannot be negative")
        self.total = total
        self.remaining = total
        self.ordinary_turns = 0
        self.jail_turns = 0

    def take_ordinary_turn(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        self.ordinary_turns += 1
        return True

    def consume_jail_attempt(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        self.jail_turns += 1
        return True

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def __repr__(self) -> str:
        return (
            f"TurnBudget(remaining={self.remaining}, ordinary={self.ordinary_turns}, "
            f"jail={self.jail_turns})"
        )
