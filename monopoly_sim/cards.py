"""
Chance and Community Chest card system.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from monopoly_sim.dice import RandomSource
from monopoly_sim.exceptions import (
    BoardDataError,
    DeckConservationError,
    EmptyDeckError,
    InvalidCardEffectError,
)

logger = logging.getLogger(__name__)

JAIL_CARD_NAME = "Get Out of Jail Free"


class DeckKind(str, Enum):
    """The two card decks."""

    COMMUNITY_CHEST = "Community Chest"
    CHANCE = "Chance"


class CardEffect(Enum):
    """Movement effects a card can have."""

    ADVANCE_TO = "advance_to"
    NEAREST_RAILROAD = "nearest_railroad"
    NEAREST_UTILITY = "nearest_utility"
    GO_BACK_THREE = "go_back_three"
    GO_TO_JAIL = "go_to_jail"
    GET_OUT_OF_JAIL = "get_out_of_jail"


# Card ids are deck-scoped; only cards that move the token appear here.
CARD_EFFECTS: Dict[DeckKind, Dict[int, CardEffect]] = {
    DeckKind.COMMUNITY_CHEST: {
        1: CardEffect.ADVANCE_TO,  # Go
        5: CardEffect.GET_OUT_OF_JAIL,
        6: CardEffect.GO_TO_JAIL,
    },
    DeckKind.CHANCE: {
        1: CardEffect.ADVANCE_TO,  # Boardwalk
        2: CardEffect.ADVANCE_TO,  # Go
        3: CardEffect.ADVANCE_TO,  # Illinois Ave
        4: CardEffect.ADVANCE_TO,  # St. Charles Place
        5: CardEffect.NEAREST_RAILROAD,
        6: CardEffect.NEAREST_RAILROAD,
        7: CardEffect.NEAREST_UTILITY,
        9: CardEffect.GET_OUT_OF_JAIL,
        10: CardEffect.GO_BACK_THREE,
        11: CardEffect.GO_TO_JAIL,
        14: CardEffect.ADVANCE_TO,  # Reading Railroad
    },
}


@dataclass(frozen=True)
class Card:
    """Represents a Chance or Community Chest card."""

    id: int
    causes_movement: bool = False
    destination_name: str = ""
    destination_position: Optional[int] = None

    @property
    def is_jail_card(self) -> bool:
        return self.destination_name == JAIL_CARD_NAME

    def __repr__(self) -> str:
        return f"Card(id={self.id}, to='{self.destination_name}')"


def effect_for(kind: DeckKind, card: Card) -> Optional[CardEffect]:
    """
    Look up the movement effect of a card.

    Returns None for cards that do not move the token. A moving card whose
    id has no entry in the effect table is a data error.
    """
    if not card.causes_movement:
        return None
    try:
        return CARD_EFFECTS[kind][card.id]
    except KeyError:
        raise InvalidCardEffectError(
            f"{kind.value} card {card.id} ('{card.destination_name}') has no known effect"
        ) from None


def validate_card_set(kind: DeckKind, cards: Iterable[Card]) -> List[Card]:
    """Check a card set before it is turned into a deck."""
    cards = list(cards)
    if not cards:
        raise BoardDataError(f"{kind.value} card set is empty")

    ids = [c.id for c in cards]
    if len(set(ids)) != len(ids):
        raise BoardDataError(f"{kind.value} card set has duplicate ids")

    jail_cards = [c for c in cards if c.is_jail_card]
    if len(jail_cards) != 1:
        raise BoardDataError(
            f"{kind.value} card set must have exactly one '{JAIL_CARD_NAME}' card, "
            f"found {len(jail_cards)}"
        )

    for card in cards:
        effect = effect_for(kind, card)
        if effect == CardEffect.ADVANCE_TO and card.destination_position is None:
            raise BoardDataError(f"{kind.value} card {card.id} advances to no position")
        if card.is_jail_card and effect != CardEffect.GET_OUT_OF_JAIL:
            raise InvalidCardEffectError(
                f"{kind.value} card {card.id} is named '{JAIL_CARD_NAME}' but is not the jail card"
            )
    return cards


class CardDeck:
    """
    A deck with a draw pile and a discard pile.

    The last element of each pile is its top. The jail card leaves both piles
    while a player holds it, so draw pile + discard pile + held cards always
    equals the full card set.
    """

    def __init__(self, kind: DeckKind, cards: Iterable[Card], rng: RandomSource):
        self.kind = kind
        self.rng = rng
        self.draw_pile: List[Card] = validate_card_set(kind, cards)
        self.discard_pile: List[Card] = []
        self.held: List[Card] = []
        self.total_cards = len(self.draw_pile)
        self.reshuffles = 0
        self.rng.shuffle(self.draw_pile)

    def draw(self) -> Card:
        """
        Draw the top card of the deck.
        If the draw pile is empty, shuffle the discard pile back in first.
        """
        if not self.draw_pile:
            self._reshuffle()

        card = self.draw_pile.pop()
        if card.is_jail_card:
            self.held.append(card)
        else:
            self.discard_pile.append(card)
        return card

    def _reshuffle(self) -> None:
        if not self.discard_pile:
            raise EmptyDeckError(f"No {self.kind.value} cards left to draw")

        self.draw_pile = self.discard_pile
        self.discard_pile = []
        self.rng.shuffle(self.draw_pile)
        self.reshuffles += 1
        logger.debug(f"Reshuffled {len(self.draw_pile)} {self.kind.value} cards")

    def return_jail_card(self, card: Card) -> None:
        """Return a held jail card to the discard pile."""
        if card not in self.held:
            raise InvalidCardEffectError(
                f"{card!r} is not a held {self.kind.value} card"
            )
        self.held.remove(card)
        self.discard_pile.append(card)

    def check_conservation(self) -> None:
        in_circulation = len(self.draw_pile) + len(self.discard_pile) + len(self.held)
        if in_circulation != self.total_cards:
            raise DeckConservationError(
                f"{self.kind.value} deck lost cards: {in_circulation} of {self.total_cards}"
            )

    def __len__(self) -> int:
        return len(self.draw_pile)

    def __repr__(self) -> str:
        return (
            f"CardDeck({self.kind.value}, draw={len(self.draw_pile)}, "
            f"discard={len(self.discard_pile)}, held={len(self.held)})"
        )
