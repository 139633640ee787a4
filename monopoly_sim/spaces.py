"""
Board square definitions and well-known square names.
"""

from dataclasses import dataclass

BOARD_SIZE = 40
GO_POSITION = 0
JAIL_POSITION = 10
GO_TO_JAIL_POSITION = 30

RAILROAD_POSITIONS = (5, 15, 25, 35)
UTILITY_POSITIONS = (12, 28)

GO = "Go"
JAIL = "Jail"
COMMUNITY_CHEST = "Community Chest"
CHANCE = "Chance"
GO_TO_JAIL = "Go To Jail"

CARD_SQUARE_NAMES = frozenset({COMMUNITY_CHEST, CHANCE})


@dataclass
class BoardSquare:
    """One square of the board loop and how often it was landed on."""

    position: int
    name: str
    visit_count: int = 0

    def add_visit(self) -> None:
        """Increment the number of visits to this square by 1."""
        self.visit_count += 1

    @property
    def is_card_square(self) -> bool:
        return self.name in CARD_SQUARE_NAMES

    def __repr__(self) -> str:
        return f"BoardSquare(name='{self.name}', position={self.position}, visits={self.visit_count})"
