"""
The 40-square board, its visit counters, and nearest railroad/utility lookup.
"""

from typing import Iterable, List, Sequence

from monopoly_sim.exceptions import BoardDataError
from monopoly_sim.spaces import (
    BOARD_SIZE,
    RAILROAD_POSITIONS,
    UTILITY_POSITIONS,
    BoardSquare,
)


def nearest_railroad(position: int, railroads: Sequence[int] = RAILROAD_POSITIONS) -> int:
    """Find the first railroad strictly ahead of position, wrapping past the last one."""
    ordered = sorted(railroads)
    for railroad in ordered:
        if railroad > position:
            return railroad
    return ordered[0]


def nearest_utility(position: int, utilities: Sequence[int] = UTILITY_POSITIONS) -> int:
    """The far utility when strictly between the two, otherwise the near one."""
    low, high = sorted(utilities)
    return high if low < position < high else low


class Board:
    """The board loop with one square per position."""

    def __init__(self, squares: Iterable[BoardSquare]):
        self.squares: List[BoardSquare] = self._validate(squares)

    @staticmethod
    def _validate(squares: Iterable[BoardSquare]) -> List[BoardSquare]:
        ordered = sorted(squares, key=lambda s: s.position)
        positions = [s.position for s in ordered]
        if positions != list(range(BOARD_SIZE)):
            raise BoardDataError(
                f"Board needs exactly one square for each position 0..{BOARD_SIZE - 1}, "
                f"got {len(positions)} squares"
            )
        # Counts belong to one run; never share squares across boards.
        return [BoardSquare(s.position, s.name) for s in ordered]

    def square(self, position: int) -> BoardSquare:
        """Get the square at the given position."""
        return self.squares[position]

    def name_at(self, position: int) -> str:
        return self.squares[position].name

    def is_card_square(self, position: int) -> bool:
        return self.squares[position].is_card_square

    def record_visit(self, position: int) -> None:
        self.squares[position].add_visit()

    def visit_counts(self) -> List[int]:
        return [s.visit_count for s in self.squares]

    def total_visits(self) -> int:
        return sum(s.visit_count for s in self.squares)

    def reset(self) -> None:
        """Zero every visit counter."""
        for s in self.squares:
            s.visit_count = 0

    def percentages(self, denominator: int) -> List[float]:
        """Visit counts as a percentage of denominator (usually the turn count)."""
        if denominator <= 0:
            raise ValueError("denominator must be positive")
        return [s.visit_count / denominator * 100 for s in self.squares]

    def __len__(self) -> int:
        return len(self.squares)
