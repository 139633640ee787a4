"""
Monopoly Occupancy Simulator

Monte Carlo estimate of how often each square of the board is landed on,
under two jail-release strategies.
"""

from .board import Board
from .cards import Card, CardDeck, DeckKind
from .config import JailStrategy, SimulationConfig
from .engine import SimulationResult, TurnEngine, run_simulation
from .player import BoardState, TurnBudget

__all__ = [
    "Board",
    "BoardState",
    "Card",
    "CardDeck",
    "DeckKind",
    "JailStrategy",
    "SimulationConfig",
    "SimulationResult",
    "TurnBudget",
    "TurnEngine",
    "run_simulation",
]
