"""
Custom exception hierarchy for the occupancy simulator.

Every error here is fatal to the run it occurs in; the harness decides
whether to skip the run or abort.
"""


class SimulationError(Exception):
    """Base exception for all simulation errors."""


class EmptyDeckError(SimulationError):
    """A draw was attempted with both the draw and discard piles empty."""


class InvalidStrategyError(SimulationError, ValueError):
    """Unrecognised jail strategy."""


class InvalidCardEffectError(SimulationError):
    """A card has no recognised effect for its deck, or was misused."""


class BoardDataError(SimulationError):
    """Square or card definitions are missing or malformed."""


class DeckConservationError(SimulationError):
    """A deck no longer accounts for all of its cards."""
