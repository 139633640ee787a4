"""
Load board squares and card sets from CSV files.

The bundled files live in ``monopoly_sim/resources``; a different directory
with the same three files can be passed instead.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

import pandas as pd

from monopoly_sim.cards import Card, DeckKind
from monopoly_sim.exceptions import BoardDataError
from monopoly_sim.spaces import BoardSquare

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"

PROPERTIES_FILE = "properties.csv"
CARD_FILES = {
    DeckKind.CHANCE: "chanceCards.csv",
    DeckKind.COMMUNITY_CHEST: "communityChestCards.csv",
}

PathLike = Union[str, Path]


def _read_csv(path: Path, columns: Iterable[str]) -> pd.DataFrame:
    """Read a CSV and check it has the expected columns."""
    if not path.is_file():
        raise BoardDataError(f"Data file not found: {path}")
    try:
        df = pd.read_csv(
            path,
            skipinitialspace=True,
            true_values=["true", "True", "TRUE"],
            false_values=["false", "False", "FALSE"],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise BoardDataError(f"Cannot read {path}: {e}") from e

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise BoardDataError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df


def _resolve_dir(data_dir: Optional[PathLike]) -> Path:
    return Path(data_dir) if data_dir is not None else RESOURCES_DIR


@lru_cache(maxsize=8)
def _load_squares(data_dir: Path) -> Tuple[Tuple[int, str], ...]:
    df = _read_csv(data_dir / PROPERTIES_FILE, ["name", "position"])
    if df["position"].isna().any() or df["name"].isna().any():
        raise BoardDataError(f"{PROPERTIES_FILE} has blank names or positions")
    logger.debug(f"Loaded {len(df)} squares from {data_dir}")
    return tuple((int(row.position), str(row.name).strip()) for row in df.itertuples(index=False))


def load_squares(data_dir: Optional[PathLike] = None) -> list:
    """Board squares ordered by position, with zero visits."""
    rows = _load_squares(_resolve_dir(data_dir))
    return [BoardSquare(position, name) for position, name in sorted(rows)]


def _parse_position(value) -> Optional[int]:
    if pd.isna(value):
        return None
    return int(value)


@lru_cache(maxsize=16)
def _load_card_set(kind: DeckKind, data_dir: Path) -> Tuple[Card, ...]:
    df = _read_csv(
        data_dir / CARD_FILES[kind],
        ["id", "moves", "moves_to_name", "moves_to_position"],
    )
    df["moves_to_name"] = df["moves_to_name"].fillna("").astype(str).str.strip()

    cards = []
    for row in df.itertuples(index=False):
        moves = str(row.moves).strip().lower()
        if moves not in ("true", "false"):
            raise BoardDataError(f"{kind.value} card {row.id}: moves must be true or false")
        try:
            cards.append(
                Card(
                    id=int(row.id),
                    causes_movement=moves == "true",
                    destination_name=row.moves_to_name,
                    destination_position=_parse_position(row.moves_to_position),
                )
            )
        except (TypeError, ValueError) as e:
            raise BoardDataError(f"Bad {kind.value} card row {row}: {e}") from e
    logger.debug(f"Loaded {len(cards)} {kind.value} cards from {data_dir}")
    return tuple(cards)


def load_card_set(kind: DeckKind, data_dir: Optional[PathLike] = None) -> list:
    """The fixed card set for one deck kind."""
    return list(_load_card_set(kind, _resolve_dir(data_dir)))


def load_card_sets(data_dir: Optional[PathLike] = None) -> Dict[DeckKind, list]:
    """Card sets for both decks."""
    return {kind: load_card_set(kind, data_dir) for kind in DeckKind}
