"""Fixed rules of the game: board size, landmarks and start layout."""

from __future__ import annotations

from typing import Dict, Tuple

from .types import GridPos, Side

FIELD_WIDTH = 9
FIELD_HEIGHT = 9
TANKS_PER_SIDE = 2

# A game that is still undecided after this turn ends in a draw.
MAX_TURNS = 100

BASE_X = FIELD_WIDTH // 2

BASE_POSITIONS: Dict[Side, GridPos] = {
    Side.BLUE: (BASE_X, 0),
    Side.RED: (BASE_X, FIELD_HEIGHT - 1),
}

# Steel blocks shielding each base from the front.
STEEL_POSITIONS: Tuple[GridPos, ...] = (
    (BASE_X, 1),
    (BASE_X, FIELD_HEIGHT - 2),
)

START_POSITIONS: Dict[Side, Tuple[GridPos, GridPos]] = {
    Side.BLUE: ((BASE_X - 2, 0), (BASE_X + 2, 0)),
    Side.RED: ((BASE_X + 2, FIELD_HEIGHT - 1), (BASE_X - 2, FIELD_HEIGHT - 1)),
}

# Bits per brick mask word: three rows of nine cells.
ROWS_PER_MASK = 3
MASK_WORDS = FIELD_HEIGHT // ROWS_PER_MASK
