"""Core types, actions and rule constants."""

from .types import (
    ActionType,
    ActionValidation,
    Direction,
    GameResult,
    GridPos,
    Item,
    Side,
    TankKey,
)
from .actions import Action
from .constants import (
    BASE_POSITIONS,
    BASE_X,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    MAX_TURNS,
    START_POSITIONS,
    STEEL_POSITIONS,
    TANKS_PER_SIDE,
)

__all__ = [
    "Action",
    "ActionType",
    "ActionValidation",
    "Direction",
    "GameResult",
    "GridPos",
    "Item",
    "Side",
    "TankKey",
    "BASE_POSITIONS",
    "BASE_X",
    "FIELD_HEIGHT",
    "FIELD_WIDTH",
    "MAX_TURNS",
    "START_POSITIONS",
    "STEEL_POSITIONS",
    "TANKS_PER_SIDE",
]
