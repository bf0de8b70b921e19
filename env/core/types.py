"""
Core type definitions shared by the engine and the agents.

Everything on the board is described by a small closed vocabulary:
sides, directions, entity tags (``Item``) and game results.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, IntEnum
from typing import Tuple

# (x, y) with the origin in the top-left corner, y growing downwards.
GridPos = Tuple[int, int]

# (side, tank index) identifying a single tank.
TankKey = Tuple["Side", int]


class Side(IntEnum):
    """The two competing players."""

    BLUE = 0
    RED = 1

    @property
    def opponent(self) -> Side:
        return Side(1 - self.value)


class Direction(IntEnum):
    """Axis directions, in the fixed scan order used everywhere."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """Return (dx, dy) for this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return Direction((self.value + 2) % 4)

    def step(self, pos: GridPos) -> GridPos:
        """Return the neighbouring position one cell away in this direction."""
        dx, dy = self.delta
        return (pos[0] + dx, pos[1] + dy)


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class ActionType(Enum):
    """Coarse classification of an action."""

    INVALID = "invalid"
    STAY = "stay"
    MOVE = "move"
    SHOOT = "shoot"


class Item(Flag):
    """
    Entity tags that can occupy a cell.

    A cell holds a combination of these flags. Terrain tags never share a
    cell with anything else, but several tank tags may stack on one cell.
    """

    NONE = 0
    BRICK = 1
    STEEL = 2
    BASE = 4
    BLUE0 = 8
    BLUE1 = 16
    RED0 = 32
    RED1 = 64

    @property
    def is_tank(self) -> bool:
        return self in TANK_ITEMS_ORDERED

    @classmethod
    def for_tank(cls, side: Side, index: int) -> Item:
        """Return the tag carried by a given tank."""
        return TANK_ITEMS[side][index]

    def tank_key(self) -> TankKey:
        """Return (side, index) for a single tank tag."""
        for side, items in TANK_ITEMS.items():
            for index, item in enumerate(items):
                if item == self:
                    return side, index
        raise ValueError(f"{self!r} is not a single tank tag")


TANK_ITEMS = {
    Side.BLUE: (Item.BLUE0, Item.BLUE1),
    Side.RED: (Item.RED0, Item.RED1),
}

TANK_ITEMS_ORDERED = (Item.BLUE0, Item.BLUE1, Item.RED0, Item.RED1)

# Every single tag, in ascending flag order.
ALL_ITEMS = (Item.BRICK, Item.STEEL, Item.BASE) + TANK_ITEMS_ORDERED


class GameResult(IntEnum):
    """Outcome of the game; the winning values match the side values."""

    NOT_FINISHED = -2
    DRAW = -1
    BLUE_WINS = 0
    RED_WINS = 1

    @classmethod
    def win_for(cls, side: Side) -> GameResult:
        return cls(side.value)

    @property
    def winner(self) -> Side | None:
        if self in (GameResult.BLUE_WINS, GameResult.RED_WINS):
            return Side(self.value)
        return None


@dataclass(frozen=True)
class ActionValidation:
    """
    Result of validating an action.

    Attributes:
        valid: Whether the action may be applied
        code: Short machine-readable reason (e.g. "DEST_OCCUPIED")
        message: Human-readable explanation
    """

    valid: bool
    code: str = "OK"
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> ActionValidation:
        return cls(True, "OK", message)

    @classmethod
    def fail(cls, code: str, message: str) -> ActionValidation:
        return cls(False, code, message)

    def __bool__(self) -> bool:
        return self.valid
