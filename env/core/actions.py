"""
Action definitions.

Actions are plain integers on the wire, so ``Action`` is an ``IntEnum``
whose values match what the judge sends and expects:

    INVALID = -2, STAY = -1,
    UP/RIGHT/DOWN/LEFT = 0..3 (move),
    UP_SHOOT/RIGHT_SHOOT/DOWN_SHOOT/LEFT_SHOOT = 4..7 (fire)
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from .types import ActionType, Direction


class Action(IntEnum):
    """A single tank's action for one turn."""

    INVALID = -2
    STAY = -1
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3
    UP_SHOOT = 4
    RIGHT_SHOOT = 5
    DOWN_SHOOT = 6
    LEFT_SHOOT = 7

    # ------------------------------------------------------------------#
    # Factories
    # ------------------------------------------------------------------#
    @classmethod
    def stay(cls) -> Action:
        return cls.STAY

    @classmethod
    def move(cls, direction: Direction) -> Action:
        return cls(int(direction))

    @classmethod
    def shoot(cls, direction: Direction) -> Action:
        return cls(int(direction) + 4)

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    @property
    def type(self) -> ActionType:
        if self is Action.INVALID:
            return ActionType.INVALID
        if self is Action.STAY:
            return ActionType.STAY
        if self.value <= 3:
            return ActionType.MOVE
        return ActionType.SHOOT

    @property
    def is_move(self) -> bool:
        return self.type == ActionType.MOVE

    @property
    def is_shoot(self) -> bool:
        return self.type == ActionType.SHOOT

    @property
    def direction(self) -> Optional[Direction]:
        """Direction of a move or fire action, None otherwise."""
        if self.value < 0:
            return None
        return Direction(self.value % 4)

    def is_opposite_of(self, other: Action) -> bool:
        """True when both actions carry a direction and those directions are opposite."""
        if self.value < 0 or other.value < 0:
            return False
        return (self.value + 2) % 4 == other.value % 4

    def __str__(self) -> str:
        return self.name
