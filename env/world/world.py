"""
FieldState - the complete mutable state of one game.

The state object is owned by whoever drives the game (the environment, a
judge session, a match runner) and is passed explicitly to every resolver
and agent. Resolvers mutate it in place.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.actions import Action
from ..core.constants import (
    BASE_POSITIONS,
    START_POSITIONS,
    STEEL_POSITIONS,
    TANKS_PER_SIDE,
)
from ..core.types import GridPos, Item, Side, TankKey
from ..entities import HomeBase, Tank
from ..mechanics.rollback import DisappearanceLog
from .grid import Grid

JointAction = Mapping[TankKey, Action]


class FieldState:
    """
    Board, entities, turn counter, action history and disappearance log.

    Attributes:
        grid: Cell contents
        tanks: (side, index) -> Tank
        bases: side -> HomeBase
        turn: Current turn number (starts at 1)
        history: history[t] maps every tank to the action it was given on
            turn t; history[0] is an all-STAY placeholder, so
            len(history) == turn at all times
        log: Disappearance log used for rollback
    """

    def __init__(self, bricks: Iterable[GridPos] = ()):
        self.grid = Grid()
        self.tanks: Dict[TankKey, Tank] = {}
        self.bases: Dict[Side, HomeBase] = {}
        self.turn = 1
        self.history: List[Dict[TankKey, Action]] = [
            {key: Action.STAY for key in self.tank_keys()}
        ]
        self.log = DisappearanceLog()

        for pos in bricks:
            self.grid.set(pos, Item.BRICK)

        for side in Side:
            for index in range(TANKS_PER_SIDE):
                tank = Tank(side, START_POSITIONS[side][index], index=index)
                self.tanks[tank.key] = tank
                self.grid.set(tank.pos, tank.item)
            base = HomeBase(side, BASE_POSITIONS[side])
            self.bases[side] = base
            self.grid.set(base.pos, base.item)

        for pos in STEEL_POSITIONS:
            self.grid.set(pos, Item.STEEL)

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    @staticmethod
    def tank_keys() -> List[TankKey]:
        return [(side, index) for side in Side for index in range(TANKS_PER_SIDE)]

    def get_tank(self, side: Side, index: int) -> Tank:
        return self.tanks[(side, index)]

    def get_side_tanks(self, side: Side, alive_only: bool = False) -> List[Tank]:
        tanks = [self.tanks[(side, index)] for index in range(TANKS_PER_SIDE)]
        if alive_only:
            tanks = [t for t in tanks if t.alive]
        return tanks

    def get_alive_tanks(self) -> List[Tank]:
        return [self.tanks[key] for key in self.tank_keys() if self.tanks[key].alive]

    def base_at(self, pos: GridPos) -> Optional[HomeBase]:
        for base in self.bases.values():
            if base.pos == pos:
                return base
        return None

    def previous_action(self, key: TankKey) -> Action:
        """Action the tank was given on the turn before the current one."""
        return self.history[self.turn - 1].get(key, Action.INVALID)

    # ------------------------------------------------------------------#
    # History bookkeeping
    # ------------------------------------------------------------------#
    def record_actions(self, actions: JointAction) -> None:
        """Store the actions of the turn about to be applied."""
        self.history.append(
            {key: actions.get(key, Action.INVALID) for key in self.tank_keys()}
        )

    def truncate_history(self) -> None:
        """Drop history entries for turns that have not been played."""
        del self.history[self.turn:]

    # ------------------------------------------------------------------#
    # Serialization / copies
    # ------------------------------------------------------------------#
    def clone(self) -> FieldState:
        return copy.deepcopy(self)

    def snapshot(self) -> Dict[str, Any]:
        """
        Exact value snapshot for equality checks.

        Two states with equal snapshots are indistinguishable to the engine.
        """
        return {
            "grid": self.grid.snapshot(),
            "tanks": {key: (t.alive, t.pos) for key, t in self.tanks.items()},
            "bases": {side: b.alive for side, b in self.bases.items()},
            "turn": self.turn,
            "history": [dict(entry) for entry in self.history],
            "log": self.log.snapshot(),
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the state."""
        return {
            "turn": self.turn,
            "grid": self.grid.to_dict(),
            "tanks": [self.tanks[key].to_dict() for key in self.tank_keys()],
            "bases": [self.bases[side].to_dict() for side in Side],
            "log_size": len(self.log),
        }

    def to_ascii(self) -> str:
        """Text rendering of the board plus a status line per side."""
        lines = [self.grid.to_ascii()]
        for side in Side:
            base = "alive" if self.bases[side].alive else "destroyed"
            tanks = ", ".join(
                f"tank{t.index} {'alive' if t.alive else 'destroyed'}"
                for t in self.get_side_tanks(side)
            )
            lines.append(f"{side.name}: base {base}, {tanks}")
        lines.append(f"turn {self.turn}")
        return "\n".join(lines)
