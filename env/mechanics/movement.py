"""
MovementResolver - move phase of a turn.

Moves are validated against pre-step positions before this runs, so each
tank can be relocated independently; tanks entering the same empty cell
simply stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping

from ..core.actions import Action
from ..core.types import GridPos, TankKey

if TYPE_CHECKING:
    from ..world.world import FieldState


@dataclass
class MoveResult:
    """A single tank relocation."""

    tank: TankKey
    from_pos: GridPos
    to_pos: GridPos

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.tank[0].name,
            "index": self.tank[1],
            "from": list(self.from_pos),
            "to": list(self.to_pos),
        }


@dataclass
class MovementResolutionResult:
    """All moves applied during one turn."""

    moves: List[MoveResult]

    @property
    def movement_occurred(self) -> bool:
        return bool(self.moves)

    def to_dict(self) -> Dict[str, Any]:
        return {"moves": [m.to_dict() for m in self.moves]}


class MovementResolver:
    """Stateless resolver for move actions."""

    def resolve_moves(
        self, world: FieldState, actions: Mapping[TankKey, Action]
    ) -> MovementResolutionResult:
        """
        Relocate every alive tank that was given a move.

        Each departure is logged under the current turn so it can be undone.
        """
        moves: List[MoveResult] = []
        for tank in world.get_alive_tanks():
            action = actions.get(tank.key, Action.INVALID)
            if not action.is_move:
                continue

            old_pos = tank.pos
            new_pos = action.direction.step(old_pos)
            world.log.record(tank.item, world.turn, old_pos)

            world.grid.add(new_pos, tank.item)
            world.grid.remove(old_pos, tank.item)
            tank.pos = new_pos
            moves.append(MoveResult(tank.key, old_pos, new_pos))

        return MovementResolutionResult(moves=moves)
