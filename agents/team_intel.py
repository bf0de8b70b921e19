from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, TYPE_CHECKING

from env.core.types import GridPos, Side, TankKey
from env.entities import Tank
from env.world.grid import Grid

if TYPE_CHECKING:
    from env.world.world import FieldState


@dataclass(frozen=True)
class TeamIntel:
    """
    Per-side view of the field for agent decision-making.

    - friendlies / enemies: Tank objects in index order (dead ones included)
    - previous_positions: where each alive tank stood one turn ago
    """

    side: Side
    grid: Grid
    friendlies: List[Tank]
    enemies: List[Tank]
    previous_positions: Dict[TankKey, GridPos]

    @property
    def alive_friendlies(self) -> List[Tank]:
        return [t for t in self.friendlies if t.alive]

    @property
    def alive_enemies(self) -> List[Tank]:
        return [t for t in self.enemies if t.alive]

    def displacement(self, tank: Tank) -> tuple[int, int]:
        """Vector from the tank's previous position to its current one."""
        prev = self.previous_positions.get(tank.key, tank.pos)
        return (tank.pos[0] - prev[0], tank.pos[1] - prev[1])

    @classmethod
    def build(cls, world: "FieldState", side: Side) -> "TeamIntel":
        """
        Construct the view from the current world.

        A tank's previous position follows from the action recorded for it
        on the last turn: after a move it came from one step behind, after
        anything else it has not moved.
        """
        previous: Dict[TankKey, GridPos] = {}
        for tank in world.get_alive_tanks():
            last = world.previous_action(tank.key)
            if last.is_move:
                dx, dy = last.direction.delta
                previous[tank.key] = (tank.pos[0] - dx, tank.pos[1] - dy)
            else:
                previous[tank.key] = tank.pos

        return cls(
            side=side,
            grid=world.grid,
            friendlies=world.get_side_tanks(side),
            enemies=world.get_side_tanks(side.opponent),
            previous_positions=previous,
        )
