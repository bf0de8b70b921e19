from __future__ import annotations

from typing import Dict

from env.core.types import GridPos, TankKey
from env.entities import Tank
from env.world.grid import Grid
from ..team_intel import TeamIntel
from .distance_oracle import DistanceOracle
from .target_selector import TargetSelector


class MovementPredictor:
    """
    Guesses where each enemy tank will stand after this turn.

    First guess: it repeats its last displacement. If that cell is not free
    (which includes standing still), assume it heads for its own best attack
    cell and takes the first open neighbour on a shortest path there.
    """

    def __init__(self, grid: Grid, oracle: DistanceOracle, selector: TargetSelector):
        self.grid = grid
        self.oracle = oracle
        self.selector = selector

    def predict(self, tank: Tank, displacement: tuple[int, int]) -> GridPos:
        pos = tank.pos
        extrapolated = (pos[0] + displacement[0], pos[1] + displacement[1])
        if self.grid.is_empty(extrapolated):
            return extrapolated

        goal = self.selector.choose_target(pos, tank.side)
        for _direction, nxt in self.grid.neighbors(pos):
            cell = self.grid.cell(nxt)
            if cell.has_steel or cell.has_brick:
                continue
            if self.oracle.on_shortest_path(pos, nxt, goal):
                return nxt
        return pos

    def predict_all(self, intel: TeamIntel) -> Dict[TankKey, GridPos]:
        """Predictions for every alive enemy tank."""
        return {
            tank.key: self.predict(tank, intel.displacement(tank))
            for tank in intel.alive_enemies
        }
