from __future__ import annotations

from typing import Dict, List

from env.core.constants import BASE_POSITIONS, BASE_X
from env.core.types import GridPos, Side
from env.world.grid import Grid
from .distance_oracle import DistanceOracle

# Each brick in the firing lane costs a shot plus the turn waiting to fire again.
LANE_BRICK_WEIGHT = 2


class TargetSelector:
    """
    Picks the cell on the opponent's base row from which a tank can open
    fire on the base soonest.

    The cost of a column is the travel distance to it plus a penalty for
    every brick standing between it and the base along that row.
    """

    def __init__(self, grid: Grid, oracle: DistanceOracle):
        self.grid = grid
        self.oracle = oracle
        self._lane_bricks: Dict[Side, List[int]] = {
            side: self._count_lane_bricks(side) for side in Side
        }

    @staticmethod
    def target_row(side: Side) -> int:
        """Row of the base that ``side`` attacks."""
        return BASE_POSITIONS[side.opponent][1]

    def _count_lane_bricks(self, side: Side) -> List[int]:
        row = self.target_row(side)
        counts = []
        for column in range(self.grid.width):
            lo, hi = sorted((column, BASE_X))
            counts.append(sum(
                1 for x in range(lo + 1, hi) if self.grid.cell((x, row)).has_brick
            ))
        return counts

    def lane_bricks(self, side: Side, column: int) -> int:
        return self._lane_bricks[side][column]

    def column_cost(self, pos: GridPos, side: Side, column: int) -> int:
        target = (column, self.target_row(side))
        return self.oracle.distance(pos, target) + LANE_BRICK_WEIGHT * self.lane_bricks(side, column)

    def choose_target(self, pos: GridPos, side: Side) -> GridPos:
        """
        Cheapest attack cell for a tank of ``side`` standing at ``pos``.

        Columns are scanned left to right; the first minimum wins. The base
        column itself is skipped since a tank can never stand on the base.
        """
        row = self.target_row(side)
        best_column = None
        best_cost = None
        for column in range(self.grid.width):
            if column == BASE_X:
                continue
            cost = self.column_cost(pos, side, column)
            if best_cost is None or cost < best_cost:
                best_column, best_cost = column, cost
        return (best_column, row)
