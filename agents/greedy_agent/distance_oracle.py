"""
All-pairs movement cost over the 81 cells.

Entering a cell costs one turn, entering a brick cell costs two (one shot to
clear it, one move), and steel cannot be entered. Costs are relaxed with
Floyd-Warshall, one vectorised pass per intermediate cell.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from env.core.types import GridPos
from env.world.cell import Cell
from env.world.grid import Grid

# Stands in for "unreachable"; large enough that no real path reaches it
# and small enough that adding two of them cannot overflow int64.
UNREACHABLE = 10**6

BRICK_COST = 2
OPEN_COST = 1


def entry_cost(cell: Cell) -> Optional[int]:
    """Turns needed to step into ``cell`` from a neighbour, None for steel."""
    if cell.has_steel:
        return None
    if cell.has_brick:
        return BRICK_COST
    return OPEN_COST


class DistanceOracle:
    """Distance table for one board snapshot. Build once per turn, reuse everywhere."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.dist = self._compute(grid)

    @staticmethod
    def _compute(grid: Grid) -> np.ndarray:
        size = grid.width * grid.height
        dist = np.full((size, size), UNREACHABLE, dtype=np.int64)
        np.fill_diagonal(dist, 0)

        for pos in grid.positions():
            src = grid.index(pos)
            for _direction, nxt in grid.neighbors(pos):
                cost = entry_cost(grid.cell(nxt))
                if cost is not None:
                    dist[src, grid.index(nxt)] = cost

        for k in range(size):
            np.minimum(dist, dist[:, k:k + 1] + dist[k:k + 1, :], out=dist)
        np.minimum(dist, UNREACHABLE, out=dist)
        return dist

    def distance(self, src: GridPos, dst: GridPos) -> int:
        return int(self.dist[self.grid.index(src), self.grid.index(dst)])

    def is_reachable(self, src: GridPos, dst: GridPos) -> bool:
        return self.distance(src, dst) < UNREACHABLE

    def on_shortest_path(self, src: GridPos, via: GridPos, dst: GridPos) -> bool:
        """True when some shortest path from src to dst passes through via."""
        total = self.distance(src, dst)
        if total >= UNREACHABLE:
            return False
        return self.distance(src, via) + self.distance(via, dst) == total
