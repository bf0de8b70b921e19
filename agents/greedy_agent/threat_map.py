"""
Per-cell danger scores.

Enemy lines of fire (from their predicted cells) add ENEMY_THREAT, our own
lines of fire add OWN_THREAT. A line runs along each axis until it leaves
the board or reaches an occupied cell; the occupied cell is scored, steel is
not.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from env.core.types import Direction, GridPos
from env.world.grid import Grid

ENEMY_THREAT = 1
OWN_THREAT = 2

# Tunable policy: enemy-only coverage (1) and enemy plus one own line (3)
# are unsafe; 0, 2 and higher are not.
UNSAFE_SCORES = frozenset({ENEMY_THREAT, ENEMY_THREAT + OWN_THREAT})


class ThreatMap:
    """Danger scores for one board snapshot."""

    def __init__(
        self,
        grid: Grid,
        enemy_sources: Iterable[GridPos] = (),
        own_sources: Iterable[GridPos] = (),
    ):
        self.grid = grid
        self.scores = np.zeros((grid.height, grid.width), dtype=np.int32)
        for origin in enemy_sources:
            self.project(origin, ENEMY_THREAT)
        for origin in own_sources:
            self.project(origin, OWN_THREAT)

    def project(self, origin: GridPos, weight: int) -> None:
        """Add ``weight`` along the four lines of fire from ``origin``."""
        for direction in Direction:
            pos = direction.step(origin)
            while self.grid.in_bounds(pos):
                cell = self.grid.cell(pos)
                if cell.has_steel:
                    break
                self.scores[pos[1], pos[0]] += weight
                if not cell.is_empty:
                    break
                pos = direction.step(pos)

    def score(self, pos: GridPos) -> int:
        return int(self.scores[pos[1], pos[0]])

    def is_safe(self, pos: GridPos) -> bool:
        return self.score(pos) not in UNSAFE_SCORES
