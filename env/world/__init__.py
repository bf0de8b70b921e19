"""World state: grid, cells and the full field state."""

from .cell import Cell
from .grid import Grid
from .world import FieldState, JointAction

__all__ = ["Cell", "Grid", "FieldState", "JointAction"]
