"""
Grid - the 9x9 board of cells.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from ..core.constants import FIELD_HEIGHT, FIELD_WIDTH
from ..core.types import Direction, GridPos, Item
from .cell import Cell


class Grid:
    """
    Fixed-size board addressed by (x, y).

    Cells are stored row-major (``cells[y][x]``). Out-of-bounds reads raise
    ``IndexError``; callers check ``in_bounds`` first.
    """

    def __init__(self, width: int = FIELD_WIDTH, height: int = FIELD_HEIGHT):
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]

    def in_bounds(self, pos: GridPos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, pos: GridPos) -> Cell:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} is outside the {self.width}x{self.height} grid")
        x, y = pos
        return self.cells[y][x]

    def items_at(self, pos: GridPos) -> Item:
        return self.cell(pos).items

    def is_empty(self, pos: GridPos) -> bool:
        return self.in_bounds(pos) and self.cell(pos).is_empty

    def add(self, pos: GridPos, item: Item) -> None:
        self.cell(pos).add(item)

    def remove(self, pos: GridPos, item: Item) -> None:
        self.cell(pos).remove(item)

    def set(self, pos: GridPos, item: Item) -> None:
        self.cell(pos).set(item)

    def neighbors(self, pos: GridPos) -> Iterator[Tuple[Direction, GridPos]]:
        """Yield (direction, position) for in-bounds neighbours in direction order."""
        for direction in Direction:
            nxt = direction.step(pos)
            if self.in_bounds(nxt):
                yield direction, nxt

    def positions(self) -> Iterator[GridPos]:
        """Yield every position in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def index(self, pos: GridPos) -> int:
        """Flat row-major index of a position."""
        return pos[1] * self.width + pos[0]

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Exact, hashable copy of every cell's tags."""
        return tuple(tuple(cell.items.value for cell in row) for row in self.cells)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [list(row) for row in self.snapshot()],
        }

    def to_ascii(self) -> str:
        return "\n".join("".join(cell.symbol() for cell in row) for row in self.cells)
