"""
Cell contents.

A cell is a set of ``Item`` tags. Terrain (brick, steel) and bases stand
alone, while any number of tanks may share a cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.types import ALL_ITEMS, TANK_ITEMS_ORDERED, Item


@dataclass
class Cell:
    """Mutable tag set for a single board position."""

    items: Item = Item.NONE

    @property
    def is_empty(self) -> bool:
        return self.items == Item.NONE

    @property
    def has_brick(self) -> bool:
        return bool(self.items & Item.BRICK)

    @property
    def has_steel(self) -> bool:
        return bool(self.items & Item.STEEL)

    @property
    def tank_items(self) -> List[Item]:
        """Tank tags present on this cell, in flag order."""
        return [item for item in TANK_ITEMS_ORDERED if self.items & item]

    @property
    def has_tank(self) -> bool:
        return bool(self.tank_items)

    @property
    def is_stacked(self) -> bool:
        """More than one tag shares this cell."""
        return len(self.tags()) > 1

    def tags(self) -> List[Item]:
        """Every single tag on this cell, in flag order."""
        return [item for item in ALL_ITEMS if self.items & item]

    def add(self, item: Item) -> None:
        self.items |= item

    def remove(self, item: Item) -> None:
        self.items &= ~item

    def set(self, item: Item) -> None:
        self.items = item

    def symbol(self) -> str:
        """Single-character glyph used by the text board."""
        tags = self.tags()
        if not tags:
            return "."
        if len(tags) > 1:
            return "@"
        return _SYMBOLS[tags[0]]


_SYMBOLS = {
    Item.BRICK: "#",
    Item.STEEL: "%",
    Item.BASE: "*",
    Item.BLUE0: "b",
    Item.BLUE1: "B",
    Item.RED0: "r",
    Item.RED1: "R",
}
