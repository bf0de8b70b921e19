from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.types import GridPos, Item, TankKey
from .base import Entity


@dataclass
class Tank(Entity):
    """
    A mobile unit. Identified by (side, index); its position is cleared when
    it is destroyed.
    """

    index: int = field(default=0, kw_only=True)

    def __post_init__(self):
        if self.index not in (0, 1):
            raise ValueError(f"Tank index must be 0 or 1: {self.index}")

    @property
    def item(self) -> Item:
        return Item.for_tank(self.side, self.index)

    @property
    def key(self) -> TankKey:
        return (self.side, self.index)

    def destroy(self) -> None:
        self.alive = False
        self.pos = None

    def place(self, pos: GridPos) -> None:
        self.alive = True
        self.pos = pos

    def label(self) -> str:
        return f"Tank{self.index}({self.side.name})"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["index"] = self.index
        return data
