from __future__ import annotations

from dataclasses import dataclass

from ..core.types import Item
from .base import Entity


@dataclass
class HomeBase(Entity):
    """The stationary objective of a side. It never moves; it only dies."""

    @property
    def item(self) -> Item:
        return Item.BASE

    def label(self) -> str:
        return f"Base({self.side.name})"
