from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.types import GridPos, Item, Side


@dataclass
class Entity(ABC):
    """
    Abstract base class for everything a side owns on the board.

    Entities belong to a side, sit on a cell while alive, and are removed
    from the board when destroyed. Only rollback brings them back.
    """

    side: Side
    pos: Optional[GridPos]
    alive: bool = True

    @property
    @abstractmethod
    def item(self) -> Item:
        """Tag this entity places on its cell."""

    def label(self) -> str:
        """
        Get a human-readable label for this entity.

        Returns:
            String like "Tank0(BLUE)" or "Base(RED)"
        """
        return f"{self.__class__.__name__}({self.side.name})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize entity to dictionary."""
        return {
            "type": self.__class__.__name__,
            "side": self.side.name,
            "pos": list(self.pos) if self.pos is not None else None,
            "alive": self.alive,
        }

    def __str__(self) -> str:
        status = "alive" if self.alive else "destroyed"
        return f"{self.label()} at {self.pos} [{status}]"
