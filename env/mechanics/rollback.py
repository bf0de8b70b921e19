"""
Disappearance log and turn rollback.

Every entity that leaves a cell (a tank moving away, a brick, base or tank
being destroyed) is recorded with the turn it happened on. Reverting a turn
undoes exactly that turn's entries, newest first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterator, List, Tuple

from ..core.types import GridPos, Item

if TYPE_CHECKING:
    from ..world.world import FieldState


@dataclass(frozen=True, order=True)
class LogEntry:
    """
    One entity leaving one cell.

    Ordering is (pos, item, turn), which is the deterministic destruction
    order used by combat resolution.
    """

    pos: GridPos
    item_value: int
    turn: int

    @property
    def item(self) -> Item:
        return Item(self.item_value)

    @classmethod
    def create(cls, item: Item, turn: int, pos: GridPos) -> LogEntry:
        return cls(pos=pos, item_value=item.value, turn=turn)

    def to_dict(self) -> dict:
        return {"item": self.item.name, "turn": self.turn, "pos": list(self.pos)}


class DisappearanceLog:
    """
    Ordered log of disappearances with a per-turn start index.

    Entries are only ever appended for the turn being applied, so each
    turn's entries form one contiguous block at the tail of the list while
    that turn is the latest one.
    """

    def __init__(self):
        self._entries: List[LogEntry] = []
        self._turn_starts: Dict[int, int] = {}

    def begin_turn(self, turn: int) -> None:
        """Mark where the entries of ``turn`` start."""
        self._turn_starts[turn] = len(self._entries)

    def record(self, item: Item, turn: int, pos: GridPos) -> LogEntry:
        if turn not in self._turn_starts:
            self.begin_turn(turn)
        entry = LogEntry.create(item, turn, pos)
        self._entries.append(entry)
        return entry

    def pop_turn(self, turn: int) -> List[LogEntry]:
        """
        Remove and return the entries of ``turn``, newest first.

        Returns an empty list if nothing was logged for that turn.
        """
        start = self._turn_starts.pop(turn, len(self._entries))
        popped = self._entries[start:]
        del self._entries[start:]
        popped.reverse()
        return popped

    def snapshot(self) -> Tuple[Tuple[LogEntry, ...], Tuple[Tuple[int, int], ...]]:
        return tuple(self._entries), tuple(sorted(self._turn_starts.items()))

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class RollbackResolver:
    """Undo the most recent turn of a FieldState in place."""

    def revert(self, world: FieldState) -> bool:
        """
        Step the world back by one turn.

        Returns:
            False (and leaves the world untouched) when already at turn 1
        """
        if world.turn == 1:
            return False

        world.turn -= 1
        for entry in world.log.pop_turn(world.turn):
            self._undo(world, entry)
        world.truncate_history()
        return True

    def _undo(self, world: FieldState, entry: LogEntry) -> None:
        item = entry.item
        if item == Item.BASE:
            base = world.base_at(entry.pos)
            base.alive = True
            world.grid.set(entry.pos, Item.BASE)
        elif item == Item.BRICK:
            world.grid.set(entry.pos, Item.BRICK)
        elif item.is_tank:
            tank = world.tanks[item.tank_key()]
            if tank.alive:
                world.grid.remove(tank.pos, item)
            tank.place(entry.pos)
            world.grid.add(entry.pos, item)
