"""
CombatResolver - fire phase of a turn.

This module handles:
- Tracing each shot along its row or column from the shooter's
  (already moved) position
- Opposite-fire cancellation between two lone tanks shooting at each other
- Collecting hits so a cell struck by several shots is destroyed once
- Applying destructions in a deterministic order and logging them
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Set

from ..core.actions import Action
from ..core.types import GridPos, Item, TankKey
from .rollback import LogEntry

if TYPE_CHECKING:
    from ..entities import Tank
    from ..world.world import FieldState


@dataclass
class ShotResult:
    """
    Result of tracing a single shot.

    Attributes:
        shooter: (side, index) of the tank that fired
        action: The fire action
        hit_pos: First non-empty cell on the ray (None if the ray left the board)
        cancelled: True if the shot was voided by opposite fire
        log: Human-readable log message
    """

    shooter: TankKey
    action: Action
    hit_pos: Optional[GridPos]
    cancelled: bool
    log: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.shooter[0].name,
            "index": self.shooter[1],
            "action": self.action.name,
            "hit_pos": list(self.hit_pos) if self.hit_pos is not None else None,
            "cancelled": self.cancelled,
            "log": self.log,
        }


@dataclass
class CombatResolutionResult:
    """
    Complete result of resolving all fire for a turn.

    Attributes:
        shots: Results from all fire actions
        destroyed: Log entries of everything removed this turn, in order
        death_logs: Human-readable destruction messages
    """

    shots: List[ShotResult]
    destroyed: List[LogEntry]
    death_logs: List[str]

    @property
    def combat_occurred(self) -> bool:
        return bool(self.shots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shots": [s.to_dict() for s in self.shots],
            "destroyed": [e.to_dict() for e in self.destroyed],
            "death_logs": self.death_logs,
        }


class CombatResolver:
    """
    Stateless resolver for fire actions.

    All shots are traced against the board as it stands after the move
    phase and before any destruction, so fire is simultaneous.
    """

    def resolve_combat(
        self, world: FieldState, actions: Mapping[TankKey, Action]
    ) -> CombatResolutionResult:
        """
        Resolve all fire actions for a turn, including destruction.

        Args:
            world: Current field state (modified in-place)
            actions: Map of (side, index) -> action

        Returns:
            CombatResolutionResult with all outcomes
        """
        shots: List[ShotResult] = []
        marked: Set[LogEntry] = set()

        for tank in world.get_alive_tanks():
            action = actions.get(tank.key, Action.INVALID)
            if not action.is_shoot:
                continue
            result, hits = self.trace_shot(world, tank, action, actions)
            shots.append(result)
            marked.update(hits)

        destroyed, death_logs = self.apply_destruction(world, marked)
        return CombatResolutionResult(shots=shots, destroyed=destroyed, death_logs=death_logs)

    def trace_shot(
        self,
        world: FieldState,
        shooter: Tank,
        action: Action,
        actions: Mapping[TankKey, Action],
    ) -> tuple[ShotResult, List[LogEntry]]:
        """
        Follow one shot until it leaves the board or hits something.

        Returns:
            (shot result, tags marked for destruction)
        """
        grid = world.grid
        shooter_stacked = grid.cell(shooter.pos).is_stacked
        pos = shooter.pos

        while True:
            pos = action.direction.step(pos)
            if not grid.in_bounds(pos):
                return ShotResult(shooter.key, action, None, False,
                                  f"{shooter.label()} fires {action.direction.name}: no hit"), []

            cell = grid.cell(pos)
            if cell.is_empty:
                continue

            if cell.has_tank and not shooter_stacked and not cell.is_stacked:
                target_key = cell.tank_items[0].tank_key()
                their_action = actions.get(target_key, Action.INVALID)
                if their_action.is_shoot and action.is_opposite_of(their_action):
                    return ShotResult(
                        shooter.key, action, pos, True,
                        f"{shooter.label()} fires {action.direction.name}: cancelled by opposite fire at {pos}",
                    ), []

            hits = [LogEntry.create(item, world.turn, pos) for item in cell.tags()]
            names = ", ".join(item.name for item in cell.tags())
            return ShotResult(shooter.key, action, pos, False,
                              f"{shooter.label()} fires {action.direction.name}: hits {names} at {pos}"), hits

    def apply_destruction(
        self, world: FieldState, marked: Set[LogEntry]
    ) -> tuple[List[LogEntry], List[str]]:
        """
        Remove every marked tag, sorted by (x, y, tag).

        Steel is immune and not logged.
        """
        destroyed: List[LogEntry] = []
        logs: List[str] = []

        for entry in sorted(marked):
            item = entry.item
            if item == Item.STEEL:
                continue
            if item == Item.BASE:
                base = world.base_at(entry.pos)
                base.alive = False
                logs.append(f"{base.label()} was destroyed!")
            elif item.is_tank:
                tank = world.tanks[item.tank_key()]
                tank.destroy()
                logs.append(f"{tank.label()} was destroyed at {entry.pos}!")
            else:
                logs.append(f"Brick at {entry.pos} was destroyed")

            world.grid.remove(entry.pos, item)
            world.log.record(item, entry.turn, entry.pos)
            destroyed.append(entry)

        return destroyed, logs
