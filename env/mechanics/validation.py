"""
Action validation.

Validation is pure: it reads the board, the tank and the previous turn's
recorded action, and never mutates anything. Whether the tank is alive is
the caller's concern for single actions; joint validation skips dead tanks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from ..core.actions import Action
from ..core.types import ActionType, ActionValidation, TankKey

if TYPE_CHECKING:
    from ..entities import Tank
    from ..world.world import FieldState


def validate_action(world: FieldState, tank: Tank, action: Action) -> ActionValidation:
    """
    Check a single tank's action against the current state.

    Rules:
    - INVALID is never valid
    - a tank that fired on the previous turn may not fire again
    - STAY and fire actions are otherwise always valid
    - a move needs an in-bounds, completely empty destination
    """
    if action.type == ActionType.INVALID:
        return ActionValidation.fail("INVALID_ACTION", f"{tank.label()} has no valid action")

    if action.is_shoot and world.previous_action(tank.key).is_shoot:
        return ActionValidation.fail(
            "CONSECUTIVE_FIRE",
            f"{tank.label()} fired last turn and cannot fire again",
        )

    if action.type in (ActionType.STAY, ActionType.SHOOT):
        return ActionValidation.success()

    if tank.pos is None:
        return ActionValidation.fail("NO_POSITION", f"{tank.label()} is not on the board")

    dest = action.direction.step(tank.pos)
    if not world.grid.in_bounds(dest):
        return ActionValidation.fail(
            "OUT_OF_BOUNDS",
            f"{tank.label()} cannot move {action.direction.name} off the board",
        )
    if not world.grid.cell(dest).is_empty:
        return ActionValidation.fail(
            "DEST_OCCUPIED",
            f"{tank.label()} cannot move into occupied cell {dest}",
        )
    return ActionValidation.success()


def action_is_valid(world: FieldState, tank: Tank, action: Action) -> bool:
    return validate_action(world, tank, action).valid


def validate_joint_action(
    world: FieldState, actions: Mapping[TankKey, Action]
) -> ActionValidation:
    """
    Validate one action per alive tank.

    Dead tanks' actions are ignored; an alive tank without an action counts
    as INVALID.
    """
    for tank in world.get_alive_tanks():
        result = validate_action(world, tank, actions.get(tank.key, Action.INVALID))
        if not result.valid:
            return result
    return ActionValidation.success()
