"""
FieldEnv - Main environment interface.

This is the primary API of the rules engine. It builds a FieldState from a
Setup and applies joint actions one turn at a time, with exact rollback.

Usage:
    from env import FieldEnv, create_random_setup

    env = FieldEnv()
    state = env.reset(create_random_setup(seed=7))

    while not done:
        actions = {**blue_actions, **red_actions}  # (side, index) -> Action
        state, done, info = env.step(actions)

    print(env.result)

State Structure:
    {
        "world": FieldState  # Shared mutable state object
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from infra.logger import get_logger
from .core.actions import Action
from .core.types import ActionValidation, GameResult, Side, TankKey
from .mechanics import (
    CombatResolutionResult,
    CombatResolver,
    MovementResolutionResult,
    MovementResolver,
    RollbackResolver,
    VictoryConditions,
    VictoryResult,
    action_is_valid,
    validate_joint_action,
)
from .setup import Setup
from .world import FieldState

logger = get_logger(__name__)


@dataclass
class StepInfo:
    """
    Per-step metadata returned at the end of each step.

    ``applied`` is False when the joint action was rejected; in that case
    the world is untouched and movement/combat are empty.
    """

    applied: bool
    validation: ActionValidation
    movement: MovementResolutionResult
    combat: CombatResolutionResult
    victory: VictoryResult

    def to_dict(self) -> Dict[str, Any]:
        """Serialize step info to a plain dict."""
        return {
            "applied": self.applied,
            "validation": {
                "valid": self.validation.valid,
                "code": self.validation.code,
                "message": self.validation.message,
            },
            "movement": self.movement.to_dict(),
            "combat": self.combat.to_dict(),
            "victory": self.victory.to_dict(),
        }


class FieldEnv:
    """
    Tank field environment - simultaneous-turn rules engine.

    The environment manages:
    - Field state (board, tanks, bases, history, disappearance log)
    - Joint action validation
    - Move and fire resolution
    - Rollback to earlier turns
    - Victory conditions

    Attributes:
        world: Current field state
        setup: Setup the game was started from
    """

    def __init__(self):
        self.world: Optional[FieldState] = None
        self.setup: Optional[Setup] = None

        # Mechanics modules (stateless, can be reused)
        self._movement = MovementResolver()
        self._combat = CombatResolver()
        self._rollback = RollbackResolver()
        self._victory = VictoryConditions()

    def reset(self, setup: Setup | Dict[str, Any]) -> Dict[str, Any]:
        """
        Start a new game from a setup.

        Args:
            setup: Setup instance or dict from Setup.to_dict()

        Returns:
            Initial state (same structure as step())

        Raises:
            ValueError: If the setup dict is malformed
        """
        setup_obj = setup.clone() if isinstance(setup, Setup) else Setup.from_dict(setup)
        self.setup = setup_obj
        self.world = FieldState(bricks=setup_obj.brick_positions())
        return self._build_state()

    def step(
        self, actions: Mapping[TankKey, Action]
    ) -> Tuple[Dict[str, Any], bool, StepInfo]:
        """
        Apply one joint action and advance the turn.

        Game loop order:
        1. Validate every alive tank's action (reject the whole step if any fails)
        2. Record the actions in the history
        3. Movement
        4. Fire and destruction
        5. Advance the turn counter
        6. Check victory

        Args:
            actions: Map of (side, index) -> Action

        Returns:
            Tuple of (state, done, info)

        Raises:
            RuntimeError: If reset() hasn't been called
        """
        world = self._require_world()

        validation = validate_joint_action(world, actions)
        if not validation.valid:
            logger.debug("Turn %d rejected: %s", world.turn, validation.message)
            info = StepInfo(
                applied=False,
                validation=validation,
                movement=MovementResolutionResult(moves=[]),
                combat=CombatResolutionResult(shots=[], destroyed=[], death_logs=[]),
                victory=self._victory.check(world),
            )
            return self._build_state(), info.victory.is_game_over, info

        world.record_actions(actions)
        movement = self._movement.resolve_moves(world, actions)
        combat = self._combat.resolve_combat(world, actions)
        world.turn += 1

        victory = self._victory.check(world)
        if victory.is_game_over:
            logger.info("Game over at turn %d: %s (%s)", world.turn, victory.result.name, victory.reason)

        info = StepInfo(
            applied=True,
            validation=validation,
            movement=movement,
            combat=combat,
            victory=victory,
        )
        return self._build_state(), victory.is_game_over, info

    def apply(self, actions: Mapping[TankKey, Action]) -> bool:
        """Apply a joint action; return whether it was accepted."""
        _state, _done, info = self.step(actions)
        return info.applied

    def revert(self) -> bool:
        """
        Roll back the most recent turn.

        Returns:
            False if already at turn 1 (nothing changes)
        """
        world = self._require_world()
        reverted = self._rollback.revert(world)
        if reverted:
            logger.debug("Reverted to turn %d", world.turn)
        return reverted

    def action_is_valid(self, side: Side, index: int, action: Action) -> bool:
        world = self._require_world()
        return action_is_valid(world, world.get_tank(side, index), action)

    def _require_world(self) -> FieldState:
        if self.world is None:
            raise RuntimeError("Must call reset() before using the environment")
        return self.world

    def _build_state(self) -> Dict[str, Any]:
        return {"world": self.world}

    @property
    def result(self) -> GameResult:
        return self._victory.check(self._require_world()).result

    @property
    def is_game_over(self) -> bool:
        return self.world is not None and self.result != GameResult.NOT_FINISHED

    @property
    def winner(self) -> Optional[Side]:
        """Winner, or None for a draw or a game in progress."""
        return self.result.winner if self.world is not None else None
