"""
Game mechanics: validation, movement, fire, rollback and victory.

Resolvers are stateless; they operate on the FieldState passed to them.
"""

from .combat import CombatResolutionResult, CombatResolver, ShotResult
from .movement import MovementResolutionResult, MovementResolver, MoveResult
from .rollback import DisappearanceLog, LogEntry, RollbackResolver
from .validation import action_is_valid, validate_action, validate_joint_action
from .victory import VictoryConditions, VictoryResult

__all__ = [
    "CombatResolutionResult",
    "CombatResolver",
    "ShotResult",
    "MovementResolutionResult",
    "MovementResolver",
    "MoveResult",
    "DisappearanceLog",
    "LogEntry",
    "RollbackResolver",
    "action_is_valid",
    "validate_action",
    "validate_joint_action",
    "VictoryConditions",
    "VictoryResult",
]
