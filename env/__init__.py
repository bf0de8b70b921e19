"""
Tank Field Environment - a 9x9 simultaneous-turn tank combat rules engine.

Two sides each control two tanks and defend one base on a board of brick
(destructible) and steel (indestructible) terrain.

Quick Start:
    from env import FieldEnv, create_random_setup
    from env.core import Action, Direction, Side

    env = FieldEnv()
    state = env.reset(create_random_setup(seed=1))

    actions = {
        (Side.BLUE, 0): Action.move(Direction.DOWN),
        (Side.BLUE, 1): Action.stay(),
        (Side.RED, 0): Action.shoot(Direction.UP),
        (Side.RED, 1): Action.stay(),
    }
    state, done, info = env.step(actions)
    env.revert()
"""

__version__ = "1.0.0"

# Main environment interface
from .environment import FieldEnv, StepInfo

# Setup system
from .setup import (
    Setup,
    create_empty_setup,
    create_random_setup,
    decode_brick_masks,
    encode_brick_masks,
)

# Core types available at package level
from .core import (
    Action,
    ActionType,
    Direction,
    GameResult,
    GridPos,
    Item,
    Side,
)
from .world import FieldState

__all__ = [
    # Main interface
    "FieldEnv",
    "StepInfo",
    "FieldState",

    # Setup system
    "Setup",
    "create_empty_setup",
    "create_random_setup",
    "decode_brick_masks",
    "encode_brick_masks",

    # Core types
    "Action",
    "ActionType",
    "Direction",
    "GameResult",
    "GridPos",
    "Item",
    "Side",
]
