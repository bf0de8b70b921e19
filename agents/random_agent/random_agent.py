"""
Random agent implementation for testing and baseline comparison.

This agent makes random valid decisions for all its tanks.
"""

import random
from typing import Any, Dict, Optional

from env.core.actions import Action
from env.core.types import Side, TankKey
from env.mechanics import action_is_valid
from env.world import FieldState
from ..base_agent import BaseAgent
from ..registry import register_agent


@register_agent("random")
class RandomAgent(BaseAgent):
    """
    Agent that takes random actions.

    Decision process:
    - For each alive tank, sample uniformly from the actions the engine
      would accept right now.

    This serves as a baseline for comparing the greedy agent.
    """

    def __init__(
        self,
        side: Side,
        name: str = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Initialize random agent.

        Args:
            side: Side to control
            name: Agent name (default: "RandomAgent")
            seed: Random seed for reproducibility (None = random)
        """
        super().__init__(side, name)
        self.rng = random.Random(seed)

    def get_actions(
        self,
        state: Dict[str, Any],
        **kwargs: Any,
    ) -> tuple[Dict[TankKey, Action], Dict[str, Any]]:
        world: FieldState = state["world"]
        actions: Dict[TankKey, Action] = {}

        for tank in world.get_side_tanks(self.side, alive_only=True):
            allowed = [
                action for action in Action
                if action is not Action.INVALID and action_is_valid(world, tank, action)
            ]
            actions[tank.key] = self.rng.choice(allowed)

        metadata = {
            "policy": "random",
            "actions_count": len(actions),
        }
        return actions, metadata
