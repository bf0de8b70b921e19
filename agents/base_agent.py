"""
Base agent interface for the Tank Field Environment.

All agents must implement this interface to interact with the environment.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from env.core.actions import Action
from env.core.constants import TANKS_PER_SIDE
from env.core.types import Side, TankKey


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    Agents observe the field state and produce one action per alive tank of
    their side.

    Subclasses must implement:
    - get_actions(): Produce actions for all controlled tanks

    Attributes:
        side: The side this agent controls (BLUE or RED)
        name: Agent name for logging/identification
    """

    def __init__(self, side: Side, name: str = None):
        """
        Initialize the agent.

        Args:
            side: Side this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.side = Side(side)
        self.name = name or self.__class__.__name__

    @abstractmethod
    def get_actions(
        self,
        state: Dict[str, Any],
        **kwargs: Any,
    ) -> tuple[Dict[TankKey, Action], Dict[str, Any]]:
        """
        Get actions for all controlled tanks.

        This is called once per turn, after every earlier turn has been
        applied to the world.

        State structure:
            {
                "world": FieldState,
            }

        Returns:
            Tuple of:
                - Dict mapping (side, index) to Action for each alive tank
                - Metadata dict (reasons/debug info)

        Notes:
            - Must return actions for ALL alive tanks on your side
            - Dead tanks should not have actions
            - Never return Action.INVALID; use Action.stay() instead
        """

    def ordered_response(self, actions: Dict[TankKey, Action]) -> Tuple[Action, ...]:
        """Actions ordered by tank index, STAY for tanks without one."""
        return tuple(
            actions.get((self.side, index), Action.STAY) for index in range(TANKS_PER_SIDE)
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.side.name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(side={self.side.name}, name='{self.name}')"
