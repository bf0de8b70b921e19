"""
Greedy agent: one-turn heuristic policy.

For each tank, in order:
1. Fire at an aligned enemy whose predicted cell our own fire already covers
2. At the attack cell, keep firing along the row towards the enemy base
3. Step along a safe shortest path to the attack cell
4. Otherwise shoot open a brick on a safe shortest path
5. Stay
"""

from typing import Any, Dict, Optional, Tuple

from env.core.actions import Action
from env.core.constants import BASE_X
from env.core.types import Direction, GridPos, Side, TankKey
from env.entities import Tank
from env.mechanics import action_is_valid
from env.world import FieldState
from infra.logger import get_logger
from ..base_agent import BaseAgent
from ..registry import register_agent
from .context import DecisionContext
from .threat_map import OWN_THREAT

logger = get_logger(__name__)

# Minimum score on an enemy's predicted cell before we shoot at it.
ATTACK_THRESHOLD = OWN_THREAT


def aim_direction(src: GridPos, dst: GridPos) -> Optional[Direction]:
    """Direction to fire from src to hit dst, None if they are not aligned."""
    if src == dst:
        return None
    if src[1] == dst[1]:
        return Direction.RIGHT if src[0] < dst[0] else Direction.LEFT
    if src[0] == dst[0]:
        return Direction.DOWN if src[1] < dst[1] else Direction.UP
    return None


@register_agent("greedy")
class GreedyAgent(BaseAgent):
    """
    Agent that picks a locally good action for each tank from a fresh
    DecisionContext (distances, attack targets, enemy predictions, threat).
    """

    def __init__(
        self,
        side: Side,
        name: str | None = None,
        **_: Any,
    ):
        """
        Initialize the greedy agent.

        Args:
            side: Side to control
            name: Optional agent name (default: "GreedyAgent")
        """
        super().__init__(side, name)

    def get_actions(
        self,
        state: Dict[str, Any],
        **kwargs: Any,
    ) -> tuple[Dict[TankKey, Action], Dict[str, Any]]:
        world: FieldState = state["world"]
        context = DecisionContext.build(world, self.side)

        actions: Dict[TankKey, Action] = {}
        reasons: Dict[int, str] = {}
        for tank in world.get_side_tanks(self.side, alive_only=True):
            action, reason = self.decide(context, tank)
            if not action_is_valid(world, tank, action):
                logger.debug("%s: %s (%s) rejected, staying", tank.label(), action.name, reason)
                action, reason = Action.STAY, "fallback"
            actions[tank.key] = action
            reasons[tank.index] = reason

        metadata = {
            "policy": "greedy",
            "reasons": reasons,
            "predictions": {
                f"{side.name}{index}": list(pos)
                for (side, index), pos in context.predictions.items()
            },
        }
        return actions, metadata

    def decide(self, context: DecisionContext, tank: Tank) -> Tuple[Action, str]:
        """Choose one tank's action and a short reason tag."""
        world = context.world
        can_fire = action_is_valid(world, tank, Action.shoot(Direction.UP))

        if can_fire:
            attack = self._attack(context, tank)
            if attack is not None:
                return attack, "attack"

        goal = context.goal_for(tank)
        if tank.pos == goal:
            direction = Direction.RIGHT if tank.pos[0] < BASE_X else Direction.LEFT
            return (Action.shoot(direction) if can_fire else Action.STAY), "siege"

        move = self._advance(context, tank, goal)
        if move is not None:
            return move, "advance"

        clearing = self._clear_path(context, tank, goal)
        if clearing is not None:
            return (clearing if can_fire else Action.STAY), "clear"

        return Action.STAY, "stay"

    def _attack(self, context: DecisionContext, tank: Tank) -> Optional[Action]:
        for _enemy, predicted in context.predicted_enemies():
            if context.threat.score(predicted) < ATTACK_THRESHOLD:
                continue
            direction = aim_direction(tank.pos, predicted)
            if direction is not None:
                return Action.shoot(direction)
        return None

    def _advance(self, context: DecisionContext, tank: Tank, goal: GridPos) -> Optional[Action]:
        grid = context.world.grid
        for direction, nxt in grid.neighbors(tank.pos):
            cell = grid.cell(nxt)
            if cell.has_steel or cell.has_brick:
                continue
            if not context.threat.is_safe(nxt):
                continue
            move = Action.move(direction)
            if not action_is_valid(context.world, tank, move):
                continue
            if context.oracle.on_shortest_path(tank.pos, nxt, goal):
                return move
        return None

    def _clear_path(self, context: DecisionContext, tank: Tank, goal: GridPos) -> Optional[Action]:
        grid = context.world.grid
        for direction, nxt in grid.neighbors(tank.pos):
            cell = grid.cell(nxt)
            if not cell.has_brick or not context.threat.is_safe(nxt):
                continue
            if context.oracle.on_shortest_path(tank.pos, nxt, goal):
                return Action.shoot(direction)
        return None
