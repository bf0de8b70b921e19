from __future__ import annotations

from typing import Any, Dict, List, Optional

from agents import AgentSpec, PreparedAgent, create_agent_from_spec
from env import FieldEnv
from env.core.types import GameResult, Side
from env.setup import Setup
from env.world import FieldState
from infra.logger import get_logger

from game_frame import Frame

logger = get_logger(__name__)

DEFAULT_AGENTS = [
    AgentSpec(side=Side.BLUE, type="greedy"),
    AgentSpec(side=Side.RED, type="greedy"),
]


class GameRunner:
    """
    Step-by-step local match between the two agents named in a Setup.

    Use get_initial_frame() before any actions, then step() until done.
    Setups without agent specs play greedy against greedy.
    """

    def __init__(self, setup: Setup):
        self.setup = setup.clone()
        if not self.setup.agents:
            self.setup.agents = list(DEFAULT_AGENTS)

        self.env = FieldEnv()
        self._state = self.env.reset(self.setup)

        self._blue_agent = self._agent_from_setup(self.setup, Side.BLUE)
        self._red_agent = self._agent_from_setup(self.setup, Side.RED)

        self._done = False

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def state(self) -> Dict[str, Any]:
        return self._state

    @property
    def world(self) -> FieldState:
        return self._state["world"]

    @property
    def done(self) -> bool:
        return self._done

    @property
    def turn(self) -> int:
        """Current turn pulled directly from the world state."""
        return self.world.turn

    @property
    def result(self) -> GameResult:
        return self.env.result

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def get_initial_frame(self) -> Frame:
        return Frame(world=self.world.clone(), done=self._done)

    def step(self) -> Frame:
        """
        Execute one turn of the game and return a formatted frame.

        Raises:
            RuntimeError: If the game is already finished, or the agents
                produced a joint action the engine rejected
        """
        if self._done:
            raise RuntimeError("Game is already finished")

        world_before = self.world.clone()
        blue_actions, blue_meta = self._blue_agent.agent.get_actions(self._state)
        red_actions, red_meta = self._red_agent.agent.get_actions(self._state)

        merged_actions = {**blue_actions, **red_actions}
        self._state, self._done, info = self.env.step(merged_actions)
        if not info.applied:
            raise RuntimeError(f"Agents produced an invalid joint action: {info.validation.message}")

        if self._done:
            logger.info("Match finished at turn %d: %s", self.turn, self.result.name)

        return Frame(
            world=world_before,
            actions=merged_actions,
            action_metadata={"blue": blue_meta, "red": red_meta},
            step_info=info,
            done=self._done,
        )

    def run(self, *, include_history: bool = False) -> Frame | List[Frame]:
        """
        Run the match to completion.

        Returns the final frame, or the full frame history if include_history
        is True.
        """
        frames: List[Frame] = []
        while not self._done:
            frames.append(self.step())

        if include_history:
            return frames
        return frames[-1] if frames else self.get_final_frame()

    def revert(self) -> Optional[Frame]:
        """
        Step back one turn.

        Returns:
            Frame of the restored state, or None if already at turn 1
        """
        if not self.env.revert():
            return None
        self._done = self.env.is_game_over
        return Frame(world=self.world.clone(), done=self._done)

    def get_final_frame(self) -> Frame:
        """
        Return the current world state without actions for terminal view.
        """
        return Frame(world=self.world.clone(), done=self._done)

    # Helpers
    def _agent_from_setup(self, setup: Setup, side: Side) -> PreparedAgent:
        matches = [spec for spec in setup.agents or [] if spec.side == side]
        if not matches:
            raise ValueError(f"No AgentSpec found for side {side.name}")
        if len(matches) > 1:
            raise ValueError(f"Multiple AgentSpecs found for side {side.name}")
        return create_agent_from_spec(matches[0])
