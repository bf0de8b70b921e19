"""
One bot's view of a judged game.

A BotSession turns judge messages into FieldEnv calls and asks its agent for
the next response. It works the same whether the host restarts the process
every turn (each message is a full history, replayed from scratch) or keeps
it running (each later message is just the opponent's newest actions, applied
against the response we submitted last).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from agents import AgentSpec, BaseAgent, create_agent_from_spec
from env import FieldEnv, Setup
from env.core.actions import Action
from env.core.types import Side, TankKey
from env.world import FieldState
from infra.logger import get_logger
from .messages import JudgeInput, JudgeMessage, JudgeProtocolError, JudgeResponse, SetupRequest

logger = get_logger(__name__)


def joint_action(
    my_side: Side,
    own: Sequence[Action],
    opponent: Sequence[Action],
) -> Dict[TankKey, Action]:
    """Combine both sides' ordered action pairs into one joint action."""
    actions: Dict[TankKey, Action] = {}
    for side, pair in ((my_side, own), (my_side.opponent, opponent)):
        for index, action in enumerate(pair):
            actions[(side, index)] = Action(action)
    return actions


class BotSession:
    """
    Holds the environment, the agent and the response awaiting the
    opponent's move.

    Attributes:
        env: Field environment mirroring the judge's game
        agent: Agent choosing our actions (created on the setup request)
        pending: Our submitted actions for the current turn, if any
        data: Opaque per-bot payload from the last full-history message
        globaldata: Opaque cross-game payload from the last full-history message
    """

    def __init__(
        self,
        agent_type: str = "greedy",
        agent_params: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ):
        self.agent_type = agent_type
        self.agent_params = dict(agent_params or {})
        self.debug = debug

        self.env = FieldEnv()
        self.agent: Optional[BaseAgent] = None
        self.pending: Optional[List[Action]] = None
        self.data = ""
        self.globaldata = ""

    @property
    def world(self) -> FieldState:
        if self.env.world is None:
            raise JudgeProtocolError("No setup request received yet")
        return self.env.world

    @property
    def my_side(self) -> Side:
        if self.env.setup is None:
            raise JudgeProtocolError("No setup request received yet")
        return self.env.setup.my_side

    def handle(self, message: JudgeMessage) -> JudgeResponse:
        """Absorb one judge message and produce our response for the turn."""
        if isinstance(message, JudgeInput):
            self.load_history(message)
        elif isinstance(message, SetupRequest):
            self.start(message)
        else:
            self.apply_opponent(message)
        return self.respond()

    def start(self, request: SetupRequest) -> None:
        setup = Setup(brick_masks=request.field, my_side=request.my_side)
        self.env.reset(setup)
        spec = AgentSpec(side=setup.my_side, type=self.agent_type, init_params=self.agent_params)
        self.agent = create_agent_from_spec(spec).agent
        self.pending = None
        logger.debug("Game set up: playing %s with %s", setup.my_side.name, self.agent)

    def load_history(self, message: JudgeInput) -> None:
        """Rebuild the game from scratch by replaying every completed turn."""
        setup, *turns = message.requests
        if not isinstance(setup, SetupRequest):
            raise JudgeProtocolError("First request must be the field setup")
        if len(message.responses) < len(turns):
            raise JudgeProtocolError(
                f"{len(turns)} opponent requests but only {len(message.responses)} responses"
            )

        self.start(setup)
        for own, opponent in zip(message.responses, turns):
            if isinstance(opponent, SetupRequest):
                raise JudgeProtocolError("Setup request received mid-game")
            self.pending = list(own)
            self.apply_opponent(opponent)

        self.data = message.data
        self.globaldata = message.globaldata

    def apply_opponent(self, opponent: Sequence[Action]) -> None:
        """Play the current turn with our pending actions and the opponent's."""
        world = self.world
        if self.pending is None:
            raise JudgeProtocolError(f"Opponent actions for turn {world.turn} arrived before our own")

        turn = world.turn
        if not self.env.apply(joint_action(self.my_side, self.pending, opponent)):
            logger.warning("Turn %d: joint action rejected, state unchanged", turn)
        self.pending = None

    def respond(self) -> JudgeResponse:
        world = self.world
        if self.agent is None:
            raise JudgeProtocolError("No setup request received yet")

        actions, metadata = self.agent.get_actions({"world": world})
        response = list(self.agent.ordered_response(actions))
        self.pending = response
        logger.debug("Turn %d response: %s", world.turn, [a.name for a in response])

        return JudgeResponse(
            response=response,
            debug=json.dumps(metadata, default=str) if self.debug else None,
            data=self.data or None,
            globaldata=self.globaldata or None,
        )
