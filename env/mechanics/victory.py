"""
Victory conditions.

A side fails when both of its tanks are destroyed or its base is destroyed.
The check is pure and can be called at any time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict

from ..core.constants import MAX_TURNS
from ..core.types import GameResult, Side

if TYPE_CHECKING:
    from ..world.world import FieldState


@dataclass
class VictoryResult:
    """
    Outcome of a victory check.

    Attributes:
        result: GameResult (NOT_FINISHED while the game goes on)
        reason: Human-readable explanation
    """

    result: GameResult
    reason: str = ""

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.NOT_FINISHED

    @property
    def winner(self) -> Side | None:
        return self.result.winner

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.name,
            "winner": self.winner.name if self.winner is not None else None,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> VictoryResult:
        return cls(result=GameResult[data["result"]], reason=data.get("reason", ""))


class VictoryConditions:
    """Evaluate whether the game has ended and who won."""

    def __init__(self, max_turns: int = MAX_TURNS):
        self.max_turns = max_turns

    def side_failed(self, world: FieldState, side: Side) -> bool:
        tanks_lost = not any(t.alive for t in world.get_side_tanks(side))
        return tanks_lost or not world.bases[side].alive

    def check(self, world: FieldState) -> VictoryResult:
        blue_failed = self.side_failed(world, Side.BLUE)
        red_failed = self.side_failed(world, Side.RED)

        if blue_failed and red_failed:
            return VictoryResult(GameResult.DRAW, "Both sides failed on the same turn")
        if blue_failed:
            return VictoryResult(GameResult.RED_WINS, self._failure_reason(world, Side.BLUE))
        if red_failed:
            return VictoryResult(GameResult.BLUE_WINS, self._failure_reason(world, Side.RED))
        if world.turn > self.max_turns:
            return VictoryResult(GameResult.DRAW, f"Turn limit of {self.max_turns} reached")
        return VictoryResult(GameResult.NOT_FINISHED)

    def _failure_reason(self, world: FieldState, side: Side) -> str:
        if not world.bases[side].alive:
            return f"{side.name} base destroyed"
        return f"All {side.name} tanks destroyed"
