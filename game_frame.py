from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from env.core.actions import Action
from env.core.types import TankKey
from env.environment import StepInfo
from env.world import FieldState


@dataclass
class Frame:
    """
    Snapshot of a single turn, with helpers to serialize for transport.

    ``world`` is the state the actions were chosen in; ``step_info``
    describes what applying them did.
    """

    world: Optional[FieldState]
    actions: Optional[Mapping[TankKey, Action]] = None
    action_metadata: Optional[Mapping[str, Any]] = None
    step_info: Optional[StepInfo] = None
    done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the frame into a JSON-friendly dictionary.
        """
        frame: Dict[str, Any] = {"done": self.done}
        if self.world is not None:
            frame["turn"] = self.world.turn
            frame["world"] = self.world.to_dict()
            frame["board"] = self.world.to_ascii()

        actions_payload = self._serialize_actions(self.actions or {})
        if actions_payload:
            frame["actions"] = actions_payload
        if self.action_metadata is not None:
            frame["action_metadata"] = dict(self.action_metadata)
        if self.step_info is not None:
            frame["step_info"] = self.step_info.to_dict()

        return frame

    @staticmethod
    def _serialize_actions(actions: Mapping[TankKey, Action]) -> List[Dict[str, Any]]:
        """Serialize action map to a list ordered by side, then tank index."""
        serialized: List[Dict[str, Any]] = []
        for (side, index), action in sorted(actions.items()):
            serialized.append(
                {
                    "side": side.name,
                    "index": index,
                    "action": int(action),
                    "label": str(action),
                }
            )
        return serialized
