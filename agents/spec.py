from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from env.core.types import Side


@dataclass
class AgentSpec:
    """
    Declarative description of an agent, stored with a Setup.

    Attributes:
        side: Side the agent plays
        type: Registered agent type (e.g. "greedy", "random")
        name: Optional display name
        init_params: Extra constructor keyword arguments
    """

    side: Side
    type: str
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.side.name,
            "type": self.type,
            "name": self.name,
            "init_params": dict(self.init_params),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AgentSpec:
        side = data["side"]
        return cls(
            side=Side[side] if isinstance(side, str) else Side(side),
            type=data["type"],
            name=data.get("name"),
            init_params=dict(data.get("init_params") or {}),
        )
