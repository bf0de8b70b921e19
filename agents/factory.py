from __future__ import annotations

from dataclasses import dataclass

from .base_agent import BaseAgent
from .registry import resolve_agent_class
from .spec import AgentSpec


@dataclass
class PreparedAgent:
    """An instantiated agent together with the AgentSpec it was built from."""

    spec: AgentSpec
    agent: BaseAgent


def create_agent_from_spec(spec: AgentSpec) -> PreparedAgent:
    agent_cls = resolve_agent_class(spec.type)
    agent = agent_cls(side=spec.side, name=spec.name, **spec.init_params)
    return PreparedAgent(spec=spec, agent=agent)
