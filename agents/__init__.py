"""
Agent interface and implementations for the Tank Field Environment.

This module provides:
- BaseAgent: Abstract interface for all agents
- GreedyAgent: Heuristic decision engine (distances, threat, prediction)
- RandomAgent: Simple random action agent for testing
"""

from .base_agent import BaseAgent
from .factory import PreparedAgent, create_agent_from_spec

from .registry import register_agent, registered_agents, resolve_agent_class
from .spec import AgentSpec
from .random_agent import RandomAgent
from .greedy_agent import GreedyAgent
from .team_intel import TeamIntel

__all__ = [
    "BaseAgent",
    "AgentSpec",
    "PreparedAgent",
    "create_agent_from_spec",
    "register_agent",
    "registered_agents",
    "resolve_agent_class",
    "RandomAgent",
    "GreedyAgent",
    "TeamIntel",
]
