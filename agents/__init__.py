"""
Agent interface and implementations for the Grid Conquest Engine.

This module provides:
- BaseAgent: Abstract interface for all agents
- RandomAgent: Random moves, seeded for reproducibility
- PassAgent: Never moves
- AgentSpec / create_agent_from_spec / create_agents: config-driven construction
"""

from .base_agent import BaseAgent
from .registry import AGENT_REGISTRY, available_agents, register_agent, resolve_agent_class
from .random_agent import RandomAgent
from .pass_agent import PassAgent
from .spec import AgentSpec
from .factory import create_agent_from_spec, create_agents

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "PassAgent",
    "AgentSpec",
    "AGENT_REGISTRY",
    "register_agent",
    "resolve_agent_class",
    "available_agents",
    "create_agent_from_spec",
    "create_agents",
]
