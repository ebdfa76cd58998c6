from __future__ import annotations

import importlib
from typing import Dict, List, Optional, Type

from .base_agent import BaseAgent

# Short agent keys ("random", "pass") accepted by AgentSpec.type.
AGENT_REGISTRY: Dict[str, Type[BaseAgent]] = {}

AgentClass = Type[BaseAgent]


def register_agent(key: str, cls: Optional[AgentClass] = None):
    """
    Make an agent class available under `key`.

        @register_agent("random")
        class RandomAgent(BaseAgent): ...

    Also callable directly as register_agent("random", RandomAgent).

    Raises:
        ValueError: If the key already points at another class
    """
    def bind(agent_cls: AgentClass) -> AgentClass:
        current = AGENT_REGISTRY.setdefault(key, agent_cls)
        if current is not agent_cls:
            raise ValueError(f"Agent key '{key}' already registered to {current.__name__}")
        return agent_cls

    return bind if cls is None else bind(cls)


def available_agents() -> List[str]:
    return sorted(AGENT_REGISTRY)


def _import_agent(path: str) -> AgentClass:
    module_name, _, attr = path.rpartition(".")
    candidate = getattr(importlib.import_module(module_name), attr)
    if not (isinstance(candidate, type) and issubclass(candidate, BaseAgent)):
        raise TypeError(f"{path} is not a BaseAgent subclass")
    return candidate


def resolve_agent_class(type_ref: str) -> AgentClass:
    """
    Turn an AgentSpec.type into a class.

    Registered keys win; anything with a dot is imported as "pkg.module.Class".

    Raises:
        ValueError: Unregistered key without a module path
        TypeError: The imported object is not an agent
    """
    registered = AGENT_REGISTRY.get(type_ref)
    if registered is not None:
        return registered
    if "." in type_ref:
        return _import_agent(type_ref)
    known = ", ".join(available_agents()) or "none"
    raise ValueError(f"Unknown agent type '{type_ref}' (registered: {known})")


