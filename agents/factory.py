from __future__ import annotations

from typing import Dict, Iterable, Optional

from conquest.core.types import PLAYER_PROFILES, PlayerId
from .base_agent import BaseAgent
from .registry import resolve_agent_class
from .spec import AgentSpec


def create_agent_from_spec(spec: AgentSpec) -> BaseAgent:
    """Instantiate an agent from an AgentSpec."""
    cls = resolve_agent_class(spec.type)

    init_kwargs = dict(spec.init_params)
    init_kwargs.setdefault("player_id", spec.player)
    if spec.name is not None:
        init_kwargs.setdefault("name", spec.name)

    agent = cls(**init_kwargs)
    if not isinstance(agent, BaseAgent):
        raise TypeError(f"Agent {cls} is not a BaseAgent")
    return agent


def create_agents(
    specs: Iterable[AgentSpec] = (),
    default: Optional[AgentSpec] = None,
) -> Dict[PlayerId, BaseAgent]:
    """
    Build one agent per player.

    Players without a spec get `default` rebound to them (a "random"
    agent when no default is given).

    Raises:
        ValueError: If two specs target the same player
    """
    by_player: Dict[PlayerId, AgentSpec] = {}
    for spec in specs:
        if spec.player in by_player:
            raise ValueError(f"Duplicate AgentSpec for player {spec.player.value}")
        by_player[spec.player] = spec

    fallback = default or AgentSpec(type="random", player=PlayerId.BLUE)
    agents: Dict[PlayerId, BaseAgent] = {}
    for profile in PLAYER_PROFILES:
        spec = by_player.get(profile.id) or fallback.with_player(profile.id)
        agents[profile.id] = create_agent_from_spec(spec)
    return agents
