from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from conquest.core.types import PlayerId


@dataclass
class AgentSpec:
    """
    Serializable description of an agent.

    Used by the API and config files so agents can be instantiated
    dynamically by the factory/registry.
    """
    type: str
    player: PlayerId
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "type": self.type,
            "player": self.player.value,
            "name": self.name,
            "init_params": self.init_params,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AgentSpec:
        """Construct from a dict (e.g., an API request body)."""
        player_raw = data.get("player")
        if player_raw is None:
            raise ValueError("AgentSpec requires 'player'")
        if "type" not in data:
            raise ValueError("AgentSpec requires 'type'")
        return cls(
            type=data["type"],
            player=PlayerId.parse(player_raw),
            name=data.get("name"),
            init_params=data.get("init_params", {}) or {},
        )

    def with_player(self, player: PlayerId) -> AgentSpec:
        """Return a copy bound to another player."""
        return AgentSpec(
            type=self.type,
            player=player,
            name=self.name,
            init_params=dict(self.init_params),
        )
