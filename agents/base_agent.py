"""
Base agent interface for the Grid Conquest Engine.

All agents must implement this interface to be driven by the GameRunner.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from conquest.core.types import PlayerId
from runtime.decision import DecisionModel


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    An agent controls exactly one player. Each time that player is to move,
    the runner hands it the player's fog-filtered view and expects one
    finalized decision back.

    Subclasses must implement:
    - decide(): Produce the decision for the current turn

    Attributes:
        player_id: The player this agent controls
        name: Agent name for logging/identification
    """

    def __init__(self, player_id: PlayerId, name: str = None):
        """
        Initialize the agent.

        Args:
            player_id: Player this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.player_id = PlayerId.parse(player_id)
        self.name = name or self.__class__.__name__

    @abstractmethod
    def decide(self, view: Dict[str, Any]) -> DecisionModel:
        """
        Decide moves and diplomacy for one turn.

        View structure (ConquestEngine.state_for_player):
            {
                "playerId": "blue",
                "currentTurn": int,
                "homeBase": [x, y],
                "myUnits": int,
                "myPositions": [{"x": int, "y": int, "count": int}, ...],
                "myLies": int,
                "canLie": bool,
                "board": rows of cells (fog-filtered, board[y][x]),
                "resources": [{"x", "y", "depleted"}, ...],
                "diplomacyHistory": [record dicts],
                "players": [{"id", "name", "units", "isAlive"}, ...],
            }

        Args:
            view: Everything this player is allowed to know

        Returns:
            DecisionModel; an empty move list passes the turn

        Notes:
            - Invalid moves are dropped by the engine, not fatal
            - Raising makes the runner skip this player's turn
        """
        pass

    def reset(self) -> None:
        """
        Reset agent state between games.

        Override if your agent keeps memory across turns.
        """
        pass

    def __str__(self) -> str:
        return f"{self.name} ({self.player_id.value})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(player_id={self.player_id.value}, name='{self.name}')"
