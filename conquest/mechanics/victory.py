"""
Victory condition checking for the Grid Conquest Engine.

This module provides pure logic for determining game outcomes:
- Last player standing (win)
- Mutual annihilation (draw)
- Optional turn cap (draw)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import GameResult, PlayerId

if TYPE_CHECKING:
    from ..world.world import WorldState


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        result: Game outcome (IN_PROGRESS, WIN, DRAW)
        reason: Human-readable explanation of the outcome
        winner: Winning player (None if draw or in progress)
    """
    result: GameResult
    reason: str
    winner: Optional[PlayerId] = None

    @property
    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.result != GameResult.IN_PROGRESS

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.result == GameResult.IN_PROGRESS:
            return "Game in progress"
        return f"{self.result}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize victory result to a plain dict."""
        return {
            "result": self.result.value,
            "reason": self.reason,
            "winner": self.winner.value if self.winner else None,
        }


class VictoryConditions:
    """
    Stateless checker for game termination.

    Must run after battles and capture bonuses have settled the unit
    totals for the turn.

    Usage:
        checker = VictoryConditions(max_turns=200)
        result = checker.check_all(world)

        if result.is_game_over:
            print(f"Game Over: {result.reason}")
    """

    def __init__(self, max_turns: Optional[int] = None):
        """
        Args:
            max_turns: Optional turn cap after which the game is a draw
        """
        self._max_turns = max_turns

    def check_all(self, world: WorldState) -> VictoryResult:
        """
        Check all termination conditions in priority order.

        1. Elimination (zero or one living player)
        2. Turn limit reached
        """
        result = self.check_elimination(world)
        if result.is_game_over:
            return result

        result = self.check_turn_limit(world.turn)
        if result.is_game_over:
            return result

        return VictoryResult(
            result=GameResult.IN_PROGRESS,
            reason="Game ongoing",
            winner=None
        )

    def check_elimination(self, world: WorldState) -> VictoryResult:
        """
        Compare the set of players with units left.

        - none: draw
        - exactly one: that player wins
        - more: game continues
        """
        alive = world.living_players()

        if not alive:
            return VictoryResult(
                result=GameResult.DRAW,
                reason="All players eliminated",
                winner=None
            )

        if len(alive) == 1:
            return VictoryResult(
                result=GameResult.WIN,
                reason=f"{alive[0].name} is the last player standing",
                winner=alive[0].id
            )

        return VictoryResult(
            result=GameResult.IN_PROGRESS,
            reason=f"{len(alive)} players alive",
            winner=None
        )

    def check_turn_limit(self, turn: int) -> VictoryResult:
        """Draw once the turn counter reaches max_turns (if configured)."""
        if self._max_turns is not None and turn >= self._max_turns:
            return VictoryResult(
                result=GameResult.DRAW,
                reason=f"Turn limit reached ({self._max_turns})",
                winner=None
            )

        return VictoryResult(
            result=GameResult.IN_PROGRESS,
            reason="Turn limit not reached",
            winner=None
        )
