"""
WorldState - Central game state container.

The WorldState holds:
- The board
- The four players
- Turn tracking (turn counter, rotation index, lifecycle state)
- The outcome once the game is over

It does NOT apply rules:
- Move validation/execution (delegated to MovementResolver)
- Battles (delegated to BattleResolver)
- Capture bonuses (delegated to CaptureHandler)
- Visibility (delegated to VisibilitySystem)
- Rotation (delegated to TurnScheduler)
- Termination (delegated to VictoryConditions)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .board import Board
from .player import Player
from .player_view import PlayerView
from ..config import GameConfig
from ..core.types import PLAYER_PROFILES, GameResult, GameState, PlayerId


class WorldState:
    """
    The central game state.

    Attributes:
        board: The 10x10 board
        players: Players in rotation order
        config: Rules in effect
        turn: Completed rotations (increments when play returns to index 0)
        current_index: Rotation index of the player to move
        state: Lifecycle state
        result / winner / game_over_reason: Outcome, set when finished
        turn_sequence: Count of player-turns taken; identifies the live turn
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

        self.board = Board()
        self.players: List[Player] = [
            Player.from_profile(profile) for profile in PLAYER_PROFILES
        ]
        self._players_by_id: Dict[PlayerId, Player] = {p.id: p for p in self.players}

        for player in self.players:
            x, y = player.start_position
            self.board.set_units(x, y, player.id, self.config.starting_units)
        self.refresh_unit_totals()

        self.turn: int = 0
        self.current_index: int = 0
        self.state: GameState = GameState.WAITING
        self.result: GameResult = GameResult.IN_PROGRESS
        self.winner: Optional[PlayerId] = None
        self.game_over_reason: str = ""
        self.turn_sequence: int = 0

    # ========================================================================
    # PLAYER ACCESS
    # ========================================================================

    def get_player(self, player_id: PlayerId | str) -> Player:
        """
        Look up a player.

        Raises:
            ValueError: If the id names no player
        """
        return self._players_by_id[PlayerId.parse(player_id)]

    def find_player(self, player_id: PlayerId | str) -> Optional[Player]:
        """Look up a player, returning None for unknown ids."""
        try:
            return self.get_player(player_id)
        except ValueError:
            return None

    def player_ids(self) -> List[PlayerId]:
        return [p.id for p in self.players]

    def living_players(self) -> List[Player]:
        return [p for p in self.players if p.is_alive]

    def refresh_unit_totals(self) -> None:
        """Recompute every player's derived unit total from the board."""
        totals = {pid: 0 for pid in self._players_by_id}
        for _, cell in self.board.occupied_cells():
            for pid, count in cell.units.items():
                totals[pid] += count
        for player in self.players:
            player.units = totals[player.id]

    def view_for(self, player_id: PlayerId | str) -> PlayerView:
        return PlayerView(self.board, PlayerId.parse(player_id))

    @property
    def current_player(self) -> Player:
        """Player at the rotation index (may be dead; the scheduler fixes that)."""
        return self.players[self.current_index]

    @property
    def game_over(self) -> bool:
        return self.state == GameState.FINISHED

    # ========================================================================
    # UTILITY
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize world state to dictionary (omniscient view).

        Returns:
            JSON-serializable dictionary of complete game state
        """
        return {
            "board": self.board.to_dict(),
            "players": [player.to_dict() for player in self.players],
            "turn": self.turn,
            "current_player": self.current_player.id.value,
            "state": self.state.value,
            "result": self.result.value,
            "winner": self.winner.value if self.winner else None,
            "game_over_reason": self.game_over_reason,
            "turn_sequence": self.turn_sequence,
            "config": self.config.to_dict(),
        }

    def __str__(self) -> str:
        """String representation."""
        alive = len(self.living_players())
        return f"WorldState(turn={self.turn}, state={self.state}, alive={alive}/{len(self.players)})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return (f"WorldState(board={self.board}, turn={self.turn}, "
                f"current={self.current_player.id.value}, state={self.state})")
