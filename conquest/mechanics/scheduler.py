"""
TurnScheduler - lifecycle transitions and player rotation.

Lifecycle:
    waiting --start()--> running <--pause()/resume()--> paused
    any state --finish()--> finished

Rotation walks the fixed player order, skipping players with no units.
The turn counter increments each time the rotation wraps past index 0.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ..core.types import GameResult, GameState, PlayerId

if TYPE_CHECKING:
    from ..world.world import WorldState


@dataclass
class AdvanceResult:
    """
    Outcome of one rotation step.

    Attributes:
        previous: Player whose turn ended
        current: Player now to move (None if nobody is alive)
        skipped: Dead players passed over
        wrapped: True if the rotation passed index 0 (turn counter advanced)
    """
    previous: PlayerId
    current: Optional[PlayerId]
    skipped: List[PlayerId] = field(default_factory=list)
    wrapped: bool = False

    @property
    def exhausted(self) -> bool:
        """True when a full cycle found no living player."""
        return self.current is None


class TurnScheduler:
    """Stateless scheduler; all state lives on the WorldState."""

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def start(self, world: WorldState) -> None:
        """
        Raises:
            RuntimeError: If the game is not waiting to start
        """
        self._transition(world, GameState.WAITING, GameState.RUNNING, "start")

    def pause(self, world: WorldState) -> None:
        """
        Raises:
            RuntimeError: If the game is not running
        """
        self._transition(world, GameState.RUNNING, GameState.PAUSED, "pause")

    def resume(self, world: WorldState) -> None:
        """
        Raises:
            RuntimeError: If the game is not paused
        """
        self._transition(world, GameState.PAUSED, GameState.RUNNING, "resume")

    def finish(self, world: WorldState, result: GameResult, winner: Optional[PlayerId], reason: str) -> None:
        world.state = GameState.FINISHED
        world.result = result
        world.winner = winner
        world.game_over_reason = reason

    @staticmethod
    def _transition(world: WorldState, expected: GameState, target: GameState, name: str) -> None:
        if world.state != expected:
            raise RuntimeError(f"Cannot {name} a game that is {world.state.value}")
        world.state = target

    # ========================================================================
    # ROTATION
    # ========================================================================

    def advance(self, world: WorldState) -> AdvanceResult:
        """
        Move the rotation to the next living player.

        Walks at most one full cycle (ending back on the current player).
        If nobody is alive the game finishes as a draw.

        Args:
            world: Current world state (modified in-place)

        Returns:
            AdvanceResult describing the step
        """
        players = world.players
        count = len(players)
        start = world.current_index
        result = AdvanceResult(previous=players[start].id, current=None)

        for step in range(1, count + 1):
            candidate = (start + step) % count
            if start + step >= count and not result.wrapped:
                result.wrapped = True
                world.turn += 1
            if players[candidate].is_alive:
                world.current_index = candidate
                result.current = players[candidate].id
                break
            result.skipped.append(players[candidate].id)

        world.turn_sequence += 1
        if result.exhausted:
            self.finish(world, GameResult.DRAW, None, "No living players remain")
        return result

    def ensure_living_current(self, world: WorldState) -> Optional[AdvanceResult]:
        """
        Skip forward if the player at the rotation index has died.

        Returns:
            The AdvanceResult if the rotation moved, None otherwise
        """
        if world.current_player.is_alive or world.game_over:
            return None
        return self.advance(world)
