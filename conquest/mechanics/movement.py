"""
MovementResolver - Move validation and execution.

This module handles:
- Validating proposed moves (bounds, adjacency, ownership, sufficiency)
- Filtering a turn's move list without aborting on bad entries
- Applying a single move: leave the source, then merge or fight at the
  destination
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from .combat import BattleResolver, BattleResult
from ..core.moves import Move
from ..core.types import GridPos, PlayerId, ValidationResult
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..world.world import WorldState

log = get_logger(__name__)


@dataclass
class MoveRejection:
    """A move dropped by validation, with the reason."""
    move: Move
    validation: ValidationResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "move": self.move.to_dict(),
            "error_code": self.validation.error_code,
            "message": self.validation.message,
        }


@dataclass
class MovementResult:
    """
    Result of executing one validated move.

    Attributes:
        player: Acting player
        move: The executed move
        battle: Battle fought at the destination, if any
        units_at_destination: Mover's stack on the destination afterwards
    """
    player: PlayerId
    move: Move
    battle: Optional[BattleResult] = None
    units_at_destination: int = 0

    @property
    def mover_present(self) -> bool:
        """True if at least one of the mover's units stands on the destination."""
        return self.units_at_destination > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player.value,
            "move": self.move.to_dict(),
            "battle": self.battle.to_dict() if self.battle else None,
            "units_at_destination": self.units_at_destination,
        }


@dataclass
class MoveValidationReport:
    """Outcome of filtering a move list."""
    valid_moves: List[Move] = field(default_factory=list)
    rejections: List[MoveRejection] = field(default_factory=list)


class MovementResolver:
    """
    Stateless resolver for movement.

    All methods are stateless - they don't modify the resolver itself.
    """

    def __init__(self, battles: Optional[BattleResolver] = None):
        self._battles = battles or BattleResolver()

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate_move(
        self,
        world: WorldState,
        player_id: PlayerId,
        move: Move,
        committed: Optional[Mapping[GridPos, int]] = None,
    ) -> ValidationResult:
        """
        Validate one move against the board.

        Args:
            world: Current world state (not modified)
            player_id: Acting player
            move: Proposed move
            committed: Units already drawn from each source by earlier
                moves of the same batch

        Returns:
            ValidationResult; error codes as documented on ValidationResult
        """
        grid = world.board.grid
        if not grid.in_bounds(move.source) or not grid.in_bounds(move.destination):
            return ValidationResult.fail(
                "OUT_OF_BOUNDS",
                f"Move {move} leaves the {grid.width}x{grid.height} grid"
            )

        if not grid.is_adjacent(move.source, move.destination):
            return ValidationResult.fail(
                "NOT_ADJACENT",
                f"Move {move} is not a single orthogonal step (distance {move.distance})"
            )

        if move.unit_count <= 0:
            return ValidationResult.fail(
                "INVALID_COUNT",
                f"Move {move} must carry a positive unit count"
            )

        available = world.board.units_at(move.from_x, move.from_y, player_id)
        if available == 0:
            return ValidationResult.fail(
                "NO_UNITS",
                f"{player_id} has no units at {move.source}"
            )

        available -= (committed or {}).get(move.source, 0)
        if available < move.unit_count:
            return ValidationResult.fail(
                "INSUFFICIENT_UNITS",
                f"{player_id} has {max(available, 0)} units left at {move.source}, needs {move.unit_count}"
            )

        return ValidationResult.success()

    def validate_moves(
        self,
        world: WorldState,
        player_id: PlayerId,
        moves: Iterable[Move],
    ) -> MoveValidationReport:
        """
        Filter a turn's moves, keeping order and dropping invalid entries.

        Validation runs against the start-of-turn board. Units drawn from a
        cell by an earlier move of the batch are no longer available to
        later moves, and units that arrive during the turn cannot move again.

        Returns:
            MoveValidationReport with valid moves and rejections
        """
        report = MoveValidationReport()
        committed: Counter = Counter()

        for move in moves:
            validation = self.validate_move(world, player_id, move, committed)
            if not validation.valid:
                log.debug("Rejected move for %s: %s", player_id, validation.message)
                report.rejections.append(MoveRejection(move, validation))
                continue
            committed[move.source] += move.unit_count
            report.valid_moves.append(move)

        return report

    # ========================================================================
    # EXECUTION
    # ========================================================================

    def execute(self, world: WorldState, player_id: PlayerId, move: Move) -> MovementResult:
        """
        Apply a validated move.

        Units leave the source first. If the destination holds other
        players' stacks a battle is fought; otherwise the units merge into
        (or create) the mover's stack there.

        Args:
            world: Current world state (modified in-place)
            player_id: Acting player
            move: Move previously accepted by validate_moves

        Returns:
            MovementResult for this move
        """
        board = world.board
        board.add_units(move.from_x, move.from_y, player_id, -move.unit_count)

        battle: Optional[BattleResult] = None
        if board.enemies_at(move.to_x, move.to_y, player_id):
            battle = self._battles.resolve(board, move.destination, player_id, move.unit_count)
            log.debug(
                "Battle at %s: %s (%d) vs %s, survivors %d",
                move.destination, player_id, move.unit_count,
                {str(pid): n for pid, n in battle.defenders.items()}, battle.survivors,
            )
        else:
            board.add_units(move.to_x, move.to_y, player_id, move.unit_count)

        return MovementResult(
            player=player_id,
            move=move,
            battle=battle,
            units_at_destination=board.units_at(move.to_x, move.to_y, player_id),
        )

