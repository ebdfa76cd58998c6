"""
CaptureHandler - one-time resource and enemy-base bonuses.

Runs once per executed move, after the battle for that move is settled:
- Resource capture: the first entry into a central resource cell grants
  the mover `resource_bonus` units and depletes the cell.
- Base capture: the first time another player's home corner is entered
  with at least one of the mover's units standing there afterwards, the
  mover gets `base_capture_bonus` units and the corner is marked captured.

Bonus units always appear on the capturing player's own home corner,
never on the captured cell.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .combat import BattleResolver, BattleResult
from ..config import GameConfig
from ..core.types import HOME_CORNERS, GridPos, PlayerId

if TYPE_CHECKING:
    from .movement import MovementResult
    from ..world.world import WorldState

RESOURCE = "resource"
BASE = "base"


@dataclass
class CaptureResult:
    """
    A granted bonus.

    Attributes:
        kind: "resource" or "base"
        player: Capturing player
        pos: Captured cell
        home: Cell where the bonus units were placed
        bonus: Units granted
        base_owner: Owner of the captured corner (base captures only)
        home_battle: Battle fought if the home corner was occupied by an enemy
    """
    kind: str
    player: PlayerId
    pos: GridPos
    home: GridPos
    bonus: int
    base_owner: Optional[PlayerId] = None
    home_battle: Optional[BattleResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "player": self.player.value,
            "pos": list(self.pos),
            "home": list(self.home),
            "bonus": self.bonus,
            "base_owner": self.base_owner.value if self.base_owner else None,
            "home_battle": self.home_battle.to_dict() if self.home_battle else None,
        }


class CaptureHandler:
    """Grants capture bonuses according to the game config."""

    def __init__(self, config: Optional[GameConfig] = None, battles: Optional[BattleResolver] = None):
        self._config = config or GameConfig()
        self._battles = battles or BattleResolver()

    def apply(self, world: WorldState, outcome: MovementResult) -> List[CaptureResult]:
        """
        Grant whatever bonuses the executed move earned.

        Args:
            world: Current world state (modified in-place)
            outcome: Result of the move that was just executed

        Returns:
            List of granted bonuses (empty, one or both kinds)
        """
        captures: List[CaptureResult] = []

        resource = self._capture_resource(world, outcome)
        if resource:
            captures.append(resource)

        base = self._capture_base(world, outcome)
        if base:
            captures.append(base)

        return captures

    def _capture_resource(self, world: WorldState, outcome: MovementResult) -> Optional[CaptureResult]:
        x, y = outcome.move.destination
        cell = world.board.cell(x, y)
        if not cell.resource_cell or cell.depleted:
            return None
        if self._config.resource_bonus_requires_survivor and not outcome.mover_present:
            return None

        home, battle = self._grant(world, outcome.player, self._config.resource_bonus)
        world.board.mark_depleted(x, y)
        return CaptureResult(
            kind=RESOURCE,
            player=outcome.player,
            pos=(x, y),
            home=home,
            bonus=self._config.resource_bonus,
            home_battle=battle,
        )

    def _capture_base(self, world: WorldState, outcome: MovementResult) -> Optional[CaptureResult]:
        x, y = outcome.move.destination
        owner = HOME_CORNERS.get((x, y))
        if owner is None or owner == outcome.player:
            return None
        if world.board.cell(x, y).base_captured or not outcome.mover_present:
            return None

        home, battle = self._grant(world, outcome.player, self._config.base_capture_bonus)
        world.board.mark_base_captured(x, y)
        return CaptureResult(
            kind=BASE,
            player=outcome.player,
            pos=(x, y),
            home=home,
            bonus=self._config.base_capture_bonus,
            base_owner=owner,
            home_battle=battle,
        )

    def _grant(self, world: WorldState, player_id: PlayerId, bonus: int) -> tuple[GridPos, Optional[BattleResult]]:
        home = world.get_player(player_id).start_position
        battle = self._battles.reinforce(world.board, home, player_id, bonus)
        return home, battle
