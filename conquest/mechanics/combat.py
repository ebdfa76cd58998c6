"""
BattleResolver - deterministic stack-versus-stack combat.

A battle happens when a moving stack enters a cell holding other players'
units. Defenders are fought one at a time in encounter order:
- attacker stronger: the defender is wiped out, the attacker loses that many
  units and carries on against the next defender
- defender stronger: the defender loses the attacker's strength, the
  attacker is spent, resolution stops
- equal: both are removed, resolution stops

Whatever attacker strength survives is placed on the cell. There is no
randomness.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import GridPos, PlayerId

if TYPE_CHECKING:
    from ..world.board import Board


@dataclass
class BattleResult:
    """
    Outcome of one battle.

    Attributes:
        pos: Contested cell
        attacker: Entering player
        attacker_units: Strength the attacker entered with
        defenders: Defender -> stack size before the battle
        defender_losses: Defender -> units lost
        survivors: Attacker units left on the cell
    """
    pos: GridPos
    attacker: PlayerId
    attacker_units: int
    defenders: Dict[PlayerId, int] = field(default_factory=dict)
    defender_losses: Dict[PlayerId, int] = field(default_factory=dict)
    survivors: int = 0

    @property
    def attacker_won(self) -> bool:
        return self.survivors > 0

    def eliminated_defenders(self) -> list[PlayerId]:
        """Defenders whose whole stack on this cell was destroyed."""
        return [pid for pid, count in self.defenders.items()
                if self.defender_losses.get(pid, 0) == count]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pos": list(self.pos),
            "attacker": self.attacker.value,
            "attacker_units": self.attacker_units,
            "defenders": {pid.value: n for pid, n in self.defenders.items()},
            "defender_losses": {pid.value: n for pid, n in self.defender_losses.items()},
            "survivors": self.survivors,
        }


class BattleResolver:
    """Stateless combat resolver working directly on the board."""

    def resolve(self, board: Board, pos: GridPos, attacker: PlayerId, strength: int) -> BattleResult:
        """
        Fight every enemy stack at pos with `strength` incoming attacker units.

        The attacker's units must already have left their source cell; this
        method only touches the contested cell.

        Args:
            board: Board (modified in-place)
            pos: Contested cell
            attacker: Entering player
            strength: Entering unit count

        Returns:
            BattleResult describing the fight
        """
        x, y = pos
        defenders = board.enemies_at(x, y, attacker)
        result = BattleResult(pos=pos, attacker=attacker, attacker_units=strength,
                              defenders=dict(defenders))
        remaining = strength

        for defender, count in defenders.items():
            if remaining <= 0:
                break
            if remaining > count:
                board.set_units(x, y, defender, 0)
                result.defender_losses[defender] = count
                remaining -= count
            elif remaining < count:
                board.set_units(x, y, defender, count - remaining)
                result.defender_losses[defender] = remaining
                remaining = 0
            else:
                board.set_units(x, y, defender, 0)
                result.defender_losses[defender] = count
                remaining = 0

        if remaining > 0:
            board.add_units(x, y, attacker, remaining)
        result.survivors = remaining
        return result

    def reinforce(self, board: Board, pos: GridPos, player: PlayerId, count: int) -> Optional[BattleResult]:
        """
        Drop `count` new units of `player` on pos.

        Units merge into the player's stack; if another player holds the
        cell they arrive as attackers, so a cell never keeps two owners.

        Returns:
            The battle fought on arrival, or None if there was none
        """
        x, y = pos
        if board.enemies_at(x, y, player):
            return self.resolve(board, pos, player, count)
        board.add_units(x, y, player, count)
        return None
