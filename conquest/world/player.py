"""
Players and their diplomatic records.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..core.types import GridPos, PlayerId, PlayerProfile, Quadrant, RecordType


@dataclass(frozen=True)
class DiplomaticRecord:
    """
    One entry of a player's diplomacy log. Never mutated after creation.

    The same message produces two records that differ only in `type`:
    a SENT record in the sender's log and a RECEIVED one in the recipient's.
    """
    turn: int
    sender: PlayerId
    recipient: PlayerId
    content: str
    timestamp: float
    type: RecordType
    claimed_lie: bool = False
    actually_lied: bool = False
    detected_lies: Tuple[str, ...] = ()

    @property
    def counterpart(self) -> PlayerId:
        """The other side of the conversation from the log owner's perspective."""
        return self.recipient if self.type == RecordType.SENT else self.sender

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "from": self.sender.value,
            "to": self.recipient.value,
            "content": self.content,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "claimed_lie": self.claimed_lie,
            "actually_lied": self.actually_lied,
            "detected_lies": list(self.detected_lies),
        }


@dataclass
class Player:
    """
    A seat in the game.

    `units` is derived (the sum of the player's stacks on the board) and is
    refreshed by the engine after every mutation. A player with 0 units
    stays in the list; the scheduler just skips it.
    """
    id: PlayerId
    name: str
    color: str
    start_position: GridPos
    quadrant: Quadrant
    units: int = 0
    diplomacy_history: List[DiplomaticRecord] = field(default_factory=list)

    # Fact-check bookkeeping
    lies: int = 0
    last_lie_turn: int = -10

    @classmethod
    def from_profile(cls, profile: PlayerProfile, units: int = 0) -> Player:
        return cls(
            id=profile.id,
            name=profile.name,
            color=profile.color,
            start_position=profile.start_position,
            quadrant=profile.quadrant,
            units=units,
        )

    @property
    def is_alive(self) -> bool:
        return self.units > 0

    def summary(self) -> Dict[str, Any]:
        """Public summary shared with every player."""
        return {
            "id": self.id.value,
            "name": self.name,
            "units": self.units,
            "isAlive": self.is_alive,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "color": self.color,
            "units": self.units,
            "start_position": list(self.start_position),
            "quadrant": self.quadrant.to_dict(),
            "lies": self.lies,
            "last_lie_turn": self.last_lie_turn,
            "diplomacy_history": [record.to_dict() for record in self.diplomacy_history],
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.id.value}): {self.units} units"
