"""
Per-turn decision items.

A turn decision consists of:
- Move: relocate part of a stack by one orthogonal step
- DiplomaticMessage: a free-text note addressed to another player

Both are ephemeral: supplied with a turn, discarded after execution.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .types import GridPos


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass; "true" is never a coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an int, got {type(value).__name__}")


@dataclass(frozen=True)
class Move:
    """
    Move `unit_count` units of the acting player from (from_x, from_y)
    to (to_x, to_y).

    Construction only checks field types. Bounds, adjacency and unit
    sufficiency depend on the board and are checked by the move validator,
    which drops bad moves instead of raising.
    """

    from_x: int
    from_y: int
    to_x: int
    to_y: int
    unit_count: int

    def __post_init__(self):
        for name in ("from_x", "from_y", "to_x", "to_y", "unit_count"):
            _require_int(name, getattr(self, name))

    @property
    def source(self) -> GridPos:
        return (self.from_x, self.from_y)

    @property
    def destination(self) -> GridPos:
        return (self.to_x, self.to_y)

    @property
    def distance(self) -> int:
        """Manhattan distance between source and destination."""
        return abs(self.to_x - self.from_x) + abs(self.to_y - self.from_y)

    def to_dict(self) -> Dict[str, int]:
        """Serialize using the wire field names of the decision record."""
        return {
            "fromX": self.from_x,
            "fromY": self.from_y,
            "toX": self.to_x,
            "toY": self.to_y,
            "unitCount": self.unit_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Move:
        """
        Create a move from a decision-record dictionary.

        Raises:
            ValueError: If a field is missing or not an integer
        """
        try:
            return cls(
                from_x=data["fromX"],
                from_y=data["fromY"],
                to_x=data["toX"],
                to_y=data["toY"],
                unit_count=data["unitCount"],
            )
        except KeyError as exc:
            raise ValueError(f"Move is missing field {exc.args[0]!r}") from None

    def __str__(self) -> str:
        return f"{self.unit_count} from {self.source} to {self.destination}"


@dataclass(frozen=True)
class DiplomaticMessage:
    """
    Outbound message for one recipient.

    `to` is kept as the raw recipient id so that an unknown recipient can be
    dropped by the ledger rather than rejected at parse time. `is_lie` is
    the sender's own claim, recorded next to the fact-checker's verdict.
    """

    to: str
    content: str
    is_lie: bool = False

    def __post_init__(self):
        for name in ("to", "content"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"'{name}' must be a str, got {type(value).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        return {"to": self.to, "content": self.content, "isLie": self.is_lie}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DiplomaticMessage:
        if "to" not in data or "content" not in data:
            raise ValueError("DiplomaticMessage requires 'to' and 'content'")
        return cls(
            to=str(data["to"]),
            content=data["content"],
            is_lie=bool(data.get("isLie", False)),
        )
