"""
Diplomacy fact-checking.

An optional analyzer that compares factual claims in a diplomatic message
with the true game state. It reads the world but never changes the board
or unit totals; the only bookkeeping it drives is the sender's lie counter
(see DiplomacyLedger).

Recognised claims (English, case-insensitive):
- "I have 12 units"                 -> compared with the sender's total
- "(3,4) is empty" / "(3,4) has units" -> checked only if the recipient
                                       can see that cell
- "I am destroyed"                  -> false while the sender has units
- any count above IMPOSSIBLE_UNITS  -> impossible on this board
"""

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from ..core.types import PlayerId

if TYPE_CHECKING:
    from ..world.world import WorldState

IMPOSSIBLE_UNITS = 50

_UNIT_WORDS = r"(?:units?|troops|divisions?|soldiers)"

OWN_COUNT_CLAIM = re.compile(rf"\bI\s+(?:have|own|command)\s+(\d+)\s+{_UNIT_WORDS}\b", re.IGNORECASE)
POSITION_CLAIM = re.compile(
    r"\(\s*(\d)\s*,\s*(\d)\s*\)\s+(?:is\s+)?(empty|clear|occupied|has\s+(?:units|troops|divisions))",
    re.IGNORECASE,
)
ELIMINATED_CLAIM = re.compile(
    r"\bI(?:'m|\s+am|\s+was|\s+have\s+been)\s+(?:destroyed|eliminated|dead|defeated|wiped\s+out)\b",
    re.IGNORECASE,
)
LARGE_COUNT_CLAIM = re.compile(rf"\b(\d{{2,}})\s+{_UNIT_WORDS}\b", re.IGNORECASE)


@dataclass
class FactCheck:
    """Verdict on one message."""
    is_lie: bool = False
    detected_lies: List[str] = field(default_factory=list)


class DiplomacyAnalyzer(ABC):
    """Pluggable message analyzer used by the DiplomacyLedger."""

    @abstractmethod
    def analyze(self, world: WorldState, sender: PlayerId, recipient: PlayerId, content: str) -> FactCheck:
        """Inspect a message before it is recorded."""


class ClaimFactChecker(DiplomacyAnalyzer):
    """Regex-based checker for the claims listed in the module docstring."""

    def analyze(self, world: WorldState, sender: PlayerId, recipient: PlayerId, content: str) -> FactCheck:
        detected: List[str] = []
        sender_units = world.get_player(sender).units

        match = OWN_COUNT_CLAIM.search(content)
        if match:
            claimed = int(match.group(1))
            if claimed != sender_units:
                detected.append(f"Claimed {claimed} units but has {sender_units}")

        match = POSITION_CLAIM.search(content)
        if match:
            x, y = int(match.group(1)), int(match.group(2))
            if world.board.grid.in_bounds((x, y)) and world.board.is_visible(x, y, recipient):
                occupied = not world.board.cell(x, y).is_empty
                claims_units = match.group(3).lower() not in ("empty", "clear")
                if claims_units and not occupied:
                    detected.append(f"Claimed units at ({x},{y}) but the cell is empty")
                elif not claims_units and occupied:
                    detected.append(f"Claimed ({x},{y}) is empty but it holds units")

        if ELIMINATED_CLAIM.search(content) and sender_units > 0:
            detected.append(f"Claimed to be destroyed but has {sender_units} units")

        match = LARGE_COUNT_CLAIM.search(content)
        if match and int(match.group(1)) > IMPOSSIBLE_UNITS:
            detected.append(f"Claimed {match.group(1)} units, which is impossible")

        return FactCheck(is_lie=bool(detected), detected_lies=detected)
