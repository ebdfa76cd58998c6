"""
Core type definitions for the Grid Conquest Engine.

This module contains all fundamental types, enums, and constants used
throughout the system. No logic, just pure data structures.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (x, y) where:
# - X increases to the RIGHT (column)
# - Y increases DOWNWARD (row)
# - Origin (0, 0) is at TOP-LEFT
GridPos = Tuple[int, int]

GRID_SIZE = 10

# The four central cells, each granting a one-time bonus to the first visitor.
RESOURCE_CELLS: Tuple[GridPos, ...] = ((4, 4), (4, 5), (5, 4), (5, 5))


# ============================================================================
# PLAYERS
# ============================================================================

class PlayerId(Enum):
    """The four fixed player identifiers, in rotation order."""
    BLUE = "blue"
    YELLOW = "yellow"
    GRAY = "gray"
    GREEN = "green"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | PlayerId) -> PlayerId:
        """
        Resolve a player id from its enum or wire value.

        Raises:
            ValueError: If the value names no player
        """
        if isinstance(value, PlayerId):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown player id: {value!r}") from None


@dataclass(frozen=True)
class Quadrant:
    """Home region of a player (inclusive bounds). Cosmetic only."""
    start_x: int
    start_y: int
    end_x: int
    end_y: int

    def contains(self, pos: GridPos) -> bool:
        x, y = pos
        return self.start_x <= x <= self.end_x and self.start_y <= y <= self.end_y

    def to_dict(self) -> Dict[str, int]:
        return {
            "start_x": self.start_x,
            "start_y": self.start_y,
            "end_x": self.end_x,
            "end_y": self.end_y,
        }


@dataclass(frozen=True)
class PlayerProfile:
    """Static description of a seat at the table."""
    id: PlayerId
    name: str
    color: str
    start_position: GridPos
    quadrant: Quadrant


PLAYER_PROFILES: Tuple[PlayerProfile, ...] = (
    PlayerProfile(PlayerId.BLUE, "Blue", "#4285f4", (0, 0), Quadrant(0, 0, 4, 4)),
    PlayerProfile(PlayerId.YELLOW, "Yellow", "#ffd700", (9, 0), Quadrant(5, 0, 9, 4)),
    PlayerProfile(PlayerId.GRAY, "Gray", "#6c757d", (0, 9), Quadrant(0, 5, 4, 9)),
    PlayerProfile(PlayerId.GREEN, "Green", "#34a853", (9, 9), Quadrant(5, 5, 9, 9)),
)

# Home corner -> owner, used by base capture.
HOME_CORNERS: Dict[GridPos, PlayerId] = {
    profile.start_position: profile.id for profile in PLAYER_PROFILES
}


# ============================================================================
# GAME STATE
# ============================================================================

class GameState(Enum):
    """Lifecycle of a game."""
    WAITING = "waiting"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value


class GameResult(Enum):
    """Possible game outcomes."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


class RecordType(Enum):
    """Direction of a diplomatic record relative to its owner."""
    SENT = "sent"
    RECEIVED = "received"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# VALIDATION
# ============================================================================

@dataclass
class ValidationResult:
    """
    Structured result of validating a move or a diplomatic message.

    Attributes:
        valid: Whether the item is valid
        error_code: Machine-readable error code (None if valid)
        message: Human-readable message explaining the result

    Error codes:
        - "OUT_OF_BOUNDS": A coordinate is outside the grid
        - "NOT_ADJACENT": Source and destination are not one orthogonal step apart
        - "INVALID_COUNT": Unit count is not a positive integer
        - "NO_UNITS": The acting player has no stack at the source
        - "INSUFFICIENT_UNITS": The stack at the source is too small
        - "UNKNOWN_RECIPIENT": Message addressed to no known player
        - "SELF_RECIPIENT": Message addressed to the sender
        - "DUPLICATE_RECIPIENT": Second message to the same recipient this turn
        - "MESSAGE_LIMIT": More messages than allowed in one turn
    """
    valid: bool
    error_code: str | None = None
    message: str = ""

    @staticmethod
    def success(message: str = "") -> ValidationResult:
        """Create a validation success result."""
        return ValidationResult(valid=True, error_code=None, message=message)

    @staticmethod
    def fail(error_code: str, message: str) -> ValidationResult:
        """Create a validation failure result."""
        return ValidationResult(valid=False, error_code=error_code, message=message)
