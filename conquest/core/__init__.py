"""
Core types and constants for the Grid Conquest Engine.
"""

# Instead of from conquest.core.types import GridPos, you can do: from conquest.core import GridPos
from .types import (
    GridPos,
    GRID_SIZE,
    RESOURCE_CELLS,
    HOME_CORNERS,
    PLAYER_PROFILES,
    PlayerId,
    PlayerProfile,
    Quadrant,
    GameState,
    GameResult,
    RecordType,
    ValidationResult,
)
from .moves import Move, DiplomaticMessage
from .events import GameEvent


__all__ = [
    "GridPos",
    "GRID_SIZE",
    "RESOURCE_CELLS",
    "HOME_CORNERS",
    "PLAYER_PROFILES",
    "PlayerId",
    "PlayerProfile",
    "Quadrant",
    "GameState",
    "GameResult",
    "RecordType",
    "ValidationResult",
    "Move",
    "DiplomaticMessage",
    "GameEvent",
]
