"""
Grid Conquest Engine.

A four-player conquest game on a 10x10 grid with fog of war, stack
battles, resource and base captures and player-to-player diplomacy.

Package layout:
- core: Types, moves, messages and events
- world: Board, players, fog-filtered views and the world state
- mechanics: Stateless rule resolvers
- engine: ConquestEngine, the public facade
"""

from .config import GameConfig
from .core import (
    DiplomaticMessage,
    GameEvent,
    GameResult,
    GameState,
    Move,
    PlayerId,
    ValidationResult,
)
from .engine import ConquestEngine, TurnResult

__all__ = [
    "ConquestEngine",
    "TurnResult",
    "GameConfig",
    "GameEvent",
    "GameResult",
    "GameState",
    "Move",
    "DiplomaticMessage",
    "PlayerId",
    "ValidationResult",
]
