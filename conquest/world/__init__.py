"""
World state management for the Grid Conquest Engine.

This module provides:
- Grid: Spatial logic and geometry
- Board / Cell: Canonical unit storage
- Player / DiplomaticRecord: Seats and their diplomacy logs
- PlayerView: Per-player fog-of-war view
- WorldState: Central game state container
"""

from .grid import Grid
from .board import Board, Cell
from .player import Player, DiplomaticRecord
from .player_view import PlayerView
from .world import WorldState

__all__ = [
    "Grid",
    "Board",
    "Cell",
    "Player",
    "DiplomaticRecord",
    "PlayerView",
    "WorldState",
]
