"""
VisibilitySystem - fog-of-war computation.

Visibility is a full recompute on every call, never incremental:
1. Clear every flag for every player
2. Resource cells become visible to everyone (their status is public)
3. Each occupied cell and its orthogonal neighbors become visible to the
   owners of the stacks on it

A cell that was visible last turn turns back into fog as soon as no
friendly stack remains on it or next to it.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from infra.logger import get_logger

if TYPE_CHECKING:
    from ..world.world import WorldState

log = get_logger(__name__)


class VisibilitySystem:
    """Stateless visibility resolver."""

    def refresh(self, world: WorldState) -> None:
        """
        Recompute every player's visibility from current occupancy.

        Args:
            world: World state (board visibility flags modified in-place)
        """
        board = world.board
        player_ids = world.player_ids()

        board.clear_visibility(player_ids)

        for pos, cell in board.cells():
            if cell.resource_cell:
                for pid in player_ids:
                    board.set_visible(pos[0], pos[1], pid)

        for pos, cell in board.occupied_cells():
            for pid in cell.units:
                board.set_visible(pos[0], pos[1], pid)
                for nx, ny in board.grid.get_neighbors(pos):
                    board.set_visible(nx, ny, pid)

        log.debug("Visibility refreshed for %d players", len(player_ids))
