"""
PlayerView - Per-player fog-of-war view of the board.

Each player only sees cells occupied by its own stacks and their orthogonal
neighbors, plus the four resource cells, which are public knowledge. The
visibility flags themselves live on the board cells and are recomputed by
the VisibilitySystem; PlayerView is the read-only filter built on top of
them for agents and UIs.
"""

from __future__ import annotations
from typing import Any, Dict, List, Set

from .board import Board
from ..core.types import GridPos, PlayerId


class PlayerView:
    """
    Filtered board as seen by one player.

    Attributes:
        player_id: The observing player
    """

    def __init__(self, board: Board, player_id: PlayerId):
        self.player_id = player_id
        self._board = board

    def can_see(self, pos: GridPos) -> bool:
        return self._board.is_visible(pos[0], pos[1], self.player_id)

    def visible_positions(self) -> Set[GridPos]:
        return {pos for pos, cell in self._board.cells() if cell.visible.get(self.player_id, False)}

    def friendly_positions(self) -> List[GridPos]:
        return self._board.positions_of(self.player_id)

    def visible_board(self) -> List[List[Dict[str, Any]]]:
        """
        Row-major board where hidden cells carry no unit information.

        Resource cells always report their resource and depletion status,
        whatever their visibility.
        """
        rows: List[List[Dict[str, Any]]] = []
        for y in range(self._board.grid.height):
            row = []
            for x in range(self._board.grid.width):
                cell = self._board.cell(x, y)
                visible = cell.visible.get(self.player_id, False)
                entry: Dict[str, Any] = {
                    "visible": visible,
                    "units": [
                        {"player": pid.value, "count": count}
                        for pid, count in cell.units.items()
                    ] if visible else [],
                }
                if cell.resource_cell:
                    entry["resourceCell"] = True
                    entry["depleted"] = cell.depleted
                row.append(entry)
            rows.append(row)
        return rows

    def resource_status(self) -> List[Dict[str, Any]]:
        """Public status of every resource cell."""
        return [
            {"x": pos[0], "y": pos[1], "depleted": cell.depleted}
            for pos, cell in self._board.cells()
            if cell.resource_cell
        ]

    def __len__(self) -> int:
        """Number of visible cells."""
        return len(self.visible_positions())

    def __str__(self) -> str:
        return f"PlayerView({self.player_id.value}: {len(self)} cells visible)"
