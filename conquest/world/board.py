"""
Board - canonical grid storage for the conquest game.

The Board owns the 100 cells and offers primitive mutations only
(set/add units, flip the one-way capture flags). It performs no rule
validation: callers (the mechanics resolvers) are trusted.

Each cell keeps its occupancy as a mapping keyed by player id, so a cell
can never hold two stacks of the same player. Dict insertion order is the
"encounter order" used when several defenders share a cell.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .grid import Grid
from ..core.types import GRID_SIZE, RESOURCE_CELLS, GridPos, PlayerId


@dataclass
class Cell:
    """
    A single board position.

    Attributes:
        units: Player -> positive stack size (no entry when the player has none)
        visible: Player -> whether the cell is observable this turn
        resource_cell: Fixed at construction for the four central cells
        depleted: One-way flag, set once the resource bonus was claimed
        base_captured: One-way flag, set once this home corner yielded its bonus
    """
    units: Dict[PlayerId, int] = field(default_factory=dict)
    visible: Dict[PlayerId, bool] = field(default_factory=dict)
    resource_cell: bool = False
    depleted: bool = False
    base_captured: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.units

    def occupants(self) -> List[PlayerId]:
        """Players with a stack here, in encounter order."""
        return list(self.units)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "units": {pid.value: count for pid, count in self.units.items()},
            "visible": {pid.value: flag for pid, flag in self.visible.items()},
            "resource_cell": self.resource_cell,
            "depleted": self.depleted,
            "base_captured": self.base_captured,
        }


class Board:
    """
    The 10x10 grid of cells.

    Cells are addressed as (x, y); storage is row-major (cells[y][x]).
    """

    def __init__(self, size: int = GRID_SIZE):
        self.grid = Grid(size, size)
        self._cells: List[List[Cell]] = [
            [Cell() for _ in range(size)] for _ in range(size)
        ]
        for x, y in RESOURCE_CELLS:
            if self.grid.in_bounds((x, y)):
                self._cells[y][x].resource_cell = True

    # ========================================================================
    # CELL ACCESS
    # ========================================================================

    def cell(self, x: int, y: int) -> Cell:
        """
        Get the cell at (x, y).

        Raises:
            IndexError: If the position is out of bounds
        """
        if not self.grid.in_bounds((x, y)):
            raise IndexError(f"Cell out of bounds: {(x, y)}")
        return self._cells[y][x]

    def cells(self) -> Iterator[Tuple[GridPos, Cell]]:
        """Iterate ((x, y), cell) row by row."""
        for pos in self.grid.positions():
            yield pos, self._cells[pos[1]][pos[0]]

    def occupied_cells(self) -> Iterator[Tuple[GridPos, Cell]]:
        """Iterate cells holding at least one stack."""
        for pos, cell in self.cells():
            if cell.units:
                yield pos, cell

    # ========================================================================
    # UNIT PRIMITIVES
    # ========================================================================

    def units_at(self, x: int, y: int, player_id: PlayerId) -> int:
        """Stack size of a player at (x, y); 0 when absent."""
        return self.cell(x, y).units.get(player_id, 0)

    def set_units(self, x: int, y: int, player_id: PlayerId, count: int) -> None:
        """
        Set a player's stack at (x, y). A count of 0 removes the entry.

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Unit count cannot be negative: {count}")
        units = self.cell(x, y).units
        if count == 0:
            units.pop(player_id, None)
        else:
            units[player_id] = count

    def add_units(self, x: int, y: int, player_id: PlayerId, delta: int) -> int:
        """Add (or with a negative delta, remove) units; returns the new count."""
        new_count = self.units_at(x, y, player_id) + delta
        self.set_units(x, y, player_id, new_count)
        return new_count

    def enemies_at(self, x: int, y: int, player_id: PlayerId) -> Dict[PlayerId, int]:
        """Stacks of every other player at (x, y), in encounter order."""
        return {pid: count for pid, count in self.cell(x, y).units.items() if pid != player_id}

    def total_units(self, player_id: PlayerId) -> int:
        """Sum of a player's stacks over the whole board."""
        return sum(cell.units.get(player_id, 0) for _, cell in self.cells())

    def positions_of(self, player_id: PlayerId) -> List[GridPos]:
        """Cells where the player has a stack."""
        return [pos for pos, cell in self.cells() if player_id in cell.units]

    # ========================================================================
    # FLAGS
    # ========================================================================

    def is_resource_cell(self, x: int, y: int) -> bool:
        return self.cell(x, y).resource_cell

    def mark_depleted(self, x: int, y: int) -> None:
        self.cell(x, y).depleted = True

    def mark_base_captured(self, x: int, y: int) -> None:
        self.cell(x, y).base_captured = True

    # ========================================================================
    # VISIBILITY STORAGE
    # ========================================================================

    def clear_visibility(self, player_ids: List[PlayerId]) -> None:
        for _, cell in self.cells():
            cell.visible = {pid: False for pid in player_ids}

    def set_visible(self, x: int, y: int, player_id: PlayerId) -> None:
        if self.grid.in_bounds((x, y)):
            self._cells[y][x].visible[player_id] = True

    def is_visible(self, x: int, y: int, player_id: PlayerId) -> bool:
        return self.cell(x, y).visible.get(player_id, False)

    # ========================================================================
    # UTILITY
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as a row-major list of cell dictionaries."""
        return {
            "size": self.grid.width,
            "cells": [[cell.to_dict() for cell in row] for row in self._cells],
        }

    def render(self, player_id: Optional[PlayerId] = None) -> str:
        """
        Plain-text board, one row per line.

        Each cell shows `.` when empty or `<initial><count>` for its first stack.
        With player_id, cells the player cannot see are shown as `?`.
        """
        lines = []
        for y in range(self.grid.height):
            row = []
            for x in range(self.grid.width):
                cell = self._cells[y][x]
                if player_id is not None and not cell.visible.get(player_id, False):
                    row.append("  ?")
                elif not cell.units:
                    row.append("  .")
                else:
                    pid, count = next(iter(cell.units.items()))
                    row.append(f"{pid.value[0].upper()}{count}".rjust(3))
            lines.append(" ".join(row))
        return "\n".join(lines)

    def __str__(self) -> str:
        occupied = sum(1 for _ in self.occupied_cells())
        return f"Board({self.grid.width}x{self.grid.height}, occupied={occupied})"
