"""
Grid - Spatial logic for the conquest board.

The Grid handles:
- Coordinate validation
- Distance calculations
- Neighbor enumeration

Coordinate System:
- X increases to the RIGHT (column)
- Y increases DOWNWARD (row)
- Origin (0, 0) is at TOP-LEFT
"""

from __future__ import annotations
from typing import Iterator, List

from ..core.types import GridPos


class Grid:
    """
    A 2D grid of fixed size.

    Provides spatial queries without game logic or state.

    Attributes:
        width: Grid width (X dimension)
        height: Grid height (Y dimension)
    """

    def __init__(self, width: int, height: int):
        """
        Initialize a grid.

        Args:
            width: Grid width (must be positive)
            height: Grid height (must be positive)

        Raises:
            ValueError: If dimensions are invalid
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {width}x{height}")

        self.width = width
        self.height = height

    def in_bounds(self, pos: GridPos) -> bool:
        """
        Check if a position is within grid boundaries.

        Args:
            pos: Position to check (x, y)

        Returns:
            True if position is valid, False otherwise
        """
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def manhattan_distance(self, a: GridPos, b: GridPos) -> int:
        """
        Calculate Manhattan (taxicab) distance between two positions.

        Args:
            a: First position (x, y)
            b: Second position (x, y)

        Returns:
            Manhattan distance as an integer
        """
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def is_adjacent(self, a: GridPos, b: GridPos) -> bool:
        """True if b is exactly one horizontal or vertical step from a."""
        return self.manhattan_distance(a, b) == 1

    def get_neighbors(self, pos: GridPos) -> List[GridPos]:
        """
        Get the in-bounds orthogonal neighbors of a position.

        Args:
            pos: Center position

        Returns:
            List of up to 4 neighboring positions
        """
        x, y = pos

        candidates = [
            (x, y - 1),  # UP
            (x, y + 1),  # DOWN
            (x - 1, y),  # LEFT
            (x + 1, y),  # RIGHT
        ]

        return [p for p in candidates if self.in_bounds(p)]

    def positions(self) -> Iterator[GridPos]:
        """Iterate all positions row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def __str__(self) -> str:
        """String representation."""
        return f"Grid({self.width}x{self.height})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(width={self.width}, height={self.height})"
