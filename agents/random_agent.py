"""
Random agent implementation for testing and as the decision fallback.

This agent moves random slices of its stacks to random adjacent cells.
"""

import random
from typing import Any, Dict, List, Optional

from conquest.core.types import GRID_SIZE, PlayerId
from runtime.decision import DecisionModel, MoveModel
from .base_agent import BaseAgent
from .registry import register_agent

DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))


@register_agent("random")
class RandomAgent(BaseAgent):
    """
    Agent that takes random moves.

    Decision process:
    - For each friendly stack, with probability move_probability, send
      between 1 and all of its units to a random in-bounds neighbor.
    - Never sends diplomacy.

    This serves as a baseline and as a stand-in when a smarter decision
    source fails.
    """

    def __init__(
        self,
        player_id: PlayerId,
        name: str = None,
        move_probability: float = 0.5,
        max_moves: Optional[int] = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Args:
            player_id: Player to control
            name: Agent name (default: "RandomAgent")
            move_probability: Chance that a given stack moves this turn
            max_moves: Cap on moves per turn (None = one per stack)
            seed: Random seed for reproducibility (None = random)
        """
        super().__init__(player_id, name)
        if not 0.0 <= move_probability <= 1.0:
            raise ValueError("move_probability must be between 0 and 1")
        self.move_probability = move_probability
        self.max_moves = max_moves
        self.rng = random.Random(seed)

    def decide(self, view: Dict[str, Any]) -> DecisionModel:
        moves: List[MoveModel] = []

        for stack in view.get("myPositions", []):
            if self.max_moves is not None and len(moves) >= self.max_moves:
                break
            if stack["count"] <= 0 or self.rng.random() >= self.move_probability:
                continue
            x, y = stack["x"], stack["y"]
            targets = [
                (x + dx, y + dy) for dx, dy in DIRECTIONS
                if 0 <= x + dx < GRID_SIZE and 0 <= y + dy < GRID_SIZE
            ]
            to_x, to_y = self.rng.choice(targets)
            moves.append(MoveModel(
                from_x=x, from_y=y, to_x=to_x, to_y=to_y,
                unit_count=self.rng.randint(1, stack["count"]),
            ))

        return DecisionModel(moves=moves, reasoning=f"random: {len(moves)} move(s)")
