"""
Rule configuration for a conquest game.

Change the defaults here to tune the rules; a GameConfig can also be
built from a plain dict (e.g. the body of an API request).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable rules.

    Attributes:
        starting_units: Stack placed on each home corner at setup
        resource_bonus: Units granted by the first entry into a resource cell
        base_capture_bonus: Units granted by the first capture of an enemy home corner
        max_messages_per_turn: Diplomatic messages recorded per turn
        max_turns: Optional turn cap; reaching it ends the game in a draw
        resource_bonus_requires_survivor: When True, a mover destroyed on a
            resource cell gets no bonus. Default grants the bonus to whoever
            enters first, regardless of the battle outcome.
        fact_check: Run the diplomacy fact-checker on every recorded message
        max_lies: Detected lies counted against a player
        lie_cooldown_turns: Turns that must pass between two counted lies
    """
    starting_units: int = 10
    resource_bonus: int = 1
    base_capture_bonus: int = 10
    max_messages_per_turn: int = 2
    max_turns: Optional[int] = None
    resource_bonus_requires_survivor: bool = False
    fact_check: bool = True
    max_lies: int = 1
    lie_cooldown_turns: int = 10

    def __post_init__(self):
        for name in ("starting_units", "resource_bonus", "base_capture_bonus"):
            if getattr(self, name) <= 0:
                raise ValueError(f"'{name}' must be positive, got {getattr(self, name)}")
        if self.max_messages_per_turn < 0:
            raise ValueError("'max_messages_per_turn' cannot be negative")
        if self.max_turns is not None and self.max_turns <= 0:
            raise ValueError("'max_turns' must be positive or None")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> GameConfig:
        """
        Build a config from a dict; missing keys take their defaults.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)
