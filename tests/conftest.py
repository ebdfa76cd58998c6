from pathlib import Path
import os
import sys

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep test runs from writing log files into storage/.
os.environ.setdefault("CONQUEST_LOG_FILE", "none")

import pytest

from conquest import ConquestEngine, GameConfig
from conquest.core.types import PlayerId
from conquest.mechanics import VisibilitySystem
from conquest.world import WorldState


def clear_board(world: WorldState) -> None:
    for _, cell in world.board.cells():
        cell.units.clear()
    world.refresh_unit_totals()


@pytest.fixture
def world():
    w = WorldState()
    VisibilitySystem().refresh(w)
    return w


@pytest.fixture
def empty_world():
    """World with no units on the board; tests place what they need."""
    w = WorldState()
    clear_board(w)
    return w


@pytest.fixture
def place():
    """place(world, x, y, player, count) puts a stack down and refreshes derived state."""
    def _place(world: WorldState, x: int, y: int, player, count: int) -> None:
        world.board.set_units(x, y, PlayerId.parse(player), count)
        world.refresh_unit_totals()
        VisibilitySystem().refresh(world)
    return _place


@pytest.fixture
def engine():
    e = ConquestEngine(clock=lambda: 1000.0)
    e.start()
    return e


@pytest.fixture
def make_engine():
    def _make(started: bool = True, clear: bool = False, **config) -> ConquestEngine:
        e = ConquestEngine(GameConfig(**config), clock=lambda: 1000.0)
        if clear:
            clear_board(e.world)
        if started:
            e.start()
        return e
    return _make
