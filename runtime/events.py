"""
Event observers for the runtime layer.

The engine pushes structured GameEvents; these observers turn them into
log lines or keep them for later inspection. None of them touch the engine.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from conquest.core import events as ev
from conquest.core.events import GameEvent
from infra.logger import get_logger

log = get_logger(__name__)

# Lifecycle and outcome events are INFO; per-move detail is DEBUG.
INFO_EVENTS = {
    ev.GAME_STARTED,
    ev.GAME_PAUSED,
    ev.GAME_RESUMED,
    ev.GAME_RESET,
    ev.GAME_ENDED,
    ev.PLAYER_ELIMINATED,
    ev.BASE_CAPTURED,
    ev.RESOURCE_CAPTURED,
    ev.LIE_DETECTED,
}
WARNING_EVENTS = {ev.TURN_REJECTED}


def describe(event: GameEvent) -> str:
    """One-line human rendering of an event."""
    p = event.payload
    formatters: Dict[str, Callable[[Dict[str, Any]], str]] = {
        ev.GAME_STARTED: lambda p: f"game started, {p['first_player']} moves first",
        ev.GAME_ENDED: lambda p: f"game ended: {p['result']} ({p['reason']}), winner={p['winner']}",
        ev.TURN_ADVANCED: lambda p: f"{p['previous_player']} -> {p['next_player']}",
        ev.MOVE_EXECUTED: lambda p: (
            f"{p['player']} moved {p['unit_count']} {p['from']} -> {p['to']}"
        ),
        ev.MOVE_REJECTED: lambda p: f"{p['player']} move rejected [{p['error_code']}]: {p['reason']}",
        ev.BATTLE_RESOLVED: lambda p: (
            f"battle at {p['pos']}: {p['attacker']} x{p['attacker_units']} vs {p['defenders']}, "
            f"survivors {p['survivors']}"
        ),
        ev.PLAYER_ELIMINATED: lambda p: f"{p['player']} eliminated",
        ev.BASE_CAPTURED: lambda p: f"{p['player']} captured {p['base_owner']}'s base (+{p['bonus']})",
        ev.RESOURCE_CAPTURED: lambda p: f"{p['player']} captured resource {p['pos']} (+{p['bonus']})",
        ev.MESSAGE_SENT: lambda p: f"{p['from']} -> {p['to']}: {p['content'][:80]}",
        ev.MESSAGE_DROPPED: lambda p: f"{p['from']} message to {p['to']} dropped [{p['error_code']}]",
        ev.LIE_DETECTED: lambda p: f"{p['from']} lied to {p['to']}: {p['detected_lies']}",
        ev.TURN_REJECTED: lambda p: f"turn rejected for {p['player']} [{p['error_code']}]",
    }
    formatter = formatters.get(event.type)
    body = formatter(p) if formatter else str(p)
    return f"[turn {event.turn}] {event.type}: {body}"


class EventLogger:
    """Observer that renders every event to the log."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or log

    def __call__(self, event: GameEvent) -> None:
        if event.type in WARNING_EVENTS:
            level = logging.WARNING
        elif event.type in INFO_EVENTS:
            level = logging.INFO
        else:
            level = logging.DEBUG
        self.log.log(level, "%s", describe(event))


class EventCollector:
    """Observer that keeps every event in memory, newest last."""

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self.events: List[GameEvent] = []

    def __call__(self, event: GameEvent) -> None:
        self.events.append(event)
        if self.limit is not None and len(self.events) > self.limit:
            del self.events[: len(self.events) - self.limit]

    def of_type(self, event_type: str) -> List[GameEvent]:
        return [e for e in self.events if e.type == event_type]

    def clear(self) -> None:
        self.events.clear()
