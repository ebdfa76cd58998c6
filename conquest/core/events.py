"""
Game events for observers and log rendering.

Events describe what happened while the engine processed a control call or
a turn. They carry plain JSON-friendly payloads so any observer (logger,
UI, recorder) can consume them without touching engine objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .types import GridPos


@dataclass(frozen=True)
class GameEvent:
    """Base event. All events have a type, the turn it happened on, and a payload."""
    type: str
    turn: int
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "turn": self.turn, "payload": dict(self.payload)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameEvent:
        return cls(type=data["type"], turn=data.get("turn", 0), payload=data.get("payload", {}))


# ===== Event Type Constants =====

# Lifecycle events
GAME_STARTED = "game_started"
GAME_PAUSED = "game_paused"
GAME_RESUMED = "game_resumed"
GAME_RESET = "game_reset"
GAME_ENDED = "game_ended"

# Turn events
TURN_REJECTED = "turn_rejected"
TURN_ADVANCED = "turn_advanced"

# Movement and combat events
MOVE_REJECTED = "move_rejected"
MOVE_EXECUTED = "move_executed"
BATTLE_RESOLVED = "battle_resolved"
PLAYER_ELIMINATED = "player_eliminated"

# Capture events
RESOURCE_CAPTURED = "resource_captured"
BASE_CAPTURED = "base_captured"

# Diplomacy events
MESSAGE_SENT = "message_sent"
MESSAGE_DROPPED = "message_dropped"
LIE_DETECTED = "lie_detected"


def _pos(pos: GridPos) -> List[int]:
    return [pos[0], pos[1]]


# ===== Event Factory Functions =====

def game_started(turn: int, first_player: str) -> GameEvent:
    return GameEvent(GAME_STARTED, turn, {"first_player": first_player})


def game_paused(turn: int) -> GameEvent:
    return GameEvent(GAME_PAUSED, turn)


def game_resumed(turn: int) -> GameEvent:
    return GameEvent(GAME_RESUMED, turn)


def game_reset() -> GameEvent:
    return GameEvent(GAME_RESET, 0)


def game_ended(turn: int, result: str, winner: Optional[str], reason: str) -> GameEvent:
    return GameEvent(GAME_ENDED, turn, {
        "result": result,
        "winner": winner,
        "reason": reason,
    })


def turn_rejected(turn: int, player: str, error_code: str, reason: str) -> GameEvent:
    return GameEvent(TURN_REJECTED, turn, {
        "player": player,
        "error_code": error_code,
        "reason": reason,
    })


def turn_advanced(turn: int, previous_player: str, next_player: str, skipped: List[str]) -> GameEvent:
    return GameEvent(TURN_ADVANCED, turn, {
        "previous_player": previous_player,
        "next_player": next_player,
        "skipped": skipped,  # dead players passed over by the rotation
    })


def move_rejected(turn: int, player: str, move: Dict[str, int], error_code: str, reason: str) -> GameEvent:
    return GameEvent(MOVE_REJECTED, turn, {
        "player": player,
        "move": move,
        "error_code": error_code,
        "reason": reason,
    })


def move_executed(
    turn: int,
    player: str,
    source: GridPos,
    destination: GridPos,
    unit_count: int,
    battle: bool,
) -> GameEvent:
    return GameEvent(MOVE_EXECUTED, turn, {
        "player": player,
        "from": _pos(source),
        "to": _pos(destination),
        "unit_count": unit_count,
        "battle": battle,
    })


def battle_resolved(
    turn: int,
    pos: GridPos,
    attacker: str,
    attacker_units: int,
    defenders: Dict[str, int],
    defender_losses: Dict[str, int],
    survivors: int,
) -> GameEvent:
    """
    Emit a battle outcome.

    defenders maps each defending player to the stack it held before the
    battle; defender_losses maps it to the units it lost. survivors is the
    attacker strength left standing on the cell.
    """
    return GameEvent(BATTLE_RESOLVED, turn, {
        "pos": _pos(pos),
        "attacker": attacker,
        "attacker_units": attacker_units,
        "defenders": defenders,
        "defender_losses": defender_losses,
        "survivors": survivors,
    })


def player_eliminated(turn: int, player: str) -> GameEvent:
    return GameEvent(PLAYER_ELIMINATED, turn, {"player": player})


def resource_captured(turn: int, player: str, pos: GridPos, home: GridPos, bonus: int) -> GameEvent:
    return GameEvent(RESOURCE_CAPTURED, turn, {
        "player": player,
        "pos": _pos(pos),
        "home": _pos(home),
        "bonus": bonus,
    })


def base_captured(
    turn: int,
    player: str,
    base_owner: str,
    pos: GridPos,
    home: GridPos,
    bonus: int,
) -> GameEvent:
    return GameEvent(BASE_CAPTURED, turn, {
        "player": player,
        "base_owner": base_owner,
        "pos": _pos(pos),
        "home": _pos(home),
        "bonus": bonus,
    })


def message_sent(turn: int, sender: str, recipient: str, content: str) -> GameEvent:
    return GameEvent(MESSAGE_SENT, turn, {
        "from": sender,
        "to": recipient,
        "content": content,
    })


def message_dropped(turn: int, sender: str, recipient: str, error_code: str, reason: str) -> GameEvent:
    return GameEvent(MESSAGE_DROPPED, turn, {
        "from": sender,
        "to": recipient,
        "error_code": error_code,
        "reason": reason,
    })


def lie_detected(turn: int, sender: str, recipient: str, detected_lies: List[str], counted: bool) -> GameEvent:
    return GameEvent(LIE_DETECTED, turn, {
        "from": sender,
        "to": recipient,
        "detected_lies": detected_lies,
        "counted": counted,  # False when the sender is still in lie cooldown
    })
