"""
Decision records - the payload an agent hands to the engine each turn.

Agents (LLM-backed or not) produce loosely-shaped JSON. This module is the
consumer that turns it into engine input:

- moves: list of {fromX, fromY, toX, toY, unitCount}; malformed entries
  are dropped one by one, never the whole decision
- diplomacy: list of {to, content, isLie?} or a single such object;
  content is cut to MAX_MESSAGE_LENGTH; messages to unknown players or to
  the sender are skipped before the MAX_MESSAGES cap, and a recipient
  appears at most once
- reasoning: free text kept for logging only
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from conquest.core.moves import DiplomaticMessage, Move
from conquest.core.types import PlayerId
from infra.logger import get_logger

log = get_logger(__name__)

MAX_MESSAGE_LENGTH = 1000
MAX_MESSAGES = 2
KNOWN_RECIPIENTS = frozenset(pid.value for pid in PlayerId)


class MoveModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_x: int = Field(alias="fromX")
    from_y: int = Field(alias="fromY")
    to_x: int = Field(alias="toX")
    to_y: int = Field(alias="toY")
    unit_count: int = Field(alias="unitCount")

    def to_move(self) -> Move:
        return Move(self.from_x, self.from_y, self.to_x, self.to_y, self.unit_count)


class MessageModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    to: str
    content: str
    is_lie: bool = Field(default=False, alias="isLie")

    @field_validator("to")
    @classmethod
    def _normalize_recipient(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("recipient must not be empty")
        return value

    @field_validator("content")
    @classmethod
    def _truncate(cls, value: str) -> str:
        return value[:MAX_MESSAGE_LENGTH]

    def to_message(self) -> DiplomaticMessage:
        return DiplomaticMessage(to=self.to, content=self.content, is_lie=self.is_lie)


class DecisionModel(BaseModel):
    """One finalized decision for one player-turn."""

    moves: List[MoveModel] = Field(default_factory=list)
    diplomacy: List[MessageModel] = Field(default_factory=list)
    reasoning: str = ""

    @classmethod
    def parse(cls, payload: Any, sender: Optional[str] = None) -> DecisionModel:
        """
        Build a decision from an untrusted payload.

        Never raises for bad content: unusable moves and messages are
        dropped and logged, and a non-dict payload becomes a pass.
        """
        if isinstance(payload, DecisionModel):
            return payload
        if not isinstance(payload, dict):
            log.warning("Decision payload is %s, treating as pass", type(payload).__name__)
            return cls()

        moves = _parse_items(payload.get("moves"), MoveModel, "move")

        raw_diplomacy = payload.get("diplomacy")
        if isinstance(raw_diplomacy, dict):
            raw_diplomacy = [raw_diplomacy]
        messages = _parse_items(raw_diplomacy, MessageModel, "message")

        reasoning = payload.get("reasoning", "")
        return cls(
            moves=moves,
            diplomacy=_limit_messages(messages, sender),
            reasoning=reasoning if isinstance(reasoning, str) else str(reasoning),
        )

    def to_engine_input(self, sender: Optional[str] = None) -> Tuple[List[Move], List[DiplomaticMessage]]:
        """Convert to the (moves, diplomacy) arguments of submit_turn()."""
        moves: List[Move] = []
        for model in self.moves:
            try:
                moves.append(model.to_move())
            except ValueError as exc:
                log.debug("Dropping move %s: %s", model, exc)
        return moves, [m.to_message() for m in _limit_messages(self.diplomacy, sender)]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @property
    def is_pass(self) -> bool:
        return not self.moves


def _parse_items(raw: Any, model: type, label: str) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        log.debug("Ignoring non-list %s field: %r", label, raw)
        return []
    parsed = []
    for item in raw:
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as exc:
            log.debug("Dropping malformed %s %r: %s", label, item, exc.errors())
    return parsed


def _limit_messages(messages: List[MessageModel], sender: Optional[str] = None) -> List[MessageModel]:
    kept: List[MessageModel] = []
    seen: set[str] = set()
    for message in messages:
        if message.to in seen or message.to not in KNOWN_RECIPIENTS:
            continue
        if sender is not None and message.to == sender.lower():
            continue
        if len(kept) >= MAX_MESSAGES:
            break
        seen.add(message.to)
        kept.append(message)
    return kept


def pass_decision(reasoning: Optional[str] = None) -> DecisionModel:
    return DecisionModel(reasoning=reasoning or "pass")
