"""
DiplomacyLedger - append-only record of diplomatic messages.

For every accepted message a SENT record goes to the sender's history and
a matching RECEIVED record to the recipient's, both with the same turn and
timestamp. Records are never changed or deleted. Delivery is only this
append: the recipient's agent reads its history on its next turn.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

from .fact_check import DiplomacyAnalyzer, FactCheck
from ..config import GameConfig
from ..core.moves import DiplomaticMessage
from ..core.types import PlayerId, RecordType, ValidationResult
from ..world.player import DiplomaticRecord, Player
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..world.world import WorldState

log = get_logger(__name__)


@dataclass
class DroppedMessage:
    """A message the ledger refused to record."""
    message: DiplomaticMessage
    validation: ValidationResult


@dataclass
class LedgerEntry:
    """A recorded message: the SENT record plus fact-check details."""
    record: DiplomaticRecord
    fact_check: Optional[FactCheck] = None
    lie_counted: bool = False


@dataclass
class LedgerReport:
    """Everything the ledger did for one turn."""
    entries: List[LedgerEntry] = field(default_factory=list)
    dropped: List[DroppedMessage] = field(default_factory=list)


class DiplomacyLedger:
    """
    Records a turn's outbound messages.

    Args:
        config: Rules (message cap, lie limits)
        analyzer: Optional fact-checker run on each message before recording
        clock: Timestamp source, seconds since the epoch
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        analyzer: Optional[DiplomacyAnalyzer] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config or GameConfig()
        self._analyzer = analyzer
        self._clock = clock

    def validate_message(
        self,
        world: WorldState,
        sender: PlayerId,
        message: DiplomaticMessage,
        recipients: Iterable[PlayerId] = (),
        accepted: int = 0,
    ) -> ValidationResult:
        """
        Check a message against the recipients already used this turn.

        Returns:
            ValidationResult; error codes as documented on ValidationResult
        """
        if accepted >= self._config.max_messages_per_turn:
            return ValidationResult.fail(
                "MESSAGE_LIMIT",
                f"Only {self._config.max_messages_per_turn} messages per turn"
            )

        recipient = world.find_player(message.to)
        if recipient is None:
            return ValidationResult.fail("UNKNOWN_RECIPIENT", f"No player named {message.to!r}")
        if recipient.id == sender:
            return ValidationResult.fail("SELF_RECIPIENT", f"{sender} cannot message itself")
        if recipient.id in set(recipients):
            return ValidationResult.fail(
                "DUPLICATE_RECIPIENT",
                f"{sender} already messaged {recipient.id} this turn"
            )
        return ValidationResult.success()

    def record(
        self,
        world: WorldState,
        sender_id: PlayerId,
        messages: Iterable[DiplomaticMessage],
    ) -> LedgerReport:
        """
        Record a turn's messages, dropping invalid ones individually.

        Args:
            world: Current world state (player histories modified in-place)
            sender_id: Player sending the messages
            messages: Outbound messages in decision order

        Returns:
            LedgerReport with recorded entries and dropped messages
        """
        report = LedgerReport()
        sender = world.get_player(sender_id)
        used: List[PlayerId] = []

        for message in messages:
            validation = self.validate_message(world, sender_id, message, used, len(report.entries))
            if not validation.valid:
                log.debug("Dropped message from %s: %s", sender_id, validation.message)
                report.dropped.append(DroppedMessage(message, validation))
                continue

            recipient = world.get_player(message.to)
            used.append(recipient.id)
            report.entries.append(self._append(world, sender, recipient, message))

        return report

    def _append(self, world: WorldState, sender: Player, recipient: Player, message: DiplomaticMessage) -> LedgerEntry:
        fact_check = None
        lie_counted = False
        if self._analyzer is not None:
            fact_check = self._analyzer.analyze(world, sender.id, recipient.id, message.content)
            if fact_check.is_lie:
                lie_counted = self._count_lie(world, sender)

        sent = DiplomaticRecord(
            turn=world.turn,
            sender=sender.id,
            recipient=recipient.id,
            content=message.content,
            timestamp=self._clock(),
            type=RecordType.SENT,
            claimed_lie=message.is_lie,
            actually_lied=bool(fact_check and fact_check.is_lie),
            detected_lies=tuple(fact_check.detected_lies) if fact_check else (),
        )
        received = replace(sent, type=RecordType.RECEIVED)
        sender.diplomacy_history.append(sent)
        recipient.diplomacy_history.append(received)
        return LedgerEntry(record=sent, fact_check=fact_check, lie_counted=lie_counted)

    def can_lie(self, world: WorldState, player: Player) -> bool:
        """True if another detected lie would still be counted for this player."""
        return (player.lies < self._config.max_lies
                and world.turn - player.last_lie_turn >= self._config.lie_cooldown_turns)

    def _count_lie(self, world: WorldState, player: Player) -> bool:
        if not self.can_lie(world, player):
            return False
        player.lies += 1
        player.last_lie_turn = world.turn
        return True
