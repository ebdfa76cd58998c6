"""
ConquestEngine - Main engine interface.

This is the primary API of the Grid Conquest Engine. An external driver
feeds it one finalized decision per player-turn and reads back results,
events and snapshots.

Usage:
    from conquest import ConquestEngine, Move

    engine = ConquestEngine()
    engine.start()

    while engine.game_state is not GameState.FINISHED:
        player = engine.current_player
        view = engine.state_for_player(player.id)
        moves, messages = decide(view)  # Your AI here
        result = engine.submit_turn(player.id, moves, messages)

    print(f"Winner: {engine.winner}")

Turn processing order:
1. Reject the call if the game is not running or it is not the caller's turn
2. Filter the move list (invalid moves are dropped, never fatal)
3. For each valid move: leave source, battle or merge, capture bonuses,
   recompute visibility
4. Record diplomacy
5. Check termination
6. Advance the rotation to the next living player
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .config import GameConfig
from .core import events as ev
from .core.events import GameEvent
from .core.moves import DiplomaticMessage, Move
from .core.types import GameResult, GameState, PlayerId
from .mechanics import (
    AdvanceResult,
    BattleResolver,
    CaptureHandler,
    CaptureResult,
    ClaimFactChecker,
    DiplomacyAnalyzer,
    DiplomacyLedger,
    LedgerEntry,
    DroppedMessage,
    MoveRejection,
    MovementResolver,
    MovementResult,
    TurnScheduler,
    VictoryConditions,
    VictoryResult,
    VisibilitySystem,
)
from .world import Player, WorldState
from infra.logger import get_logger

log = get_logger(__name__)

EventObserver = Callable[[GameEvent], None]
MoveInput = Union[Move, Mapping[str, Any]]
MessageInput = Union[DiplomaticMessage, Mapping[str, Any]]


@dataclass
class TurnResult:
    """
    Outcome of a submit_turn() call.

    A failed result (wrong player, game not running) leaves the state
    untouched. A successful one may still have dropped moves or messages.
    """
    success: bool
    player: Optional[str]
    error_code: Optional[str] = None
    reason: str = ""
    executed: List[MovementResult] = field(default_factory=list)
    rejected: List[MoveRejection] = field(default_factory=list)
    captures: List[CaptureResult] = field(default_factory=list)
    messages: List[LedgerEntry] = field(default_factory=list)
    dropped_messages: List[DroppedMessage] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)
    victory: Optional[VictoryResult] = None
    state: Dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        """True for a successful turn that moved nothing."""
        return self.success and not self.executed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "player": self.player,
            "error_code": self.error_code,
            "reason": self.reason,
            "executed": [r.to_dict() for r in self.executed],
            "rejected": [r.to_dict() for r in self.rejected],
            "captures": [c.to_dict() for c in self.captures],
            "messages": [entry.record.to_dict() for entry in self.messages],
            "dropped_messages": [
                {"to": d.message.to, "error_code": d.validation.error_code, "message": d.validation.message}
                for d in self.dropped_messages
            ],
            "events": [e.to_dict() for e in self.events],
            "victory": self.victory.to_dict() if self.victory else None,
            "state": self.state,
        }


class ConquestEngine:
    """
    Grid Conquest Engine - authoritative game-state machine.

    The engine manages:
    - World state (board, players, rotation, lifecycle)
    - Rule resolution (moves, battles, captures, visibility, diplomacy)
    - Termination
    - Structured events pushed to subscribed observers

    The engine is single-threaded and non-reentrant: exactly one caller,
    one decision per player-turn, in turn order.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        analyzer: Optional[DiplomacyAnalyzer] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            config: Rules (defaults to GameConfig())
            analyzer: Diplomacy analyzer; defaults to ClaimFactChecker when
                config.fact_check is on
            clock: Timestamp source for diplomatic records
        """
        self.config = config or GameConfig()

        if analyzer is None and self.config.fact_check:
            analyzer = ClaimFactChecker()

        # Mechanics modules (stateless, can be reused)
        battles = BattleResolver()
        self._visibility = VisibilitySystem()
        self._movement = MovementResolver(battles)
        self._captures = CaptureHandler(self.config, battles)
        self._scheduler = TurnScheduler()
        self._ledger = DiplomacyLedger(self.config, analyzer, clock)
        self._victory = VictoryConditions(max_turns=self.config.max_turns)

        self._observers: List[EventObserver] = []
        self.world = self._new_world()

    def _new_world(self) -> WorldState:
        world = WorldState(self.config)
        self._visibility.refresh(world)
        return world

    # ========================================================================
    # OBSERVERS
    # ========================================================================

    def subscribe(self, observer: EventObserver) -> None:
        """Register a callback receiving every event as it is emitted."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: EventObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _emit(self, sink: List[GameEvent], event: GameEvent) -> None:
        sink.append(event)
        for observer in list(self._observers):
            observer(event)

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def start(self) -> List[GameEvent]:
        """
        Start a waiting game.

        Raises:
            RuntimeError: If the game is not waiting
        """
        self._scheduler.start(self.world)
        events: List[GameEvent] = []
        self._emit(events, ev.game_started(self.world.turn, self.current_player.id.value))
        log.info("Game started, %s to move", self.current_player.name)
        return events

    def pause(self) -> List[GameEvent]:
        """
        Raises:
            RuntimeError: If the game is not running
        """
        self._scheduler.pause(self.world)
        events: List[GameEvent] = []
        self._emit(events, ev.game_paused(self.world.turn))
        log.info("Game paused at turn %d", self.world.turn)
        return events

    def resume(self) -> List[GameEvent]:
        """
        Raises:
            RuntimeError: If the game is not paused
        """
        self._scheduler.resume(self.world)
        events: List[GameEvent] = []
        self._emit(events, ev.game_resumed(self.world.turn))
        log.info("Game resumed at turn %d", self.world.turn)
        return events

    def reset(self) -> List[GameEvent]:
        """Discard the current game and set up a fresh one in the waiting state."""
        self.world = self._new_world()
        events: List[GameEvent] = []
        self._emit(events, ev.game_reset())
        log.info("Game reset")
        return events

    # ========================================================================
    # TURNS
    # ========================================================================

    def submit_turn(
        self,
        player_id: PlayerId | str,
        moves: Iterable[MoveInput] = (),
        diplomacy: Iterable[MessageInput] = (),
    ) -> TurnResult:
        """
        Execute one player's decision.

        Args:
            player_id: Player submitting the decision
            moves: Proposed moves (Move objects or decision-record dicts)
            diplomacy: Outbound messages (DiplomaticMessage objects or dicts)

        Returns:
            TurnResult; success is False only for wrong-turn or
            not-running calls, which leave the state untouched
        """
        events: List[GameEvent] = []
        world = self.world

        if world.state != GameState.RUNNING:
            return self._reject(events, str(player_id), "GAME_NOT_RUNNING",
                                f"Game is {world.state.value}")

        current = self.current_player
        submitted = world.find_player(player_id)
        if submitted is None or submitted.id != current.id:
            return self._reject(events, str(player_id), "WRONG_PLAYER",
                                f"It is {current.id.value}'s turn")

        pid = current.id
        result = TurnResult(success=True, player=pid.value, events=events)
        alive_before = {p.id for p in world.living_players()}

        parsed_moves = self._coerce_moves(moves, pid, result)
        report = self._movement.validate_moves(world, pid, parsed_moves)
        for rejection in report.rejections:
            result.rejected.append(rejection)
            self._emit(events, ev.move_rejected(world.turn, pid.value, rejection.move.to_dict(),
                                                rejection.validation.error_code,
                                                rejection.validation.message))

        for move in report.valid_moves:
            self._execute_move(pid, move, result)

        self._record_diplomacy(pid, diplomacy, result)

        self._visibility.refresh(world)
        world.refresh_unit_totals()

        for player in world.players:
            if player.id in alive_before and not player.is_alive:
                self._emit(events, ev.player_eliminated(world.turn, player.id.value))

        log.debug("%s executed %d/%d moves", current.name, len(result.executed),
                  len(result.executed) + len(result.rejected))

        result.victory = self._check_termination(events)
        if not result.victory.is_game_over:
            self._advance_rotation(events)

        result.state = self.snapshot()
        return result

    def skip_turn(self) -> List[GameEvent]:
        """
        End the current player's turn without a decision.

        For drivers whose decision source failed.

        Raises:
            RuntimeError: If the game is not running
        """
        if self.world.state != GameState.RUNNING:
            raise RuntimeError(f"Cannot skip a turn in a game that is {self.world.state.value}")
        events: List[GameEvent] = []
        log.info("Skipping turn of %s", self.current_player.name)
        if not self._check_termination(events).is_game_over:
            self._advance_rotation(events)
        return events

    def advance(self) -> Optional[AdvanceResult]:
        """
        Run the termination check, then pass the turn to the next living player.

        Returns:
            The rotation step taken, or None if the game is (now) finished
        """
        if self.world.game_over:
            return None
        events: List[GameEvent] = []
        if self._check_termination(events).is_game_over:
            return None
        return self._advance_rotation(events)

    # ========================================================================
    # TURN INTERNALS
    # ========================================================================

    def _reject(self, events: List[GameEvent], player: str, code: str, reason: str) -> TurnResult:
        log.warning("Turn rejected for %s: %s", player, reason)
        self._emit(events, ev.turn_rejected(self.world.turn, player, code, reason))
        return TurnResult(success=False, player=player, error_code=code, reason=reason,
                          events=events, state=self.snapshot())

    def _coerce_moves(self, moves: Iterable[MoveInput], pid: PlayerId, result: TurnResult) -> List[Move]:
        parsed: List[Move] = []
        for raw in moves or ():
            if isinstance(raw, Move):
                parsed.append(raw)
                continue
            try:
                parsed.append(Move.from_dict(dict(raw)))
            except (TypeError, ValueError) as exc:
                log.debug("Malformed move from %s: %s", pid, exc)
                self._emit(result.events, ev.move_rejected(
                    self.world.turn, pid.value, _raw_dict(raw), "MALFORMED", str(exc)))
        return parsed

    def _execute_move(self, pid: PlayerId, move: Move, result: TurnResult) -> None:
        world = self.world
        events = result.events

        outcome = self._movement.execute(world, pid, move)
        result.executed.append(outcome)
        self._emit(events, ev.move_executed(world.turn, pid.value, move.source, move.destination,
                                            move.unit_count, outcome.battle is not None))
        if outcome.battle is not None:
            self._emit_battle(events, outcome.battle)

        for capture in self._captures.apply(world, outcome):
            result.captures.append(capture)
            if capture.base_owner is not None:
                self._emit(events, ev.base_captured(world.turn, pid.value, capture.base_owner.value,
                                                    capture.pos, capture.home, capture.bonus))
                log.info("%s captured the base of %s", pid, capture.base_owner)
            else:
                self._emit(events, ev.resource_captured(world.turn, pid.value, capture.pos,
                                                        capture.home, capture.bonus))
            if capture.home_battle is not None:
                self._emit_battle(events, capture.home_battle)

        self._visibility.refresh(world)
        world.refresh_unit_totals()

    def _emit_battle(self, events: List[GameEvent], battle) -> None:
        self._emit(events, ev.battle_resolved(
            self.world.turn,
            battle.pos,
            battle.attacker.value,
            battle.attacker_units,
            {pid.value: n for pid, n in battle.defenders.items()},
            {pid.value: n for pid, n in battle.defender_losses.items()},
            battle.survivors,
        ))

    def _record_diplomacy(self, pid: PlayerId, diplomacy: Iterable[MessageInput], result: TurnResult) -> None:
        world = self.world
        messages: List[DiplomaticMessage] = []
        for raw in diplomacy or ():
            if isinstance(raw, DiplomaticMessage):
                messages.append(raw)
                continue
            try:
                messages.append(DiplomaticMessage.from_dict(dict(raw)))
            except (TypeError, ValueError) as exc:
                self._emit(result.events, ev.message_dropped(world.turn, pid.value, "", "MALFORMED", str(exc)))

        report = self._ledger.record(world, pid, messages)
        for entry in report.entries:
            record = entry.record
            result.messages.append(entry)
            self._emit(result.events, ev.message_sent(world.turn, pid.value, record.recipient.value,
                                                      record.content))
            if entry.fact_check is not None and entry.fact_check.is_lie:
                self._emit(result.events, ev.lie_detected(world.turn, pid.value, record.recipient.value,
                                                          entry.fact_check.detected_lies, entry.lie_counted))
        for dropped in report.dropped:
            result.dropped_messages.append(dropped)
            self._emit(result.events, ev.message_dropped(world.turn, pid.value, dropped.message.to,
                                                         dropped.validation.error_code,
                                                         dropped.validation.message))

    def _check_termination(self, events: List[GameEvent]) -> VictoryResult:
        victory = self._victory.check_all(self.world)
        if victory.is_game_over:
            self._finish(events, victory)
        return victory

    def _finish(self, events: List[GameEvent], victory: VictoryResult) -> None:
        self._scheduler.finish(self.world, victory.result, victory.winner, victory.reason)
        if victory.winner is not None:
            # Keep the rotation index on a living player.
            self.world.current_index = self.world.player_ids().index(victory.winner)
        self._emit(events, ev.game_ended(
            self.world.turn,
            victory.result.value,
            victory.winner.value if victory.winner else None,
            victory.reason,
        ))
        log.info("Game over: %s", victory)

    def _advance_rotation(self, events: List[GameEvent]) -> AdvanceResult:
        world = self.world
        step = self._scheduler.advance(world)
        if step.exhausted:
            self._emit(events, ev.game_ended(world.turn, GameResult.DRAW.value, None, world.game_over_reason))
            log.info("Game over: no living players remain")
            return step

        self._emit(events, ev.turn_advanced(
            world.turn, step.previous.value, step.current.value, [p.value for p in step.skipped]))

        if step.wrapped:
            limit = self._victory.check_turn_limit(world.turn)
            if limit.is_game_over:
                self._finish(events, limit)
        return step

    # ========================================================================
    # READ-ONLY ACCESSORS
    # ========================================================================

    @property
    def current_player(self) -> Player:
        """
        The living player to move.

        If the player at the rotation index has died, the rotation skips
        forward first, so callers never see a dead player as "to move".
        """
        step = self._scheduler.ensure_living_current(self.world)
        if step is not None and not step.exhausted:
            log.debug("Rotation skipped dead player %s", step.previous)
        return self.world.current_player

    @property
    def current_turn(self) -> int:
        return self.world.turn

    @property
    def game_state(self) -> GameState:
        return self.world.state

    @property
    def winner(self) -> Optional[PlayerId]:
        return self.world.winner

    @property
    def result(self) -> GameResult:
        return self.world.result

    @property
    def turn_sequence(self) -> int:
        """Increments every time the rotation moves; identifies the live player-turn."""
        return self.world.turn_sequence

    @property
    def players(self) -> List[Player]:
        return list(self.world.players)

    def players_summary(self) -> List[Dict[str, Any]]:
        return [player.summary() for player in self.world.players]

    def board_snapshot(self) -> Dict[str, Any]:
        """Omniscient board for spectators."""
        return self.world.board.to_dict()

    def visible_board(self, player_id: PlayerId | str) -> List[List[Dict[str, Any]]]:
        """Board filtered by the player's fog of war."""
        return self.world.view_for(player_id).visible_board()

    def can_lie(self, player_id: PlayerId | str) -> bool:
        return self._ledger.can_lie(self.world, self.world.get_player(player_id))

    def state_for_player(self, player_id: PlayerId | str) -> Dict[str, Any]:
        """
        Everything one player is allowed to know, as consumed by agents.

        Returns:
            Dict with the player's own status, fog-filtered board, public
            resource status, diplomacy log and the public players summary
        """
        player = self.world.get_player(player_id)
        view = self.world.view_for(player.id)
        return {
            "playerId": player.id.value,
            "playerName": player.name,
            "currentTurn": self.world.turn,
            "homeBase": list(player.start_position),
            "myUnits": player.units,
            "myPositions": [
                {"x": x, "y": y, "count": self.world.board.units_at(x, y, player.id)}
                for x, y in view.friendly_positions()
            ],
            "myLies": player.lies,
            "canLie": self.can_lie(player.id),
            "board": view.visible_board(),
            "resources": view.resource_status(),
            "diplomacyHistory": [record.to_dict() for record in player.diplomacy_history],
            "players": self.players_summary(),
        }

    def snapshot(self) -> Dict[str, Any]:
        """Compact public state returned with every turn result."""
        world = self.world
        return {
            "gameState": world.state.value,
            "currentTurn": world.turn,
            "currentPlayer": world.current_player.id.value,
            "turnSequence": world.turn_sequence,
            "result": world.result.value,
            "winner": world.winner.value if world.winner else None,
            "reason": world.game_over_reason,
            "players": self.players_summary(),
        }

    def __str__(self) -> str:
        return f"ConquestEngine({self.world})"


def _raw_dict(raw: Any) -> Dict[str, Any]:
    try:
        return dict(raw)
    except (TypeError, ValueError):
        return {"raw": repr(raw)}
