from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from agents import AgentSpec, BaseAgent, create_agents
from conquest import ConquestEngine, GameConfig, TurnResult
from conquest.core.events import GameEvent
from conquest.core.types import GameState, PlayerId
from infra.logger import get_logger
from .decision import DecisionModel
from .events import EventLogger

log = get_logger(__name__)


@dataclass(frozen=True)
class TurnTicket:
    """
    Handle for one outstanding player-turn.

    The sequence number is the engine's turn_sequence when the decision was
    requested. A decision whose ticket no longer matches the engine arrived
    after its turn was over and must be thrown away.
    """
    player: PlayerId
    sequence: int

    def is_current(self, engine: ConquestEngine) -> bool:
        return (
            engine.game_state is GameState.RUNNING
            and engine.turn_sequence == self.sequence
            and engine.current_player.id == self.player
        )


@dataclass
class StepFrame:
    """What happened during one runner step, in a UI-friendly shape."""
    player: Optional[str]
    turn: int
    decision: Optional[DecisionModel] = None
    result: Optional[TurnResult] = None
    skipped: bool = False
    stale: bool = False
    error: Optional[str] = None
    events: List[GameEvent] = field(default_factory=list)
    done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "turn": self.turn,
            "decision": self.decision.to_payload() if self.decision else None,
            "result": self.result.to_dict() if self.result else None,
            "skipped": self.skipped,
            "stale": self.stale,
            "error": self.error,
            "events": [e.to_dict() for e in self.events],
            "done": self.done,
        }


class GameRunner:
    """
    Step-by-step driver: one agent per player, one decision per step.
    """

    def __init__(
        self,
        engine: Optional[ConquestEngine] = None,
        agents: Optional[Mapping[PlayerId, BaseAgent]] = None,
        specs: Iterable[AgentSpec] = (),
        config: Optional[GameConfig] = None,
        log_events: bool = True,
    ):
        self.engine = engine or ConquestEngine(config)
        self.agents: Dict[PlayerId, BaseAgent] = dict(agents) if agents else create_agents(specs)

        missing = [p.id.value for p in self.engine.players if p.id not in self.agents]
        if missing:
            raise ValueError(f"No agent for player(s): {', '.join(missing)}")

        self._event_logger = EventLogger() if log_events else None
        if self._event_logger is not None:
            self.engine.subscribe(self._event_logger)

        self.step_count = 0
        log.info("GameRunner initialized with agents %s", ", ".join(str(a) for a in self.agents.values()))

    # ------------------------------------------------------------------#
    # Lifecycle pass-through
    # ------------------------------------------------------------------#
    def start(self) -> List[GameEvent]:
        for agent in self.agents.values():
            agent.reset()
        return self.engine.start()

    def pause(self) -> List[GameEvent]:
        return self.engine.pause()

    def resume(self) -> List[GameEvent]:
        return self.engine.resume()

    def close(self) -> None:
        """Detach from the engine; the runner must not be stepped afterwards."""
        if self._event_logger is not None:
            self.engine.unsubscribe(self._event_logger)
            self._event_logger = None

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def issue_ticket(self) -> TurnTicket:
        return TurnTicket(self.engine.current_player.id, self.engine.turn_sequence)

    def step(self) -> StepFrame:
        """
        Play the current player's turn.

        Raises:
            RuntimeError: If the game is not running
        """
        engine = self.engine
        if engine.game_state is not GameState.RUNNING:
            raise RuntimeError(f"Game is {engine.game_state.value}, cannot step")

        ticket = self.issue_ticket()
        agent = self.agents[ticket.player]
        frame = StepFrame(player=ticket.player.value, turn=engine.current_turn)
        self.step_count += 1

        try:
            decision = DecisionModel.parse(
                agent.decide(engine.state_for_player(ticket.player)), sender=ticket.player.value)
        except Exception as exc:
            log.exception("Agent %s failed, skipping turn", agent)
            frame.error = f"{type(exc).__name__}: {exc}"
            if ticket.is_current(engine):
                frame.events = engine.skip_turn()
                frame.skipped = True
            frame.done = self.done
            return frame

        frame.decision = decision
        if not ticket.is_current(engine):
            log.warning("Discarding stale decision from %s (ticket %d, engine at %d)",
                        agent, ticket.sequence, engine.turn_sequence)
            frame.stale = True
            frame.done = self.done
            return frame

        if decision.reasoning:
            log.debug("%s reasoning: %s", agent, decision.reasoning)

        moves, messages = decision.to_engine_input(sender=ticket.player.value)
        frame.result = engine.submit_turn(ticket.player, moves, messages)
        frame.events = list(frame.result.events)
        frame.done = self.done
        return frame

    def run(self, max_steps: Optional[int] = None) -> List[StepFrame]:
        """
        Step until the game is no longer running.

        Starts a waiting game first. Stops early after max_steps steps.
        """
        if self.engine.game_state is GameState.WAITING:
            self.start()

        frames: List[StepFrame] = []
        while self.engine.game_state is GameState.RUNNING:
            if max_steps is not None and len(frames) >= max_steps:
                break
            frames.append(self.step())

        if self.done:
            log.info("Game finished after %d steps: %s, winner=%s",
                     self.step_count, self.engine.result.value, self.engine.winner)
        return frames

    # ------------------------------------------------------------------#
    # Helpers
    # ------------------------------------------------------------------#
    @property
    def done(self) -> bool:
        return self.engine.game_state is GameState.FINISHED

    @property
    def turn(self) -> int:
        return self.engine.current_turn

    def status(self) -> Dict[str, Any]:
        return {**self.engine.snapshot(), "step": self.step_count, "done": self.done}
