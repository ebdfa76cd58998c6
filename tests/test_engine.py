import pytest

from conquest import ConquestEngine, DiplomaticMessage, GameConfig, Move
from conquest.core import events as ev
from conquest.core.types import GameResult, GameState, PlayerId

BLUE, YELLOW, GRAY, GREEN = PlayerId.BLUE, PlayerId.YELLOW, PlayerId.GRAY, PlayerId.GREEN


def assert_totals_match_board(engine):
    for player in engine.players:
        assert player.units == engine.world.board.total_units(player.id)


def test_new_engine_is_waiting():
    engine = ConquestEngine()
    assert engine.game_state is GameState.WAITING
    assert engine.current_turn == 0
    assert engine.result is GameResult.IN_PROGRESS
    assert engine.players_summary()[0] == {"id": "blue", "name": "Blue", "units": 10, "isAlive": True}


def test_submit_before_start_is_rejected():
    engine = ConquestEngine()
    result = engine.submit_turn("blue", [Move(0, 0, 1, 0, 1)])

    assert not result.success
    assert result.error_code == "GAME_NOT_RUNNING"
    assert engine.world.board.units_at(1, 0, BLUE) == 0


def test_wrong_player_rejected_without_state_change(engine):
    before = engine.world.to_dict()
    result = engine.submit_turn("yellow", [Move(9, 0, 8, 0, 1)])

    assert not result.success
    assert result.error_code == "WRONG_PLAYER"
    assert result.events[0].type == ev.TURN_REJECTED
    assert engine.world.to_dict() == before


def test_unknown_player_is_a_wrong_turn(engine):
    assert engine.submit_turn("purple", []).error_code == "WRONG_PLAYER"


def test_paused_game_rejects_turns(engine):
    engine.pause()
    assert engine.submit_turn("blue", []).error_code == "GAME_NOT_RUNNING"
    engine.resume()
    assert engine.submit_turn("blue", []).success


def test_control_transitions_raise_when_illegal(engine):
    with pytest.raises(RuntimeError):
        engine.start()
    with pytest.raises(RuntimeError):
        engine.resume()


def test_valid_turn_moves_units_and_advances(engine):
    result = engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 4), Move(0, 0, 0, 1, 3)])

    assert result.success
    assert len(result.executed) == 2
    board = engine.world.board
    assert (board.units_at(0, 0, BLUE), board.units_at(1, 0, BLUE), board.units_at(0, 1, BLUE)) == (3, 4, 3)
    assert engine.current_player.id is YELLOW
    assert engine.turn_sequence == 1
    assert result.state["currentPlayer"] == "yellow"


def test_invalid_moves_dropped_but_rest_executed(engine):
    result = engine.submit_turn(BLUE, [
        Move(0, 0, 2, 0, 1),
        {"fromX": 0, "fromY": 0, "toX": 1},
        {"fromX": 0, "fromY": 0, "toX": 0, "toY": 1, "unitCount": 2},
    ])

    assert result.success
    assert [r.validation.error_code for r in result.rejected] == ["NOT_ADJACENT"]
    rejected_events = [e for e in result.events if e.type == ev.MOVE_REJECTED]
    assert [e.payload["error_code"] for e in rejected_events] == ["MALFORMED", "NOT_ADJACENT"]
    assert engine.world.board.units_at(0, 1, BLUE) == 2


def test_zero_valid_moves_is_a_legal_pass(engine):
    result = engine.submit_turn(BLUE, [Move(0, 0, 5, 5, 1)])

    assert result.success
    assert result.passed
    assert engine.current_player.id is YELLOW


def test_turn_counter_increments_after_full_rotation(engine):
    for pid in (BLUE, YELLOW, GRAY):
        engine.submit_turn(pid, [])
        assert engine.current_turn == 0
    engine.submit_turn(GREEN, [])
    assert engine.current_turn == 1
    assert engine.current_player.id is BLUE


def test_dead_player_skipped(make_engine, place):
    engine = make_engine(started=False)
    engine.world.board.set_units(9, 0, YELLOW, 0)
    engine.world.refresh_unit_totals()
    engine.start()

    result = engine.submit_turn(BLUE, [])

    advanced = [e for e in result.events if e.type == ev.TURN_ADVANCED][0]
    assert advanced.payload["skipped"] == ["yellow"]
    assert engine.current_player.id is GRAY


def test_elimination_ends_game_with_winner(make_engine, place):
    engine = make_engine(started=False, clear=True)
    place(engine.world, 0, 0, BLUE, 5)
    place(engine.world, 1, 0, YELLOW, 1)
    engine.start()

    seen = []
    engine.subscribe(seen.append)
    result = engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 5)])

    assert result.victory.result is GameResult.WIN
    assert engine.game_state is GameState.FINISHED
    assert engine.winner is BLUE
    types = [e.type for e in seen]
    assert types.index(ev.BATTLE_RESOLVED) < types.index(ev.PLAYER_ELIMINATED) < types.index(ev.GAME_ENDED)
    assert ev.TURN_ADVANCED not in types
    assert engine.submit_turn(BLUE, []).error_code == "GAME_NOT_RUNNING"


def test_losing_attacker_hands_turn_to_winner(make_engine, place):
    engine = make_engine(started=False, clear=True)
    place(engine.world, 0, 0, BLUE, 3)
    place(engine.world, 1, 0, YELLOW, 5)
    engine.start()

    result = engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 3)])

    assert result.victory.winner is YELLOW
    assert engine.current_player.id is YELLOW
    assert engine.current_player.units > 0
    assert engine.snapshot()["currentPlayer"] == "yellow"


def test_message_content_must_be_text():
    with pytest.raises(ValueError):
        DiplomaticMessage("yellow", None)


def test_message_without_content_is_dropped_not_fatal(engine):
    seen = []
    engine.subscribe(seen.append)
    result = engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 1)], [{"to": "yellow", "content": None}])

    assert result.success
    assert len(result.executed) == 1
    dropped = [e for e in seen if e.type == ev.MESSAGE_DROPPED]
    assert [e.payload["error_code"] for e in dropped] == ["MALFORMED"]
    assert engine.current_player.id is YELLOW


def test_advance_with_one_survivor_finishes(make_engine, place):
    engine = make_engine(started=False, clear=True)
    place(engine.world, 3, 3, GRAY, 2)
    engine.start()

    assert engine.current_player.id is GRAY
    assert engine.advance() is None
    assert engine.game_state is GameState.FINISHED
    assert engine.winner is GRAY


def test_resource_capture_through_engine(make_engine, place):
    engine = make_engine(started=False)
    place(engine.world, 4, 3, BLUE, 1)
    engine.start()

    result = engine.submit_turn(BLUE, [Move(4, 3, 4, 4, 1)])

    assert [c.kind for c in result.captures] == ["resource"]
    assert engine.world.board.units_at(0, 0, BLUE) == 11
    assert engine.world.board.cell(4, 4).depleted
    assert engine.visible_board("green")[4][4]["depleted"] is True
    assert_totals_match_board(engine)


def test_base_capture_bonus_visible_in_events(make_engine, place):
    engine = make_engine(started=False)
    place(engine.world, 8, 0, BLUE, 15)
    engine.start()

    result = engine.submit_turn(BLUE, [Move(8, 0, 9, 0, 15)])

    captured = [e for e in result.events if e.type == ev.BASE_CAPTURED]
    assert captured[0].payload["base_owner"] == "yellow"
    assert engine.world.board.units_at(9, 0, BLUE) == 5
    assert engine.world.board.units_at(0, 0, BLUE) == 20
    assert not engine.world.get_player(YELLOW).is_alive


def test_diplomacy_recorded_and_filtered(engine):
    result = engine.submit_turn(BLUE, [], [
        DiplomaticMessage("yellow", "Peace in the north?"),
        {"to": "nobody", "content": "hello"},
        {"content": "no recipient"},
    ])

    assert [m.record.recipient for m in result.messages] == [YELLOW]
    codes = [e.payload["error_code"] for e in result.events if e.type == ev.MESSAGE_DROPPED]
    assert codes == ["MALFORMED", "UNKNOWN_RECIPIENT"]
    yellow_view = engine.state_for_player("yellow")
    assert yellow_view["diplomacyHistory"][0]["type"] == "received"
    assert yellow_view["diplomacyHistory"][0]["content"] == "Peace in the north?"


def test_detected_lie_emits_event(engine):
    result = engine.submit_turn(BLUE, [], [DiplomaticMessage("gray", "I have 40 units")])

    lies = [e for e in result.events if e.type == ev.LIE_DETECTED]
    assert lies and lies[0].payload["counted"]
    assert engine.state_for_player("blue")["myLies"] == 1
    assert engine.state_for_player("blue")["canLie"] is False


def test_state_for_player_respects_fog(engine):
    view = engine.state_for_player("blue")

    assert view["playerId"] == "blue"
    assert view["myUnits"] == 10
    assert view["myPositions"] == [{"x": 0, "y": 0, "count": 10}]
    assert view["board"][9][9]["units"] == []
    assert view["board"][0][9]["visible"] is False
    assert len(view["resources"]) == 4


def test_skip_turn_advances_rotation(engine):
    events = engine.skip_turn()

    assert [e.type for e in events] == [ev.TURN_ADVANCED]
    assert engine.current_player.id is YELLOW


def test_skip_turn_requires_running_game():
    with pytest.raises(RuntimeError):
        ConquestEngine().skip_turn()


def test_turn_limit_draws_game(make_engine):
    engine = make_engine(max_turns=1)
    for pid in (BLUE, YELLOW, GRAY, GREEN):
        engine.submit_turn(pid, [])

    assert engine.game_state is GameState.FINISHED
    assert engine.result is GameResult.DRAW
    assert engine.winner is None


def test_reset_returns_to_waiting_with_fresh_board(engine):
    engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 4)])
    events = engine.reset()

    assert events[0].type == ev.GAME_RESET
    assert engine.game_state is GameState.WAITING
    assert engine.world.board.units_at(0, 0, BLUE) == 10
    assert engine.turn_sequence == 0


def test_observers_receive_each_event_once(engine):
    seen = []
    engine.subscribe(seen.append)
    engine.subscribe(seen.append)
    result = engine.submit_turn(BLUE, [Move(0, 0, 1, 0, 1)])
    engine.unsubscribe(seen.append)
    engine.submit_turn(YELLOW, [])

    assert seen == result.events


def test_unit_totals_track_board_through_a_long_game(make_engine):
    import random

    rng = random.Random(3)
    engine = make_engine()
    for _ in range(200):
        if engine.game_state is not GameState.RUNNING:
            break
        player = engine.current_player
        moves = []
        for x, y in engine.world.board.positions_of(player.id):
            dx, dy = rng.choice([(0, 1), (1, 0), (0, -1), (-1, 0)])
            moves.append(Move(x, y, x + dx, y + dy, rng.randint(1, 12)))
        engine.submit_turn(player.id, moves)
        assert_totals_match_board(engine)
        for _, cell in engine.world.board.cells():
            assert all(count > 0 for count in cell.units.values())
