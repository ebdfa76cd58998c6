import pytest

from conquest import Move
from conquest.core.types import PlayerId
from conquest.mechanics import MovementResolver

BLUE = PlayerId.BLUE


@pytest.fixture
def resolver():
    return MovementResolver()


def test_move_requires_integer_fields():
    with pytest.raises(ValueError):
        Move(0, 0, 1, 0, "3")
    with pytest.raises(ValueError):
        Move(0, 0, True, 0, 3)


def test_move_wire_format():
    move = Move.from_dict({"fromX": 0, "fromY": 0, "toX": 0, "toY": 1, "unitCount": 4})
    assert move.source == (0, 0)
    assert move.destination == (0, 1)
    assert move.to_dict()["unitCount"] == 4
    with pytest.raises(ValueError):
        Move.from_dict({"fromX": 0, "fromY": 0, "toX": 0})


@pytest.mark.parametrize("move, code", [
    (Move(0, 0, -1, 0, 1), "OUT_OF_BOUNDS"),
    (Move(0, 0, 1, 1, 1), "NOT_ADJACENT"),
    (Move(0, 0, 2, 0, 1), "NOT_ADJACENT"),
    (Move(0, 0, 0, 0, 1), "NOT_ADJACENT"),
    (Move(0, 0, 1, 0, 0), "INVALID_COUNT"),
    (Move(3, 3, 3, 4, 1), "NO_UNITS"),
    (Move(9, 0, 8, 0, 1), "NO_UNITS"),
    (Move(0, 0, 1, 0, 11), "INSUFFICIENT_UNITS"),
])
def test_invalid_moves_are_rejected_with_code(world, resolver, move, code):
    result = resolver.validate_move(world, BLUE, move)
    assert not result.valid
    assert result.error_code == code


def test_rejected_moves_never_touch_the_board(world, resolver):
    before = world.board.to_dict()
    report = resolver.validate_moves(world, BLUE, [Move(0, 0, 1, 1, 5), Move(0, 0, 2, 0, 5)])

    assert report.valid_moves == []
    assert len(report.rejections) == 2
    assert world.board.to_dict() == before


def test_batch_keeps_valid_moves_in_order(world, resolver):
    moves = [Move(0, 0, 1, 0, 3), Move(0, 0, 5, 5, 1), Move(0, 0, 0, 1, 4)]
    report = resolver.validate_moves(world, BLUE, moves)

    assert report.valid_moves == [moves[0], moves[2]]
    assert [r.move for r in report.rejections] == [moves[1]]


def test_units_drawn_from_a_cell_cannot_exceed_its_start_count(world, resolver):
    moves = [Move(0, 0, 1, 0, 6), Move(0, 0, 0, 1, 6)]
    report = resolver.validate_moves(world, BLUE, moves)

    assert report.valid_moves == [moves[0]]
    assert report.rejections[0].validation.error_code == "INSUFFICIENT_UNITS"


def test_units_arriving_this_turn_cannot_move_again(world, resolver):
    moves = [Move(0, 0, 1, 0, 5), Move(1, 0, 2, 0, 5)]
    report = resolver.validate_moves(world, BLUE, moves)

    assert report.valid_moves == [moves[0]]
    assert report.rejections[0].validation.error_code == "NO_UNITS"


def test_execute_moves_into_empty_cell(world, resolver):
    outcome = resolver.execute(world, BLUE, Move(0, 0, 1, 0, 4))

    assert outcome.battle is None
    assert outcome.mover_present
    assert world.board.units_at(0, 0, BLUE) == 6
    assert world.board.units_at(1, 0, BLUE) == 4


def test_execute_merges_with_own_stack(world, resolver):
    world.board.set_units(1, 0, BLUE, 2)
    outcome = resolver.execute(world, BLUE, Move(0, 0, 1, 0, 10))

    assert outcome.units_at_destination == 12
    assert world.board.cell(0, 0).is_empty
