import pytest

from conquest import DiplomaticMessage, GameConfig
from conquest.core.types import PlayerId, RecordType
from conquest.mechanics import ClaimFactChecker, DiplomacyLedger
from conquest.mechanics.fact_check import IMPOSSIBLE_UNITS

BLUE, YELLOW, GRAY, GREEN = PlayerId.BLUE, PlayerId.YELLOW, PlayerId.GRAY, PlayerId.GREEN


@pytest.fixture
def ledger():
    return DiplomacyLedger(GameConfig(), analyzer=None, clock=lambda: 42.0)


@pytest.fixture
def checked_ledger():
    return DiplomacyLedger(GameConfig(), analyzer=ClaimFactChecker(), clock=lambda: 42.0)


def test_message_recorded_as_sent_and_received(world, ledger):
    world.turn = 3
    report = ledger.record(world, BLUE, [DiplomaticMessage("yellow", "Truce?")])

    assert len(report.entries) == 1
    sent = world.get_player(BLUE).diplomacy_history
    received = world.get_player(YELLOW).diplomacy_history
    assert [r.type for r in sent] == [RecordType.SENT]
    assert [r.type for r in received] == [RecordType.RECEIVED]
    assert (sent[0].turn, sent[0].content, sent[0].timestamp) == (3, "Truce?", 42.0)
    assert (received[0].turn, received[0].content, received[0].timestamp) == (3, "Truce?", 42.0)
    assert received[0].counterpart == BLUE
    assert world.get_player(GRAY).diplomacy_history == []


@pytest.mark.parametrize("to, code", [
    ("purple", "UNKNOWN_RECIPIENT"),
    ("blue", "SELF_RECIPIENT"),
])
def test_illegal_targets_dropped_individually(world, ledger, to, code):
    report = ledger.record(world, BLUE, [DiplomaticMessage(to, "hi"), DiplomaticMessage("gray", "hi")])

    assert [d.validation.error_code for d in report.dropped] == [code]
    assert [e.record.recipient for e in report.entries] == [GRAY]


def test_duplicate_recipient_and_message_limit(world, ledger):
    messages = [
        DiplomaticMessage("yellow", "one"),
        DiplomaticMessage("yellow", "two"),
        DiplomaticMessage("gray", "three"),
        DiplomaticMessage("green", "four"),
    ]
    report = ledger.record(world, BLUE, messages)

    assert [e.record.content for e in report.entries] == ["one", "three"]
    assert [d.validation.error_code for d in report.dropped] == ["DUPLICATE_RECIPIENT", "MESSAGE_LIMIT"]


def test_ledger_does_not_touch_the_board(world, ledger):
    before = world.board.to_dict()
    ledger.record(world, BLUE, [DiplomaticMessage("green", "I have 99 units")])
    assert world.board.to_dict() == before


# ============================================================================
# FACT CHECKING
# ============================================================================

def test_true_unit_claim_is_not_a_lie(world):
    check = ClaimFactChecker().analyze(world, BLUE, YELLOW, "I have 10 units at home")
    assert not check.is_lie


def test_false_unit_claim_detected(world):
    check = ClaimFactChecker().analyze(world, BLUE, YELLOW, "Careful, I have 25 units.")
    assert check.is_lie
    assert "25" in check.detected_lies[0]


def test_impossible_count_detected(world):
    check = ClaimFactChecker().analyze(world, BLUE, YELLOW, f"My army is {IMPOSSIBLE_UNITS + 1} troops strong")
    assert check.is_lie


def test_false_elimination_claim(world):
    check = ClaimFactChecker().analyze(world, BLUE, YELLOW, "I am destroyed, leave me alone")
    assert check.is_lie


def test_position_claim_checked_only_when_recipient_sees_cell(world):
    checker = ClaimFactChecker()

    # (1,0) is visible to blue, who receives the claim; the cell is empty.
    assert checker.analyze(world, YELLOW, BLUE, "(1,0) has units").is_lie
    assert not checker.analyze(world, YELLOW, BLUE, "(1,0) is empty").is_lie
    # (5,7) is fog for blue, so nothing can be proven.
    assert not checker.analyze(world, YELLOW, BLUE, "(5,7) has units").is_lie


def test_lie_counter_respects_limit_and_cooldown(world, checked_ledger):
    blue = world.get_player(BLUE)

    first = checked_ledger.record(world, BLUE, [DiplomaticMessage("yellow", "I have 3 units")])
    assert first.entries[0].lie_counted
    assert first.entries[0].record.actually_lied
    assert (blue.lies, blue.last_lie_turn) == (1, 0)

    world.turn = 20
    second = checked_ledger.record(world, BLUE, [DiplomaticMessage("gray", "I have 3 units")])
    assert second.entries[0].fact_check.is_lie
    assert not second.entries[0].lie_counted
    assert blue.lies == 1


def test_cooldown_blocks_second_lie_even_with_higher_limit(world):
    ledger = DiplomacyLedger(GameConfig(max_lies=3), analyzer=ClaimFactChecker())
    blue = world.get_player(BLUE)

    ledger.record(world, BLUE, [DiplomaticMessage("yellow", "I have 3 units")])
    world.turn = 5
    ledger.record(world, BLUE, [DiplomaticMessage("yellow", "I have 3 units")])
    assert blue.lies == 1
    assert not ledger.can_lie(world, blue)

    world.turn = 10
    assert ledger.can_lie(world, blue)
    ledger.record(world, BLUE, [DiplomaticMessage("yellow", "I have 3 units")])
    assert blue.lies == 2


def test_claimed_lie_flag_is_kept(world, ledger):
    report = ledger.record(world, BLUE, [DiplomaticMessage("green", "Trust me", is_lie=True)])
    record = report.entries[0].record
    assert record.claimed_lie
    assert not record.actually_lied
    assert record.to_dict()["from"] == "blue"
