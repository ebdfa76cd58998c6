from conquest import DiplomaticMessage, Move
from runtime.decision import MAX_MESSAGE_LENGTH, DecisionModel


def test_parse_full_decision():
    decision = DecisionModel.parse({
        "moves": [{"fromX": 0, "fromY": 0, "toX": 1, "toY": 0, "unitCount": 3}],
        "diplomacy": [{"to": "Yellow", "content": "Hi", "isLie": True}],
        "reasoning": "expand east",
    })

    moves, messages = decision.to_engine_input()
    assert moves == [Move(0, 0, 1, 0, 3)]
    assert messages == [DiplomaticMessage("yellow", "Hi", is_lie=True)]
    assert decision.reasoning == "expand east"


def test_malformed_moves_dropped_individually():
    decision = DecisionModel.parse({
        "moves": [
            {"fromX": 0, "fromY": 0, "toX": 1, "toY": 0},
            {"fromX": "a", "fromY": 0, "toX": 1, "toY": 0, "unitCount": 1},
            "not a move",
            {"fromX": 0, "fromY": 0, "toX": 0, "toY": 1, "unitCount": 2},
        ],
    })
    assert [m.to_move() for m in decision.moves] == [Move(0, 0, 0, 1, 2)]


def test_single_object_diplomacy_accepted():
    decision = DecisionModel.parse({"moves": [], "diplomacy": {"to": "gray", "content": "ok"}})
    assert [m.to for m in decision.diplomacy] == ["gray"]


def test_message_content_truncated():
    decision = DecisionModel.parse({"diplomacy": [{"to": "gray", "content": "x" * 5000}]})
    assert len(decision.diplomacy[0].content) == MAX_MESSAGE_LENGTH


def test_at_most_two_messages_to_distinct_recipients():
    decision = DecisionModel.parse({"diplomacy": [
        {"to": "gray", "content": "1"},
        {"to": "GRAY", "content": "2"},
        {"to": "green", "content": "3"},
        {"to": "yellow", "content": "4"},
    ]})
    assert [(m.to, m.content) for m in decision.diplomacy] == [("gray", "1"), ("green", "3")]


def test_garbage_payload_is_a_pass():
    assert DecisionModel.parse(None).is_pass
    assert DecisionModel.parse("move north").is_pass
    assert DecisionModel.parse({"moves": "everything"}).is_pass


def test_payload_uses_wire_names():
    decision = DecisionModel.parse({"moves": [{"fromX": 1, "fromY": 2, "toX": 1, "toY": 3, "unitCount": 1}]})
    assert decision.to_payload()["moves"][0] == {"fromX": 1, "fromY": 2, "toX": 1, "toY": 3, "unitCount": 1}


def test_unknown_and_self_recipients_do_not_use_message_slots():
    decision = DecisionModel.parse({
        "diplomacy": [
            {"to": "purple", "content": "who?"},
            {"to": "blue", "content": "note to self"},
            {"to": "gray", "content": "truce"},
            {"to": "green", "content": "truce"},
        ],
    }, sender="blue")

    assert [m.to for m in decision.diplomacy] == ["gray", "green"]


def test_engine_input_skips_sender_as_recipient():
    decision = DecisionModel.parse({
        "diplomacy": [
            {"to": "yellow", "content": "hello me"},
            {"to": "gray", "content": "hello gray"},
        ],
    })

    _, messages = decision.to_engine_input(sender="Yellow")
    assert messages == [DiplomaticMessage("gray", "hello gray")]
