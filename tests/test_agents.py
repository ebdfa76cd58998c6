import pytest

from agents import (
    AgentSpec,
    BaseAgent,
    PassAgent,
    RandomAgent,
    available_agents,
    create_agent_from_spec,
    create_agents,
    register_agent,
    resolve_agent_class,
)
from conquest.core.types import PlayerId


def test_registry_knows_builtin_agents():
    assert {"random", "pass"} <= set(available_agents())
    assert resolve_agent_class("random") is RandomAgent
    assert resolve_agent_class("agents.pass_agent.PassAgent") is PassAgent


def test_unknown_agent_type():
    with pytest.raises(ValueError):
        resolve_agent_class("telepathic")


def test_register_agent_rejects_taken_key():
    with pytest.raises(ValueError):
        register_agent("random", PassAgent)
    assert register_agent("random", RandomAgent) is RandomAgent


def test_dotted_path_must_name_an_agent():
    with pytest.raises(TypeError):
        resolve_agent_class("conquest.core.moves.Move")


def test_spec_roundtrip_and_factory():
    spec = AgentSpec.from_dict({"type": "random", "player": "Green", "init_params": {"seed": 1}})
    assert spec.player is PlayerId.GREEN
    assert AgentSpec.from_dict(spec.to_dict()) == spec

    agent = create_agent_from_spec(spec)
    assert isinstance(agent, RandomAgent)
    assert agent.player_id is PlayerId.GREEN


def test_spec_requires_player():
    with pytest.raises(ValueError):
        AgentSpec.from_dict({"type": "random"})


def test_create_agents_fills_every_seat():
    agents = create_agents([AgentSpec(type="pass", player=PlayerId.GRAY)])

    assert set(agents) == set(PlayerId)
    assert isinstance(agents[PlayerId.GRAY], PassAgent)
    assert isinstance(agents[PlayerId.BLUE], RandomAgent)


def test_duplicate_specs_rejected():
    specs = [AgentSpec(type="pass", player=PlayerId.GRAY), AgentSpec(type="random", player=PlayerId.GRAY)]
    with pytest.raises(ValueError):
        create_agents(specs)


def test_random_agent_moves_only_to_in_bounds_neighbors(engine):
    agent = RandomAgent(PlayerId.BLUE, move_probability=1.0, seed=5)

    decision = agent.decide(engine.state_for_player("blue"))

    assert len(decision.moves) == 1
    move = decision.moves[0].to_move()
    assert move.source == (0, 0)
    assert move.destination in {(1, 0), (0, 1)}
    assert 1 <= move.unit_count <= 10


def test_random_agent_is_reproducible(engine):
    view = engine.state_for_player("blue")
    first = RandomAgent(PlayerId.BLUE, seed=11, move_probability=1.0).decide(view)
    second = RandomAgent(PlayerId.BLUE, seed=11, move_probability=1.0).decide(view)
    assert first == second


def test_pass_agent(engine):
    agent = PassAgent("yellow")
    assert agent.decide(engine.state_for_player("yellow")).is_pass
    assert isinstance(agent, BaseAgent)
    assert str(agent) == "PassAgent (yellow)"
