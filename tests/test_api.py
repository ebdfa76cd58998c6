import pytest
from fastapi.testclient import TestClient

import api.app as app_module


@pytest.fixture
def client():
    app_module.runner = None
    with TestClient(app_module.app) as c:
        yield c
    app_module.runner = None


def start_game(client, **body):
    body.setdefault("agents", [{"player": p, "type": "pass"} for p in ("blue", "yellow", "gray", "green")])
    return client.post("/start", json=body)


def test_status_without_game(client):
    assert client.get("/status").json() == {"active": False}
    assert client.post("/step", json={}).status_code == 400


def test_start_and_step(client):
    response = start_game(client)
    assert response.status_code == 200
    assert response.json()["status"]["gameState"] == "running"

    step = client.post("/step", json={"steps": 3}).json()
    assert [f["player"] for f in step["frames"]] == ["blue", "yellow", "gray"]
    assert step["status"]["currentPlayer"] == "green"


def test_pause_resume_and_errors(client):
    start_game(client)

    assert client.post("/pause").status_code == 200
    assert client.post("/step", json={}).status_code == 400
    assert client.post("/pause").status_code == 400
    assert client.post("/resume").status_code == 200
    assert client.post("/step", json={}).status_code == 200


def test_bad_start_request(client):
    assert start_game(client, config={"warp_speed": 9}).status_code == 422
    assert start_game(client, agents=[{"player": "purple"}]).status_code == 422


def test_views(client):
    start_game(client, config={"starting_units": 4})

    view = client.get("/view/blue").json()
    assert view["myUnits"] == 4
    assert view["board"][9][9]["units"] == []
    assert client.get("/view/purple").status_code == 404

    board = client.get("/board").json()
    assert board["cells"][9][9]["units"] == {"green": 4}


def test_stop(client):
    start_game(client)
    assert client.post("/stop").json()["success"]
    assert client.get("/status").json() == {"active": False}
    assert client.post("/stop").status_code == 400
