"""HTTP API for driving a conquest game step by step."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from agents import AgentSpec
from conquest import GameConfig
from infra.logger import get_logger
from infra.settings import Settings
from runtime.runner import GameRunner

settings = Settings.from_env()
settings.apply_logging()
log = get_logger(__name__)

app = FastAPI(title="Grid Conquest Engine")
runner: GameRunner | None = None


# Allow a browser-based control panel served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class AgentRequest(BaseModel):
    player: str
    type: str = "random"
    name: Optional[str] = None
    init_params: Dict[str, Any] = Field(default_factory=dict)


class StartRequest(BaseModel):
    agents: List[AgentRequest] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)


class StepRequest(BaseModel):
    steps: int = Field(default=1, ge=1, le=1000)


def _require_runner() -> GameRunner:
    if runner is None:
        raise HTTPException(400, "No active game")
    return runner


@app.post("/start")
def start(request: StartRequest):
    global runner
    try:
        config_data = dict(request.config)
        if settings.max_turns is not None:
            config_data.setdefault("max_turns", settings.max_turns)
        config = GameConfig.from_dict(config_data)
        specs = [AgentSpec.from_dict(agent.model_dump()) for agent in request.agents]
        new_runner = GameRunner(specs=specs, config=config)
    except (ValueError, TypeError) as exc:
        raise HTTPException(422, str(exc)) from exc

    if runner is not None:
        runner.close()
    runner = new_runner
    events = runner.start()
    return {"success": True, "events": [e.to_dict() for e in events], "status": runner.status()}


@app.post("/step")
def step(request: StepRequest | None = None):
    active = _require_runner()
    count = request.steps if request else 1
    frames = []
    try:
        for _ in range(count):
            frames.append(active.step().to_dict())
            if active.done:
                break
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {"frames": frames, "status": active.status()}


@app.post("/pause")
def pause():
    active = _require_runner()
    try:
        active.pause()
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {"success": True, "status": active.status()}


@app.post("/resume")
def resume():
    active = _require_runner()
    try:
        active.resume()
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {"success": True, "status": active.status()}


@app.post("/stop")
def stop():
    global runner
    active = _require_runner()
    active.close()
    runner = None
    log.info("Game stopped by client")
    return {"success": True, "message": "Game stopped"}


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {"active": True, **runner.status()}


@app.get("/view/{player_id}")
def view(player_id: str):
    active = _require_runner()
    try:
        return active.engine.state_for_player(player_id)
    except ValueError as exc:
        raise HTTPException(404, str(exc)) from exc


@app.get("/board")
def board():
    active = _require_runner()
    return active.engine.board_snapshot()
