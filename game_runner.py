"""
Play a full game from the command line.

    python game_runner.py --seed 7 --max-steps 400
    python game_runner.py --agent blue=pass --agent green=random --show-board
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from agents import AgentSpec
from conquest import ConquestEngine, GameConfig
from conquest.core.types import PLAYER_PROFILES, PlayerId
from infra.logger import get_logger
from infra.settings import Settings
from runtime.runner import GameRunner

log = get_logger("game_runner")


def parse_agent(value: str) -> AgentSpec:
    player, _, agent_type = value.partition("=")
    if not agent_type:
        raise argparse.ArgumentTypeError(f"expected PLAYER=TYPE, got {value!r}")
    try:
        return AgentSpec(type=agent_type, player=PlayerId.parse(player))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Grid Conquest game with scripted agents.")
    parser.add_argument("--agent", action="append", type=parse_agent, default=[],
                        help="PLAYER=TYPE, e.g. blue=random (default: random for every player)")
    parser.add_argument("--seed", type=int, default=None, help="seed for random agents")
    parser.add_argument("--max-steps", type=positive_int, default=1000, help="stop after this many player-turns")
    parser.add_argument("--max-turns", type=positive_int, default=None, help="draw the game after this many turns")
    parser.add_argument("--show-board", action="store_true", help="print the final board")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    settings.apply_logging()

    specs = list(args.agent)
    if args.seed is not None:
        given = {spec.player for spec in specs}
        specs += [
            AgentSpec(type="random", player=p.id, init_params={"seed": args.seed + i})
            for i, p in enumerate(PLAYER_PROFILES) if p.id not in given
        ]

    max_turns = args.max_turns if args.max_turns is not None else settings.max_turns
    log.info("Starting game, max_steps=%d max_turns=%s", args.max_steps, max_turns)
    engine = ConquestEngine(GameConfig(max_turns=max_turns))
    runner = GameRunner(engine=engine, specs=specs)
    runner.run(max_steps=args.max_steps)

    if args.show_board:
        print(engine.world.board.render())
    for summary in engine.players_summary():
        print(f"{summary['name']:<8} units={summary['units']:<4} alive={summary['isAlive']}")
    print(f"state={engine.game_state.value} result={engine.result.value} winner={engine.winner}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
