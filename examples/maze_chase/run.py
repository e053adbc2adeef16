"""
Maze Chase - terminal demo

Plays the classic level in the terminal with an autopilot standing in for
keyboard input: every few frames it picks a random open direction for the
player. The pursuer wanders on its own.

Run: python examples/maze_chase/run.py --seed 7
"""

import argparse
import asyncio
import random

from mazechase import (
    GameSession,
    Orchestrator,
    SimulationClock,
    load_level,
    render_ascii,
)
from mazechase.config import Config
from mazechase.environment import open_neighbor_directions


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maze chase terminal demo")
    parser.add_argument("--level", default=Config.DEFAULT_LEVEL, help="Level name (JSON file stem)")
    parser.add_argument("--seed", type=int, default=Config.RANDOM_SEED, help="Seed for pursuer and autopilot")
    parser.add_argument("--steps", type=int, default=500, help="Maximum number of simulation steps")
    parser.add_argument(
        "--interval-ms",
        type=float,
        default=Config.STEP_INTERVAL_MS,
        help="Wall time between simulation steps",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final board")
    return parser.parse_args()


def build_autopilot(session: GameSession, seed: int | None, every: int = 4):
    """Return an input source that picks a random open direction now and then."""
    rng = random.Random(seed)
    frame = {"count": 0}

    def next_intent():
        frame["count"] += 1
        if frame["count"] % every:
            return None
        options = open_neighbor_directions(session.player.position, session.grid)
        return rng.choice(options) if options else None

    return next_intent


def print_board(snapshot) -> None:
    # Clear screen and home the cursor before each frame
    print("\033[2J\033[H" + render_ascii(snapshot), flush=True)


async def main(args: argparse.Namespace) -> None:
    Config.validate()
    level = load_level(args.level)
    session = GameSession.from_level(
        level,
        seed=args.seed,
        clock=SimulationClock(args.interval_ms),
    )

    orchestrator = Orchestrator(
        session,
        input_source=build_autopilot(session, args.seed),
        renderer=None if args.quiet else print_board,
    )

    print(Config.display())
    result = await orchestrator.run(max_steps=args.steps)

    print(render_ascii(result["final_snapshot"]))


if __name__ == "__main__":
    asyncio.run(main(parse_args()))
