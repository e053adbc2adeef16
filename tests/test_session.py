"""Tests for GameSession step ordering, scoring and outcomes."""

from collections import deque

import pytest
from pydantic import ValidationError

from mazechase.clock import SimulationClock
from mazechase.entities import Entity
from mazechase.environment import Direction, GridMap, Position, Tile
from mazechase.pursuer import PursuerPolicy, RandomRetargetPolicy
from mazechase.randomness import RandomSource, ScriptedRandom
from mazechase.scenario import load_level
from mazechase.schemas import OutcomeStatus, SessionOutcome
from mazechase.session import GameSession


CORRIDOR = [
    "1111111",
    "1000001",
    "1111111",
]

SHORT_CORRIDOR = [
    "11111",
    "10001",
    "11111",
]


class StillPolicy(PursuerPolicy):
    """Pursuer that never moves."""

    def choose_direction(self, pursuer: Entity, grid: GridMap, rng: RandomSource) -> Direction:
        return Direction.NONE


def corridor_session(rows, player, pursuer, *, pursuer_direction=Direction.LEFT, policy=None):
    grid = GridMap.from_template(rows, player, pursuer)
    return GameSession(
        grid,
        player,
        pursuer,
        pursuer_direction=pursuer_direction,
        policy=policy or RandomRetargetPolicy(0.1),
        # 0.5 never retargets, so the pursuer keeps its heading
        rng=ScriptedRandom(floats=[0.5]),
        award=10,
    )


def test_scripted_collision_loses_with_score_so_far():
    session = corridor_session(CORRIDOR, (1, 1), (5, 1))
    session.set_player_desired_direction(Direction.RIGHT)

    assert session.step().status is OutcomeStatus.IN_PROGRESS
    assert session.player.position == Position(2, 1)
    assert session.pursuer.position == Position(4, 1)
    assert session.score == 10

    outcome = session.step()
    assert session.player.position == session.pursuer.position == Position(3, 1)
    assert outcome == SessionOutcome.lost(20)
    assert session.is_terminal


def test_pursuer_walking_into_idle_player_loses():
    session = corridor_session(SHORT_CORRIDOR, (1, 1), (3, 1))

    session.step()
    assert session.pursuer.position == Position(2, 1)
    assert not session.is_terminal

    outcome = session.step()
    assert outcome.status is OutcomeStatus.LOST
    assert outcome.final_score == 0


def test_swapping_cells_is_not_a_collision():
    session = corridor_session(CORRIDOR, (1, 1), (4, 1))
    session.set_player_desired_direction("ArrowRight")

    session.step()
    assert (session.player.position, session.pursuer.position) == (Position(2, 1), Position(3, 1))

    session.step()
    # Entities crossed paths inside the step
    assert (session.player.position, session.pursuer.position) == (Position(3, 1), Position(2, 1))
    assert session.outcome.status is OutcomeStatus.IN_PROGRESS

    session.step()
    outcome = session.step()
    assert outcome == SessionOutcome.won(30)


def test_collecting_last_dot_on_collision_step_wins():
    session = corridor_session(SHORT_CORRIDOR, (1, 1), (3, 1))
    session.set_player_desired_direction(Direction.RIGHT)

    outcome = session.step()

    assert session.player.position == session.pursuer.position
    assert outcome == SessionOutcome.won(10)


def test_terminal_session_does_not_change():
    session = corridor_session(CORRIDOR, (1, 1), (5, 1))
    session.set_player_desired_direction(Direction.RIGHT)
    session.step()
    session.step()
    assert session.outcome.status is OutcomeStatus.LOST

    before = session.get_snapshot()
    for _ in range(5):
        assert session.step() == before.outcome
    assert session.set_player_desired_direction(Direction.LEFT) is False
    assert session.tick(10_000.0) is False

    after = session.get_snapshot()
    assert after == before
    assert session.grid.remaining_collectibles() == before.remaining_collectibles


def test_blocked_player_stays_stopped_until_new_intent():
    session = corridor_session(CORRIDOR, (1, 1), (5, 1), policy=StillPolicy())

    session.set_player_desired_direction(Direction.UP)
    session.step()
    assert session.player.position == Position(1, 1)
    assert session.player.direction is Direction.NONE

    # No new intent: the committed direction stays NONE
    session.step()
    assert session.player.position == Position(1, 1)

    session.set_player_desired_direction(Direction.RIGHT)
    session.step()
    session.step()
    assert session.player.position == Position(3, 1)
    assert session.player.direction is Direction.RIGHT


def test_latest_intent_wins_and_unknown_input_is_ignored():
    session = corridor_session(CORRIDOR, (1, 1), (5, 1), policy=StillPolicy())

    assert session.set_player_desired_direction(Direction.UP) is True
    assert session.set_player_desired_direction("right") is True
    assert session.set_player_desired_direction("space") is False
    assert session.set_player_desired_direction(Direction.NONE) is False
    assert session.set_player_desired_direction(None) is False
    assert session.set_player_desired_direction(42) is False

    session.step()
    assert session.player.position == Position(2, 1)


def test_player_steps_into_cell_pursuer_just_left():
    # The pursuer retargets (sample 0.0) toward the only open cell, then the
    # player steps into the cell the pursuer just left.
    session = corridor_session(
        SHORT_CORRIDOR, (2, 1), (3, 1), pursuer_direction=Direction.NONE,
    )
    session.rng = ScriptedRandom(floats=[0.0], ints=[0])
    session.set_player_desired_direction(Direction.RIGHT)

    session.step()

    assert session.pursuer.position == Position(2, 1)
    assert session.player.position == Position(3, 1)
    assert not session.is_terminal


def test_snapshot_is_frozen_and_detached():
    session = corridor_session(CORRIDOR, (1, 1), (5, 1), policy=StillPolicy())
    snapshot = session.get_snapshot()

    with pytest.raises(ValidationError):
        snapshot.score = 99

    session.set_player_desired_direction(Direction.RIGHT)
    session.step()

    assert snapshot.score == 0
    assert snapshot.player.position == (1, 1)
    assert snapshot.tiles[1][2] is Tile.COLLECTIBLE
    assert session.get_snapshot().tiles[1][2] is Tile.EMPTY


def test_tick_gates_steps_on_interval():
    grid = GridMap.from_template(CORRIDOR, (1, 1), (5, 1))
    session = GameSession(
        grid, (1, 1), (5, 1),
        policy=StillPolicy(),
        rng=ScriptedRandom(),
        clock=SimulationClock(150),
    )

    assert session.tick(0.0) is False
    assert session.tick(100.0) is False
    assert session.tick(150.0) is True
    assert session.step_count == 1
    assert session.tick(299.0) is False
    assert session.tick(300.0) is True
    assert session.step_count == 2


def test_sessions_are_independent():
    level = load_level("classic")
    first = GameSession.from_level(level, seed=1, policy=StillPolicy(), award=10)
    second = GameSession.from_level(level, seed=1, policy=StillPolicy())

    first.set_player_desired_direction(Direction.RIGHT)
    first.step()

    assert first.score == 10
    assert second.score == 0
    assert second.grid.tile_at((2, 1)) is Tile.COLLECTIBLE


def test_same_seed_same_pursuer_path():
    level = load_level("classic")

    def trajectory(seed):
        session = GameSession.from_level(level, seed=seed)
        path = []
        for _ in range(60):
            session.step()
            path.append(session.pursuer.position)
        return path

    assert trajectory(5) == trajectory(5)


def _reachable_open_cells(rows, start):
    """Breadth-first reference for the reachability rule (walls are '1')."""
    height, width = len(rows), len(rows[0])

    def is_open(x, y):
        return rows[y][x] != "1"

    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        neighbors = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
        if is_open(0, y) and is_open(width - 1, y):
            if x == 0:
                neighbors.append((width - 1, y))
            if x == width - 1:
                neighbors.append((0, y))
        for nx, ny in neighbors:
            if 0 <= nx < width and 0 <= ny < height and is_open(nx, ny) and (nx, ny) not in seen:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


def test_classic_level_collect_everything_wins():
    level = load_level("classic")
    session = GameSession.from_level(level, policy=StillPolicy(), rng=ScriptedRandom(), award=10)
    grid = session.grid

    expected = _reachable_open_cells(level.rows, tuple(level.player_start))
    expected -= {tuple(level.player_start), tuple(level.pursuer_start)}

    collectibles = {
        (x, y)
        for y in range(grid.rows)
        for x in range(grid.cols)
        if grid.tile_at((x, y)) is Tile.COLLECTIBLE
    }
    assert collectibles == expected
    assert grid.remaining_collectibles() == len(expected)
    # Tunnel row is reachable through the wrap edge
    assert grid.row_allows_wrap(7)
    assert (0, 7) in collectibles and (27, 7) in collectibles
    assert grid.tile_at((1, 1)) is Tile.EMPTY
    assert grid.tile_at((26, 13)) is Tile.EMPTY

    total = len(expected)
    for x, y in sorted(expected):
        assert not session.is_terminal
        session.player.position = Position(x, y)
        session.step()

    assert session.outcome == SessionOutcome.won(10 * total)
    assert session.grid.remaining_collectibles() == 0
