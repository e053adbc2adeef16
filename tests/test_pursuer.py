"""Tests for the random-retarget pursuer policy with injected randomness."""

import random

import pytest

from mazechase.entities import Entity, EntityKind
from mazechase.environment import Direction, GridMap, Position
from mazechase.pursuer import RandomRetargetPolicy
from mazechase.randomness import ScriptedRandom, build_rng


OPEN_ROOM = [
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
]

# Pursuer at (5, 1) is sealed in by walls on both sides.
SEALED_PURSUER = [
    "1111111",
    "1000101",
    "1111111",
]

WRAP_TEMPLATE = [
    "111111",
    "100111",
    "000100",
    "111111",
]


def make_pursuer(x: int, y: int, direction: Direction = Direction.UP) -> Entity:
    return Entity(kind=EntityKind.PURSUER, position=Position(x, y), direction=direction)


@pytest.fixture
def room() -> GridMap:
    return GridMap.from_template(OPEN_ROOM, (1, 1), (2, 2))


def test_sample_below_threshold_always_retargets(room):
    policy = RandomRetargetPolicy(0.1)
    rng = ScriptedRandom(floats=[0.05], ints=[2])

    direction = policy.choose_direction(make_pursuer(2, 2), room, rng)

    # Candidates are RIGHT, LEFT, DOWN, UP; index 2 picks DOWN
    assert direction is Direction.DOWN
    assert rng.int_bounds == [4]


def test_sample_above_threshold_never_retargets(room):
    policy = RandomRetargetPolicy(0.1)
    rng = ScriptedRandom(floats=[0.5])
    pursuer = make_pursuer(2, 2, Direction.LEFT)

    for _ in range(20):
        assert policy.choose_direction(pursuer, room, rng) is Direction.LEFT
    assert rng.int_bounds == []


def test_threshold_itself_does_not_retarget(room):
    policy = RandomRetargetPolicy(0.1)
    rng = ScriptedRandom(floats=[0.1])
    assert policy.choose_direction(make_pursuer(2, 2, Direction.RIGHT), room, rng) is Direction.RIGHT


def test_candidates_exclude_walls(room):
    policy = RandomRetargetPolicy(0.1)
    rng = ScriptedRandom(floats=[0.0], ints=[1])

    # Top-left corner: only RIGHT and DOWN are open
    direction = policy.choose_direction(make_pursuer(1, 1), room, rng)
    assert direction is Direction.DOWN
    assert rng.int_bounds == [2]


def test_no_open_neighbor_keeps_direction():
    grid = GridMap.from_template(SEALED_PURSUER, (1, 1), (5, 1))
    policy = RandomRetargetPolicy(0.1)
    rng = ScriptedRandom(floats=[0.0])

    assert policy.choose_direction(make_pursuer(5, 1, Direction.NONE), grid, rng) is Direction.NONE
    assert rng.int_bounds == []


def test_wrap_candidates_are_opt_in():
    grid = GridMap.from_template(WRAP_TEMPLATE, (1, 1), (2, 1))
    pursuer = make_pursuer(0, 2, Direction.NONE)

    default_rng = ScriptedRandom(floats=[0.0], ints=[0])
    assert RandomRetargetPolicy(0.1).choose_direction(pursuer, grid, default_rng) is Direction.RIGHT
    assert default_rng.int_bounds == [1]

    wrap_rng = ScriptedRandom(floats=[0.0], ints=[1])
    policy = RandomRetargetPolicy(0.1, allow_wrap_candidates=True)
    assert policy.choose_direction(pursuer, grid, wrap_rng) is Direction.LEFT
    assert wrap_rng.int_bounds == [2]


def test_seeded_rng_is_reproducible(room):
    policy = RandomRetargetPolicy(0.5)

    def run(seed):
        rng = build_rng(seed)
        pursuer = make_pursuer(2, 2)
        picks = []
        for _ in range(30):
            picks.append(policy.choose_direction(pursuer, room, rng))
        return picks

    assert run(11) == run(11)


def test_random_random_satisfies_random_source(room):
    policy = RandomRetargetPolicy(1.0)
    direction = policy.choose_direction(make_pursuer(2, 2), room, random.Random(3))
    assert direction in (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


def test_invalid_retarget_chance_rejected():
    with pytest.raises(ValueError):
        RandomRetargetPolicy(1.5)
