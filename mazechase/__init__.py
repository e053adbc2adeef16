"""
Mazechase - single-screen maze-chase game core.

A player collects points on a tile grid while a randomly wandering pursuer
roams the maze. The package holds the simulation (grid, movement, pursuer
policy, clock, session) plus a thin text presentation loop.

No global game state: every GameSession owns its map, entities and score.
Randomness, timing and presentation are injected by the caller.
"""

__version__ = "0.1.0"

# Session and loop
from .session import GameSession
from .orchestrator import Orchestrator
from .clock import SimulationClock

# Pursuer behaviour and randomness
from .pursuer import PursuerPolicy, RandomRetargetPolicy
from .randomness import RandomSource, ScriptedRandom, build_rng

# Entities and input
from .entities import Entity, EntityKind, KEY_BINDINGS, parse_direction

# Grid environment
from .environment import (
    Direction,
    GridMap,
    GridMapState,
    InvalidTemplateError,
    MazeChaseError,
    NotCollectibleError,
    OutOfBoundsError,
    Position,
    Tile,
    flood_fill_reachable,
    resolve_move,
)

# Snapshot schemas
from .schemas import EntityState, OutcomeStatus, SessionOutcome, SessionSnapshot

# Level loader helpers
from .scenario import LevelLoader, LevelTemplate, load_level

# Presentation
from .render import render_ascii

__all__ = [
    # Session and loop
    "GameSession",
    "Orchestrator",
    "SimulationClock",
    # Pursuer
    "PursuerPolicy",
    "RandomRetargetPolicy",
    "RandomSource",
    "ScriptedRandom",
    "build_rng",
    # Entities
    "Entity",
    "EntityKind",
    "KEY_BINDINGS",
    "parse_direction",
    # Environment
    "Direction",
    "GridMap",
    "GridMapState",
    "InvalidTemplateError",
    "MazeChaseError",
    "NotCollectibleError",
    "OutOfBoundsError",
    "Position",
    "Tile",
    "flood_fill_reachable",
    "resolve_move",
    # Schemas
    "EntityState",
    "OutcomeStatus",
    "SessionOutcome",
    "SessionSnapshot",
    # Levels
    "LevelLoader",
    "LevelTemplate",
    "load_level",
    # Presentation
    "render_ascii",
]
