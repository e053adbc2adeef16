"""
GameSession: one playthrough of the maze chase.

Each step runs in a fixed order:
1. Pursuer picks a direction (policy) and moves
2. Player commits its latest input intent and moves
3. Collectible under the player is taken; clearing the last one wins
4. Otherwise, sharing a cell with the pursuer loses

Entities only collide when they end a step on the same cell, so two
entities swapping cells pass through each other. Once the outcome is
terminal the session no longer changes.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from .clock import SimulationClock
from .config import Config
from .entities import Entity, EntityKind, parse_direction
from .environment import Direction, GridMap, Position, Tile, resolve_move
from .logging_utils import log_error, log_step, log_success
from .pursuer import PursuerPolicy, RandomRetargetPolicy
from .randomness import RandomSource, build_rng
from .scenario import LevelTemplate
from .schemas import EntityState, OutcomeStatus, SessionOutcome, SessionSnapshot


class GameSession:
    """Owns the grid, both entities, the score and the outcome of one game.

    All collaborators are injected; nothing is shared between sessions, so
    several sessions can run side by side (e.g. in parallel tests).
    """

    def __init__(
        self,
        grid: GridMap,
        player_start: Tuple[int, int],
        pursuer_start: Tuple[int, int],
        *,
        pursuer_direction: Direction = Direction.UP,
        policy: Optional[PursuerPolicy] = None,
        rng: Optional[RandomSource] = None,
        award: Optional[int] = None,
        clock: Optional[SimulationClock] = None,
        verbose: bool = False,
    ):
        """Initialize a session around an already-built grid.

        Args:
            grid: GridMap whose spawn tiles were cleared for these spawns
            player_start: Player spawn (x, y)
            pursuer_start: Pursuer spawn (x, y)
            pursuer_direction: Direction the pursuer starts moving in
            policy: Pursuer direction policy (defaults to RandomRetargetPolicy)
            rng: Randomness source for the policy (defaults to a private
                random.Random seeded from MAZECHASE_SEED when set)
            award: Points per collectible (defaults to COLLECTIBLE_AWARD)
            clock: Step gate used by tick() (defaults to STEP_INTERVAL_MS)
            verbose: Print a line for every step and for the final outcome
        """
        self.grid = grid
        self.player = Entity(kind=EntityKind.PLAYER, position=Position(*player_start))
        self.pursuer = Entity(
            kind=EntityKind.PURSUER,
            position=Position(*pursuer_start),
            direction=pursuer_direction,
        )
        for entity in (self.player, self.pursuer):
            # Fail loudly on spawns the grid does not know about
            if grid.is_wall(entity.position):
                raise ValueError(f"{entity.kind.value} spawn {tuple(entity.position)} is a wall")

        self.policy = policy or RandomRetargetPolicy()
        self.rng = rng if rng is not None else build_rng(Config.RANDOM_SEED)
        self.award = Config.COLLECTIBLE_AWARD if award is None else award
        if self.award < 0:
            raise ValueError("award cannot be negative")
        self.clock = clock or SimulationClock()
        self.verbose = verbose or Config.DEBUG

        self._score = 0
        self._step_count = 0
        self._outcome = SessionOutcome.in_progress()

    @classmethod
    def from_level(
        cls,
        level: LevelTemplate,
        *,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        **kwargs,
    ) -> "GameSession":
        """Build the grid and entities described by a level template.

        ``seed`` is a shortcut for ``rng=build_rng(seed)``. Remaining keyword
        arguments are passed to the constructor.
        """
        grid = GridMap.from_template(
            level.rows,
            level.player_start,
            level.pursuer_start,
            wall_char=level.wall_char,
        )
        if rng is None and seed is not None:
            rng = build_rng(seed)
        return cls(
            grid,
            level.player_start,
            level.pursuer_start,
            pursuer_direction=level.pursuer_direction,
            rng=rng,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def score(self) -> int:
        return self._score

    @property
    def outcome(self) -> SessionOutcome:
        return self._outcome

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def is_terminal(self) -> bool:
        return self._outcome.is_terminal

    def get_snapshot(self) -> SessionSnapshot:
        """Return a frozen copy of the current state for rendering."""
        return SessionSnapshot(
            grid=self.grid.to_state(),
            player=EntityState.from_entity(self.player),
            pursuer=EntityState.from_entity(self.pursuer),
            score=self._score,
            outcome=self._outcome,
            step=self._step_count,
        )

    # ------------------------------------------------------------------
    # Input and timing
    # ------------------------------------------------------------------

    def set_player_desired_direction(self, value: Union[Direction, str, None]) -> bool:
        """Record the player's latest direction intent.

        Accepts a ``Direction`` or a key name such as ``"ArrowLeft"``. Other
        values are ignored. Returns ``True`` when the intent was stored.
        """
        if self.is_terminal:
            return False
        direction = parse_direction(value)
        if direction is None:
            return False
        self.player.desired_direction = direction
        return True

    def tick(self, now_ms: float) -> bool:
        """Run one step if the clock says one is due. Returns whether it ran."""
        if self.is_terminal:
            return False
        if not self.clock.tick(now_ms):
            return False
        self.step()
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self) -> SessionOutcome:
        """Advance the simulation by one step and return the outcome."""
        if self.is_terminal:
            return self._outcome

        self._step_count += 1

        # 1. Pursuer: retarget, then move
        self.pursuer.direction = self.policy.choose_direction(self.pursuer, self.grid, self.rng)
        self.pursuer.position, self.pursuer.direction = resolve_move(
            self.pursuer.position, self.pursuer.direction, self.grid
        )

        # 2. Player: commit latest intent, then move
        self.player.consume_intent()
        self.player.position, self.player.direction = resolve_move(
            self.player.position, self.player.direction, self.grid
        )

        if self.verbose:
            log_step(
                f"[Step {self._step_count}] "
                f"player={tuple(self.player.position)} {self.player.direction.name} "
                f"pursuer={tuple(self.pursuer.position)} {self.pursuer.direction.name}"
            )

        # 3. Collection; the win check runs before the collision check
        if self.grid.tile_at(self.player.position) is Tile.COLLECTIBLE:
            self.grid.collect(self.player.position)
            self._score += self.award
            if self.grid.remaining_collectibles() == 0:
                self._finish(SessionOutcome.won(self._score))
                return self._outcome

        # 4. Collision
        if self.player.position == self.pursuer.position:
            self._finish(SessionOutcome.lost(self._score))

        return self._outcome

    def _finish(self, outcome: SessionOutcome) -> None:
        self._outcome = outcome
        if not self.verbose:
            return
        if outcome.status is OutcomeStatus.WON:
            log_success(outcome.describe())
        else:
            log_error(outcome.describe())
