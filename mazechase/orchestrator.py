"""
Host loop that plays the role of the renderer/input collaborator.

Coordinates one frame at a time on a single asyncio task:
1. Poll the input source and forward the latest direction intent
2. Let the session's clock decide whether a simulation step is due
3. Notify step listeners (previous and new snapshot) when a step ran
4. Hand the current snapshot to the frame renderer
5. Yield to the event loop until the next frame

Steps are synchronous, so listeners and renderers only ever observe state
from between whole steps.
"""

import asyncio
import time
from typing import Any, Callable, Dict, List, Optional, Union

from .config import Config
from .environment import Direction
from .logging_utils import log_error, log_info, log_success
from .schemas import OutcomeStatus, SessionSnapshot
from .session import GameSession


InputSource = Callable[[], Optional[Union[Direction, str]]]
FrameRenderer = Callable[[SessionSnapshot], None]
StepListener = Callable[[int, SessionSnapshot, SessionSnapshot], None]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Orchestrator:
    """
    Drives a GameSession from a frame loop.

    All collaborators are injected: the session, an optional input source,
    an optional frame renderer and optional step listeners. The time source
    can be replaced for deterministic tests.
    """

    def __init__(
        self,
        session: GameSession,
        *,
        input_source: Optional[InputSource] = None,
        renderer: Optional[FrameRenderer] = None,
        step_listeners: Optional[List[StepListener]] = None,
        frame_interval_ms: Optional[float] = None,
        time_source: Optional[Callable[[], float]] = None,
        verbose: bool = True,
    ):
        """Initialize the loop.

        Args:
            session: The GameSession to drive
            input_source: Callable polled once per frame; returns a Direction,
                a key name, or None when there is no new intent
            renderer: Callable receiving the snapshot every frame
            step_listeners: Callables invoked after each simulation step with
                (step, previous_snapshot, new_snapshot)
            frame_interval_ms: Delay between frames (defaults to FRAME_INTERVAL_MS)
            time_source: Returns the current time in milliseconds (defaults to
                time.monotonic)
            verbose: Print start/finish lines
        """
        self.session = session
        self.input_source = input_source
        self.renderer = renderer
        self.step_listeners = step_listeners or []
        self.frame_interval_ms = (
            Config.FRAME_INTERVAL_MS if frame_interval_ms is None else frame_interval_ms
        )
        self.time_source = time_source or _monotonic_ms
        self.verbose = verbose

        # Collaborator failures are reported, not raised; kept for inspection.
        self.collaborator_errors: List[Exception] = []

    async def run(
        self,
        max_steps: Optional[int] = None,
        max_frames: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Run frames until the session ends or a limit is reached.

        Args:
            max_steps: Stop after this many simulation steps (None = no limit)
            max_frames: Stop after this many frames (None = no limit)

        Returns:
            Dict with outcome, final_snapshot, steps and frames

        Raises:
            Exception: If a simulation step fails
        """
        session = self.session
        start_step = session.step_count
        frames = 0

        if self.verbose:
            log_info(
                f"Starting session: {session.grid.cols}x{session.grid.rows} grid, "
                f"{session.grid.remaining_collectibles()} collectibles, "
                f"step every {session.clock.interval_ms:g}ms",
                indent=0,
            )

        while not session.is_terminal:
            if max_steps is not None and session.step_count - start_step >= max_steps:
                break
            if max_frames is not None and frames >= max_frames:
                break
            frames += 1

            self._poll_input()

            previous = session.get_snapshot() if self.step_listeners else None
            try:
                fired = session.tick(self.time_source())
            except Exception as e:
                log_error(f"ERROR at step {session.step_count}: {e}", indent=0)
                raise

            current = session.get_snapshot()
            if fired and previous is not None:
                self._notify_step(session.step_count, previous, current)
            self._render(current)

            if not session.is_terminal:
                await asyncio.sleep(self.frame_interval_ms / 1000.0)

        final_snapshot = session.get_snapshot()
        if self.verbose:
            self._print_summary(final_snapshot)

        return {
            "outcome": session.outcome,
            "final_snapshot": final_snapshot,
            "steps": session.step_count - start_step,
            "frames": frames,
        }

    def _poll_input(self) -> None:
        if self.input_source is None:
            return
        try:
            intent = self.input_source()
        except Exception as e:
            self._report("input source", e)
            return
        if intent is not None:
            self.session.set_player_desired_direction(intent)

    def _notify_step(self, step: int, previous: SessionSnapshot, current: SessionSnapshot) -> None:
        for listener in self.step_listeners:
            try:
                listener(step, previous, current)
            except Exception as e:
                self._report("step listener", e)

    def _render(self, snapshot: SessionSnapshot) -> None:
        if self.renderer is None:
            return
        try:
            self.renderer(snapshot)
        except Exception as e:
            self._report("renderer", e)

    def _report(self, where: str, error: Exception) -> None:
        self.collaborator_errors.append(error)
        log_error(f"[{where}] {type(error).__name__}: {error}")

    def _print_summary(self, snapshot: SessionSnapshot) -> None:
        outcome = snapshot.outcome
        print()
        if outcome.status is OutcomeStatus.WON:
            log_success(outcome.describe(), indent=0, bold=True)
        elif outcome.status is OutcomeStatus.LOST:
            log_error(outcome.describe(), indent=0, bold=True)
        else:
            log_info(
                f"Stopped after {snapshot.step} steps "
                f"(score {snapshot.score}, {snapshot.remaining_collectibles} left)",
                indent=0,
            )
