"""Fixed-interval gate that decouples simulation steps from frame rate."""

from __future__ import annotations

from typing import Optional

from .config import Config


class SimulationClock:
    """Decides on each frame whether a simulation step is due.

    The host calls ``tick(now_ms)`` every frame with a monotonic timestamp in
    milliseconds. The first call only anchors the clock. After that a step
    fires once at least ``interval_ms`` has elapsed since the last fired
    step, and the anchor moves to ``now_ms``.
    """

    def __init__(self, interval_ms: Optional[float] = None):
        interval = Config.STEP_INTERVAL_MS if interval_ms is None else interval_ms
        if interval <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval}")
        self.interval_ms = float(interval)
        self.last_step_at: Optional[float] = None

    def tick(self, now_ms: float) -> bool:
        """Return ``True`` when a step should run for this frame."""
        if self.last_step_at is None:
            self.last_step_at = now_ms
            return False
        if now_ms - self.last_step_at >= self.interval_ms:
            self.last_step_at = now_ms
            return True
        return False

    def reset(self, now_ms: Optional[float] = None) -> None:
        """Re-anchor the clock (``None`` waits for the next ``tick``)."""
        self.last_step_at = now_ms
