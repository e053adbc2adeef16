"""
Mazechase Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Simulation timing (milliseconds of wall time)
    STEP_INTERVAL_MS: int = int(os.getenv("STEP_INTERVAL_MS", "150"))
    FRAME_INTERVAL_MS: int = int(os.getenv("FRAME_INTERVAL_MS", "16"))

    # Scoring and pursuer behaviour
    COLLECTIBLE_AWARD: int = int(os.getenv("COLLECTIBLE_AWARD", "10"))
    RETARGET_CHANCE: float = float(os.getenv("RETARGET_CHANCE", "0.1"))

    # Level selection and reproducibility
    DEFAULT_LEVEL: str = os.getenv("MAZECHASE_LEVEL", "classic")
    RANDOM_SEED: int | None = _optional_int(os.getenv("MAZECHASE_SEED"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = os.getenv("MAZECHASE_DEBUG", "false").lower() in ("1", "true", "yes")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LEVELS_DIR: Path = Path(__file__).parent / "levels"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.STEP_INTERVAL_MS <= 0:
            raise ValueError("STEP_INTERVAL_MS must be a positive number of milliseconds")

        if cls.FRAME_INTERVAL_MS < 0:
            raise ValueError("FRAME_INTERVAL_MS cannot be negative")

        if cls.COLLECTIBLE_AWARD < 0:
            raise ValueError("COLLECTIBLE_AWARD cannot be negative")

        if not 0.0 <= cls.RETARGET_CHANCE <= 1.0:
            raise ValueError(
                "RETARGET_CHANCE must be between 0 and 1 "
                f"(got {cls.RETARGET_CHANCE})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Mazechase Configuration:",
            f"  Level: {cls.DEFAULT_LEVEL}",
            f"  Step Interval: {cls.STEP_INTERVAL_MS}ms",
            f"  Frame Interval: {cls.FRAME_INTERVAL_MS}ms",
            f"  Award: {cls.COLLECTIBLE_AWARD}",
            f"  Retarget Chance: {cls.RETARGET_CHANCE}",
            f"  Seed: {cls.RANDOM_SEED if cls.RANDOM_SEED is not None else 'random'}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
