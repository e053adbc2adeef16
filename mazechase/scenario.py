"""
Level loading for JSON-defined maze templates.

A level file describes the maze text rows and the two spawn cells:

```json
{
  "name": "classic",
  "description": "...",
  "player_start": [1, 1],
  "pursuer_start": [26, 13],
  "pursuer_direction": "up",
  "wall_char": "1",
  "rows": ["1111...", "1000...", ...]
}
```

Any character other than ``wall_char`` is an open cell. Structural problems
(unequal rows, spawns on walls, nothing to collect) surface as
``InvalidTemplateError`` when the GridMap is built from the template.

Usage:
    loader = LevelLoader()
    level = loader.load("classic")
    session = GameSession.from_level(level, seed=7)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from .config import Config
from .environment import Direction, InvalidTemplateError


class LevelTemplate(BaseModel):
    """Validated level definition (text rows plus spawns)."""

    name: str
    description: str = ""
    rows: List[str] = Field(..., description="Maze rows, one string per row")
    player_start: Tuple[int, int] = Field(..., description="Player spawn (x, y)")
    pursuer_start: Tuple[int, int] = Field(..., description="Pursuer spawn (x, y)")
    pursuer_direction: Direction = Field(
        Direction.UP, description="Initial pursuer direction",
    )
    wall_char: str = Field("1", min_length=1, max_length=1)

    @field_validator("pursuer_direction", mode="before")
    @classmethod
    def _parse_direction(cls, value: Any) -> Any:
        # Level files name directions ("up"); accept members as-is.
        if isinstance(value, str):
            try:
                return Direction[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown direction {value!r}") from None
        if isinstance(value, (list, tuple)):
            return Direction(tuple(value))
        return value

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)


class LevelLoader:
    """Load level templates from a directory of JSON files.

    Directory structure:
    - Default: ``mazechase/levels/`` (``Config.LEVELS_DIR``)
    - Override via constructor: ``LevelLoader(Path("/custom/levels"))``
    - Level files: ``{level_name}.json``; names starting with ``_`` are
      hidden from ``list_levels``
    """

    REQUIRED_FIELDS = ("name", "rows", "player_start", "pursuer_start")

    def __init__(self, levels_dir: Optional[Path] = None):
        self.levels_dir = levels_dir or Config.LEVELS_DIR

    def load(self, level_name: str) -> LevelTemplate:
        """Load a level by name.

        Raises:
            FileNotFoundError: If the level file doesn't exist
            InvalidTemplateError: If required fields are missing or malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        level_path = self.levels_dir / f"{level_name}.json"

        if not level_path.exists():
            raise FileNotFoundError(
                f"Level '{level_name}' not found at {level_path}"
            )

        data = json.loads(level_path.read_text(encoding="utf-8"))
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> LevelTemplate:
        """Validate raw level data and build a ``LevelTemplate``."""
        self._validate_level(data)
        try:
            return LevelTemplate(**data)
        except ValidationError as exc:
            raise InvalidTemplateError(str(exc)) from exc

    def _validate_level(self, data: Dict[str, Any]) -> None:
        if not isinstance(data, dict):
            raise InvalidTemplateError("level file must contain a JSON object")

        missing = [field for field in self.REQUIRED_FIELDS if field not in data]
        if missing:
            raise InvalidTemplateError(f"level missing required fields: {missing}")

        if not data["rows"]:
            raise InvalidTemplateError("level must have at least one row")

    def list_levels(self) -> List[str]:
        """List available level names (without ``.json``)."""
        if not self.levels_dir.exists():
            return []

        return sorted(
            f.stem for f in self.levels_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_level_info(self, level_name: str) -> Dict[str, Any]:
        """Return level metadata without building a grid."""
        level = self.load(level_name)
        return {
            "name": level.name,
            "description": level.description or "No description",
            "width": level.width,
            "height": level.height,
        }


def load_level(level_name: Optional[str] = None) -> LevelTemplate:
    """Convenience function to load a bundled level (default: ``Config.DEFAULT_LEVEL``)."""
    loader = LevelLoader()
    return loader.load(level_name or Config.DEFAULT_LEVEL)
