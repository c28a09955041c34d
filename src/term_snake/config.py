"""Run configuration for a terminal game session."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from term_snake.game import MAX_DIFFICULTY, MIN_DIFFICULTY
from term_snake.grid import MIN_SIZE

logger = logging.getLogger(__name__)

# Exclusive upper bound for board width and height.
MAX_SIZE = 256


@dataclass(frozen=True)
class GameConfig:
    """Options for one run of the game.

    Supports JSON serialization so a favourite setup can be reused with
    ``--config``.
    """

    width: int = 16
    height: int = 8
    difficulty: int = 5
    show_fps: bool = False
    fps_limit: int = 300
    seed: int | None = None

    def __post_init__(self) -> None:
        if not MIN_SIZE <= self.width < MAX_SIZE:
            raise ValueError(
                f"width must be between {MIN_SIZE} and {MAX_SIZE - 1}."
            )
        if not MIN_SIZE <= self.height < MAX_SIZE:
            raise ValueError(
                f"height must be between {MIN_SIZE} and {MAX_SIZE - 1}."
            )
        if not MIN_DIFFICULTY <= self.difficulty <= MAX_DIFFICULTY:
            raise ValueError(
                f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}."
            )
        if self.fps_limit < 1:
            raise ValueError("fps_limit must be at least 1.")

    @property
    def dimensions(self) -> tuple[int, int]:
        """Board size as ``(rows, cols)``."""
        return self.height, self.width

    @property
    def frame_time(self) -> float:
        """Minimum seconds between two frames."""
        return 1.0 / self.fps_limit

    def replace(self, **overrides) -> GameConfig:
        """Return a copy with the given fields changed."""
        d = self.to_dict()
        d.update(overrides)
        return GameConfig(**d)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        unknown = set(raw) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}.")
        return cls(**raw)
