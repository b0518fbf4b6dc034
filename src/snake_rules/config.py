"""Load-time game constants."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_rules.difficulty import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board geometry and pacing constants for a session.

    Instances are immutable; build a new config to change a value.
    Supports JSON serialization.
    """

    grid_width: int = 30
    grid_height: int = 30
    cell_size: int = 10
    bonus_cycle: int = 50
    initial_snake_length: int = 3
    min_snake_length: int = 1
    poison_probability: float = 0.1
    initial_difficulty: str = "SLOW"

    def __post_init__(self) -> None:
        if self.grid_width < 4 or self.grid_height < 4:
            raise ValueError("grid_width and grid_height must each be at least 4.")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.bonus_cycle < 2:
            raise ValueError("bonus_cycle must be at least 2.")
        if self.min_snake_length < 1:
            raise ValueError("min_snake_length must be at least 1.")
        if self.initial_snake_length < self.min_snake_length:
            raise ValueError(
                "initial_snake_length must be at least min_snake_length."
            )
        # The snake spawns at the centre heading right, body trailing left.
        if self.initial_snake_length > self.grid_width // 2 + 1:
            raise ValueError(
                "initial_snake_length does not fit the configured grid."
            )
        if not 0.0 <= self.poison_probability <= 1.0:
            raise ValueError("poison_probability must be between 0 and 1.")
        Difficulty.from_name(self.initial_difficulty)

    @property
    def difficulty(self) -> Difficulty:
        """The level a new session starts at."""
        return Difficulty.from_name(self.initial_difficulty)

    @property
    def game_width(self) -> int:
        """Board width in pixels."""
        return self.grid_width * self.cell_size

    @property
    def game_height(self) -> int:
        """Board height in pixels."""
        return self.grid_height * self.cell_size

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
        return cls(**raw)
