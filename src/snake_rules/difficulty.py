"""Difficulty levels and their tunable pacing parameters."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class LevelSpec:
    """Configuration bundle for a single difficulty level."""

    max_bonus_items: int
    tick_interval_ms: int
    level_length: int
    score_multiplier: int
    next_level: str


class Difficulty(enum.Enum):
    """Ordered difficulty levels; progression only moves forward."""

    SLOW = LevelSpec(1, 150, 8, 1, "MEDIUM")
    MEDIUM = LevelSpec(2, 120, 14, 2, "FAST")
    FAST = LevelSpec(3, 90, 22, 3, "EXTREME")
    EXTREME = LevelSpec(4, 70, 32, 4, "EXTREME")

    @property
    def max_bonus_items(self) -> int:
        return self.value.max_bonus_items

    @property
    def tick_interval_ms(self) -> int:
        return self.value.tick_interval_ms

    @property
    def level_length(self) -> int:
        """Starter length at which the game may move to the next level."""
        return self.value.level_length

    @property
    def score_multiplier(self) -> int:
        return self.value.score_multiplier

    @property
    def next_level(self) -> Difficulty:
        return Difficulty[self.value.next_level]

    @property
    def is_ceiling(self) -> bool:
        """True for the last level, whose successor is itself."""
        return self.next_level is self

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        """Look up a level by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty level {name!r}.") from None

    def to_dict(self) -> dict:
        """Serialize the level descriptor to a dictionary."""
        return {
            "name": self.name,
            "max_bonus_items": self.max_bonus_items,
            "tick_interval_ms": self.tick_interval_ms,
            "level_length": self.level_length,
            "score_multiplier": self.score_multiplier,
            "next_level": self.value.next_level,
        }
