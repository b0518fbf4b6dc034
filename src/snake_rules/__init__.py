"""Snake rules: single-player snake game engine."""

from snake_rules.config import GameConfig
from snake_rules.difficulty import Difficulty
from snake_rules.engine import (
    GameEngine,
    GameStatus,
    ItemView,
    SnakeState,
    create_session,
)
from snake_rules.errors import (
    InvalidInputError,
    PersistenceError,
    PlacementExhaustionError,
    SnakeRulesError,
)
from snake_rules.grid import Grid, Tile
from snake_rules.items import Apple, GoldenApple, ItemKind, PoisonedApple
from snake_rules.scores import JsonScoreStore, MemoryScoreStore, Score, ScoreSink
from snake_rules.snake import Direction, Snake

__all__ = [
    "Apple",
    "Difficulty",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameStatus",
    "GoldenApple",
    "Grid",
    "InvalidInputError",
    "ItemKind",
    "ItemView",
    "JsonScoreStore",
    "MemoryScoreStore",
    "PersistenceError",
    "PlacementExhaustionError",
    "PoisonedApple",
    "Score",
    "ScoreSink",
    "Snake",
    "SnakeRulesError",
    "SnakeState",
    "Tile",
    "create_session",
]
