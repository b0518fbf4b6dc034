"""Fixed-cadence game loop and a headless autopilot."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass

import numpy as np

from snake_rules.engine import GameEngine, GameStatus
from snake_rules.grid import Tile
from snake_rules.items import ItemKind
from snake_rules.snake import Direction

logger = logging.getLogger(__name__)

# Arrow key codes submitted by the autopilot.
ARROW_KEYS: dict[Direction, int] = {
    Direction.LEFT: 37,
    Direction.UP: 38,
    Direction.RIGHT: 39,
    Direction.DOWN: 40,
}

Policy = Callable[[GameEngine], "int | Direction | None"]


@dataclass(frozen=True)
class GameResult:
    """Summary of one finished (or abandoned) game."""

    player_name: str
    score: int
    ticks: int
    length: int
    difficulty: str
    finished: bool
    reason: str | None

    def to_dict(self) -> dict:
        return asdict(self)

    def summary(self) -> str:
        outcome = self.reason if self.finished else "tick limit"
        return (
            f"{self.player_name}: score={self.score} length={self.length} "
            f"ticks={self.ticks} level={self.difficulty} ({outcome})"
        )


class GreedyPolicy:
    """Steers toward the nearest beneficial item, avoiding instant death.

    Among the moves that keep the head on the board and off the body it
    picks the one closest (Manhattan distance) to an Apple or Golden
    Apple, breaking ties at random. Returns ``None`` to keep heading
    straight.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.rng = np.random.default_rng(seed)

    def __call__(self, engine: GameEngine) -> int | None:
        snake = engine.snake
        current = snake.direction
        candidates = [current] + [d for d in Direction if current.is_perpendicular(d)]

        views = engine.items()
        # The tail only moves away if nothing is eaten at the start of the tick.
        blocked = set(snake.body)
        if snake.grow_pending == 0 and all(v.tile != snake.head for v in views):
            blocked.discard(snake.body[-1])

        safe: list[tuple[Direction, Tile]] = []
        for direction in candidates:
            dx, dy = direction.value
            nxt = snake.head.offset(dx, dy)
            if engine.grid.in_bounds(nxt) and nxt not in blocked:
                safe.append((direction, nxt))
        if not safe:
            return None

        targets = [
            view.tile for view in views
            if view.kind is not ItemKind.POISONED_APPLE
        ]

        def distance(tile: Tile) -> int:
            if not targets:
                return 0
            return min(abs(tile.x - t.x) + abs(tile.y - t.y) for t in targets)

        best = min(distance(tile) for _, tile in safe)
        choices = [d for d, tile in safe if distance(tile) == best]
        choice = choices[int(self.rng.integers(len(choices)))]
        return None if choice is current else ARROW_KEYS[choice]


class GameLoop:
    """Drives an engine one tick at a time until the game ends.

    An engine that was never started gets a fresh game first. Between
    ticks the policy is asked for input, which is submitted as a
    key code. After each tick the difficulty is upgraded when the engine
    allows it. In realtime mode the loop sleeps for the current level's
    tick interval.
    """

    def __init__(
        self,
        engine: GameEngine,
        policy: Policy,
        *,
        realtime: bool = False,
        auto_upgrade: bool = True,
    ) -> None:
        self.engine = engine
        self.policy = policy
        self.realtime = realtime
        self.auto_upgrade = auto_upgrade

    def run(self, max_ticks: int | None = None) -> GameResult:
        engine = self.engine
        if engine.status is GameStatus.NOT_STARTED:
            engine.init_game()
        ticks = 0
        while engine.in_game and (max_ticks is None or ticks < max_ticks):
            key = self.policy(engine)
            if key is not None:
                engine.set_direction(key)
            engine.step()
            ticks += 1
            if self.auto_upgrade:
                engine.upgrade_difficulty_level()
            if self.realtime:
                time.sleep(engine.difficulty.tick_interval_ms / 1000.0)

        state = engine.snake_state()
        result = GameResult(
            player_name=engine.player_name,
            score=state.score,
            ticks=engine.tick,
            length=state.length,
            difficulty=engine.difficulty.name,
            finished=not engine.in_game,
            reason=engine.game_over_reason,
        )
        logger.info("Loop finished: %s", result.summary())
        return result
