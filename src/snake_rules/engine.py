"""Tick-based game engine composing board, snake, and item logic."""

from __future__ import annotations

import enum
import itertools
import logging
from dataclasses import dataclass

import numpy as np

from snake_rules.config import GameConfig
from snake_rules.difficulty import Difficulty
from snake_rules.errors import InvalidInputError, PlacementExhaustionError
from snake_rules.grid import Grid, Tile
from snake_rules.items import Apple, Item, ItemKind, choose_bonus_kind, make_item
from snake_rules.scores import Score, ScoreSink
from snake_rules.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game."""

    NOT_STARTED = "not_started"
    IN_GAME = "in_game"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SnakeState:
    """Read-only snapshot of the snake."""

    body: tuple[Tile, ...]
    direction: Direction
    score: int
    starter_length: int
    alive: bool

    @property
    def head(self) -> Tile:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)


@dataclass(frozen=True)
class ItemView:
    """Read-only snapshot of one item on the board."""

    tile: Tile
    kind: ItemKind


class GameEngine:
    """Single-player, tick-based rules engine.

    The engine owns the snake and the item list. The primary Apple is
    always ``_items[0]``; bonus items follow in spawn order. An external
    driver calls :meth:`step` once per tick and :meth:`set_direction`
    between ticks; at most one turn is accepted per tick.
    """

    def __init__(
        self,
        player_name: str = "player",
        config: GameConfig | None = None,
        score_sink: ScoreSink | None = None,
        seed: int | None = None,
    ) -> None:
        self.player_name = player_name
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.rng = np.random.default_rng(seed)
        self.score_sink = score_sink

        self.snake: Snake | None = None
        self._items: list[Item] = []
        self._difficulty = self.config.difficulty
        self.status = GameStatus.NOT_STARTED
        self.game_over_reason: str | None = None
        self.cycle_counter = 0
        self.tick = 0
        self._able_to_set_direction = False
        self._score_saved = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_game(self, baseline_score: int = 0) -> None:
        """Start a fresh run, seeding the snake with *baseline_score*."""
        self.status = GameStatus.IN_GAME
        self.game_over_reason = None
        self._able_to_set_direction = False
        self._score_saved = False
        self.cycle_counter = 0
        self.tick = 0
        self.snake = Snake(
            self.grid.center,
            Direction.RIGHT,
            length=self.config.initial_snake_length,
            score=baseline_score,
            min_length=self.config.min_snake_length,
        )
        self._items.clear()
        self._items.append(Apple(self._free_tile()))
        logger.info(
            "Game started for '%s' at %s (baseline score %d).",
            self.player_name, self._difficulty.name, baseline_score,
        )

    @property
    def in_game(self) -> bool:
        return self.status is GameStatus.IN_GAME

    def step(self) -> dict:
        """Advance the game by one tick.

        Eaten items are applied first, then collisions are checked on the
        current head, and only then does the snake move. Bonus items spawn
        on a fixed cycle. Returns the full game state as a serializable
        dict; a no-op outside of a running game.
        """
        if not self.in_game:
            return self.get_state()

        self._check_items()
        if self.in_game:
            self._check_collisions()
        if not self.in_game:
            return self.get_state()

        self.snake.move()
        self.tick += 1
        self._able_to_set_direction = True

        self.cycle_counter += 1
        if self.cycle_counter % self.config.bonus_cycle == 0:
            self._spawn_bonus_item()
            # Restart at 1 so the counter never grows without bound.
            self.cycle_counter = 1

        return self.get_state()

    def set_direction(self, key: int | Direction) -> bool:
        """Request a turn from a raw key code (or a :class:`Direction`).

        Only 90° turns are accepted, and only one per tick. Rejected input
        is logged and otherwise ignored. Returns True if the turn was
        committed.
        """
        if not self.in_game or not self._able_to_set_direction:
            return False

        try:
            new_direction = (
                key if isinstance(key, Direction) else Direction.from_key(key)
            )
        except InvalidInputError as exc:
            logger.warning("Ignoring input: %s", exc)
            return False

        current = self.snake.direction
        if not current.is_perpendicular(new_direction):
            logger.debug(
                "Rejected turn from %s to %s.", current.name, new_direction.name,
            )
            return False

        self.snake.set_direction(new_direction)
        self._able_to_set_direction = False
        return True

    # ------------------------------------------------------------------
    # Difficulty
    # ------------------------------------------------------------------

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def can_upgrade_difficulty_level(self) -> bool:
        """True once the snake's starter length meets the level threshold."""
        if self.snake is None or self._difficulty.is_ceiling:
            return False
        return self.snake.starter_length >= self._difficulty.level_length

    def upgrade_difficulty_level(self) -> bool:
        """Move to the next level if allowed. Returns True on upgrade."""
        if not self.can_upgrade_difficulty_level():
            return False
        previous = self._difficulty
        self._difficulty = previous.next_level
        logger.info(
            "Difficulty upgraded from %s to %s.",
            previous.name, self._difficulty.name,
        )
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_score(self) -> bool:
        """Hand the final score to the score sink.

        Only finished games with a positive score are saved, once per
        game. Sink failures are logged and never propagate. Returns True
        if the sink accepted the score.
        """
        if (
            self.status is not GameStatus.GAME_OVER
            or self._score_saved
            or self.score_sink is None
            or self.snake.score <= 0
        ):
            return False

        self._score_saved = True
        record = Score(self.player_name, self.snake.score)
        try:
            self.score_sink.add_score(record)
        except Exception:
            logger.exception(
                "Error saving score %d for '%s'.", record.score, record.player_name,
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snake_state(self) -> SnakeState:
        """Return an immutable snapshot of the snake."""
        if self.snake is None:
            raise RuntimeError("Game has not been started.")
        return SnakeState(
            body=tuple(self.snake.body),
            direction=self.snake.direction,
            score=self.snake.score,
            starter_length=self.snake.starter_length,
            alive=self.snake.alive,
        )

    def items(self) -> tuple[ItemView, ...]:
        """Return an immutable snapshot of the items, Apple first."""
        return tuple(ItemView(item.tile, item.kind) for item in self._items)

    @property
    def bonus_count(self) -> int:
        return sum(1 for item in self._items if not item.is_primary)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "player_name": self.player_name,
            "status": self.status.value,
            "game_over_reason": self.game_over_reason,
            "tick": self.tick,
            "score": self.snake.score if self.snake is not None else 0,
            "difficulty": self._difficulty.to_dict(),
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict() if self.snake is not None else None,
            "items": [item.to_dict() for item in self._items],
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _free_tile(self) -> Tile:
        occupied = itertools.chain(
            self.snake.body, (item.tile for item in self._items),
        )
        return self.grid.random_free_tile(occupied, self.rng)

    def _check_items(self) -> None:
        """Apply every item under the head; relocate the Apple, drop bonuses.

        A full board ends the game only after all items under the head have
        been applied, so the saved score is the final one.
        """
        head = self.snake.head
        board_full = False
        for item in list(self._items):
            if item.tile != head:
                continue
            delta = item.consume(self.snake, self._difficulty)
            logger.debug(
                "Ate %s at tick %d (score %+d).", item.kind.value, self.tick, delta,
            )
            if item.is_primary:
                board_full = not self._relocate_apple()
            else:
                self._items.remove(item)
        if board_full:
            self._end_game("board_full")

    def _relocate_apple(self) -> bool:
        """Move the Apple to a free tile. Returns False if none is left."""
        try:
            self._items[0] = Apple(self._free_tile())
        except PlacementExhaustionError:
            logger.warning("No room left for a new apple; the board is full.")
            return False
        return True

    def _spawn_bonus_item(self) -> Item | None:
        """Place one bonus item, evicting the oldest bonus when at capacity."""
        try:
            tile = self._free_tile()
        except PlacementExhaustionError:
            logger.warning("Skipping bonus spawn: no free tile.")
            return None

        kind = choose_bonus_kind(self.rng, self.config.poison_probability)
        while self.bonus_count >= self._difficulty.max_bonus_items:
            evicted = self._items.pop(1)
            logger.debug("Evicted %r to make room for a bonus item.", evicted)

        item = make_item(kind, tile)
        self._items.append(item)
        logger.debug("Spawned %r at tick %d.", item, self.tick)
        return item

    def _check_collisions(self) -> None:
        if not self.snake.alive:
            self._end_game("self_collision")
        elif not self.grid.in_bounds(self.snake.head):
            self.snake.alive = False
            self._end_game("wall")

    def _end_game(self, reason: str) -> None:
        self.status = GameStatus.GAME_OVER
        self.game_over_reason = reason
        logger.info(
            "Game over for '%s' at tick %d (%s) with score %d.",
            self.player_name, self.tick, reason, self.snake.score,
        )
        self.save_score()


def create_session(
    player_name: str,
    *,
    config: GameConfig | None = None,
    score_sink: ScoreSink | None = None,
    seed: int | None = None,
    baseline_score: int = 0,
) -> GameEngine:
    """Create an engine for *player_name* and start its first game."""
    engine = GameEngine(
        player_name, config=config, score_sink=score_sink, seed=seed,
    )
    engine.init_game(baseline_score)
    return engine
