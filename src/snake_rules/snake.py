"""Snake representation, movement, and item effects."""

from __future__ import annotations

import enum
from collections import deque
from typing import TYPE_CHECKING

from snake_rules.errors import InvalidInputError
from snake_rules.grid import Tile

if TYPE_CHECKING:
    from snake_rules.difficulty import Difficulty
    from snake_rules.items import Item


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def is_horizontal(self) -> bool:
        return self.value[1] == 0

    def is_perpendicular(self, other: Direction) -> bool:
        """True when *other* lies on the other axis (a 90° turn)."""
        return self.is_horizontal != other.is_horizontal

    @classmethod
    def from_key(cls, key_code: int) -> Direction:
        """Map a raw key code to a direction.

        Raises :class:`InvalidInputError` for codes with no binding.
        """
        try:
            return KEY_BINDINGS[key_code]
        except (KeyError, TypeError):
            raise InvalidInputError(f"Unbound key code {key_code!r}.") from None


# Arrow keys (AWT virtual key codes) and WASD.
KEY_BINDINGS: dict[int, Direction] = {
    37: Direction.LEFT,
    38: Direction.UP,
    39: Direction.RIGHT,
    40: Direction.DOWN,
    65: Direction.LEFT,
    87: Direction.UP,
    68: Direction.RIGHT,
    83: Direction.DOWN,
}


class Snake:
    """A snake represented as an ordered deque of tiles.

    The head is ``body[0]``; the tail is ``body[-1]``. Growth earned from
    items is queued and applied one segment per :meth:`move`.
    """

    def __init__(
        self,
        start: Tile,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
        score: int = 0,
        min_length: int = 1,
    ) -> None:
        if min_length < 1:
            raise ValueError("Minimum snake length must be at least 1.")
        if length < min_length:
            raise ValueError(f"Snake length must be at least {min_length}.")
        dx, dy = direction.value
        self.body: deque[Tile] = deque(
            start.offset(-dx * i, -dy * i) for i in range(length)
        )
        self.direction = direction
        self.score = score
        self.starter_length = length
        self.min_length = min_length
        self.alive = True
        self._grow_pending = 0

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Tile:
        """Return the head tile."""
        return self.body[0]

    @property
    def grow_pending(self) -> int:
        return self._grow_pending

    def set_direction(self, new_direction: Direction) -> None:
        """Overwrite the heading. Turn legality is checked by the engine."""
        self.direction = new_direction

    def next_head(self) -> Tile:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        return self.head.offset(dx, dy)

    def move(self) -> Tile | None:
        """Move the snake one step forward.

        The tail is dropped unless growth is queued. Running into the body
        marks the snake dead; the position is kept so the engine can
        inspect it. Returns the vacated tail tile, or ``None`` if the
        snake grew.
        """
        new_head = self.next_head()
        self.body.appendleft(new_head)
        vacated = None
        if self._grow_pending > 0:
            self._grow_pending -= 1
        else:
            vacated = self.body.pop()
        if self.self_collision():
            self.alive = False
        return vacated

    def schedule_growth(self, segments: int = 1) -> None:
        """Queue growth for the next *segments* moves."""
        self._grow_pending += segments

    def shrink(self, segments: int) -> int:
        """Remove up to *segments* of length, never below the minimum.

        Queued growth is cancelled first. Returns the number of body
        segments actually dropped from the tail.
        """
        cancelled = min(self._grow_pending, segments)
        self._grow_pending -= cancelled
        remaining = segments - cancelled
        dropped = 0
        while remaining > 0 and len(self.body) > self.min_length:
            self.body.pop()
            remaining -= 1
            dropped += 1
        return dropped

    def add_item(self, item: Item, difficulty: Difficulty) -> int:
        """Apply a consumed item's effect. Returns the score change."""
        effect = item.effect
        if effect.length_delta > 0:
            self.schedule_growth(effect.length_delta)
        elif effect.length_delta < 0:
            self.shrink(-effect.length_delta)
        self.starter_length = max(
            self.min_length, self.starter_length + effect.length_delta,
        )

        points = effect.score_delta
        if points > 0:
            points *= difficulty.score_multiplier
        previous = self.score
        self.score = max(0, self.score + points)
        return self.score - previous

    def contains_tile(self, tile: Tile) -> bool:
        """Check whether the snake occupies a given tile."""
        return tile in self.body

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in list(self.body)[1:])

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name,
            "score": self.score,
            "starter_length": self.starter_length,
            "alive": self.alive,
        }
