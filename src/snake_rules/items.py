"""Consumable items: the primary Apple and the bonus apples."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from snake_rules.grid import Tile

if TYPE_CHECKING:
    from snake_rules.difficulty import Difficulty
    from snake_rules.snake import Snake


class ItemKind(enum.Enum):
    """Tag identifying an item variant."""

    APPLE = "apple"
    GOLDEN_APPLE = "golden_apple"
    POISONED_APPLE = "poisoned_apple"


@dataclass(frozen=True)
class ItemEffect:
    """Length and score change applied when an item is eaten."""

    length_delta: int
    score_delta: int


ITEM_EFFECTS: dict[ItemKind, ItemEffect] = {
    ItemKind.APPLE: ItemEffect(length_delta=1, score_delta=10),
    ItemKind.GOLDEN_APPLE: ItemEffect(length_delta=3, score_delta=50),
    ItemKind.POISONED_APPLE: ItemEffect(length_delta=-2, score_delta=-20),
}


class Item:
    """An item occupying one tile of the board."""

    kind: ClassVar[ItemKind]
    is_primary: ClassVar[bool] = False

    def __init__(self, tile: Tile) -> None:
        self.tile = tile

    @property
    def effect(self) -> ItemEffect:
        return ITEM_EFFECTS[self.kind]

    def consume(self, snake: Snake, difficulty: Difficulty) -> int:
        """Apply this item's effect to *snake*. Returns the score change."""
        return snake.add_item(self, difficulty)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "tile": list(self.tile)}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tile.x}, {self.tile.y})"


class Apple(Item):
    """Primary food. Exactly one exists and it respawns when eaten."""

    kind = ItemKind.APPLE
    is_primary = True


class GoldenApple(Item):
    """Bonus item granting extra length and score."""

    kind = ItemKind.GOLDEN_APPLE


class PoisonedApple(Item):
    """Bonus item that shortens the snake and costs score."""

    kind = ItemKind.POISONED_APPLE


ITEM_FACTORIES: dict[ItemKind, Callable[[Tile], Item]] = {
    ItemKind.APPLE: Apple,
    ItemKind.GOLDEN_APPLE: GoldenApple,
    ItemKind.POISONED_APPLE: PoisonedApple,
}


def make_item(kind: ItemKind, tile: Tile) -> Item:
    """Construct the item variant registered for *kind*."""
    return ITEM_FACTORIES[kind](tile)


def choose_bonus_kind(
    rng: np.random.Generator, poison_probability: float = 0.1,
) -> ItemKind:
    """Pick a bonus variant: poisoned with *poison_probability*, else golden."""
    if rng.random() < poison_probability:
        return ItemKind.POISONED_APPLE
    return ItemKind.GOLDEN_APPLE
