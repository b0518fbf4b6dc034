"""Board geometry: tiles, bounds checks, and free-tile selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

import numpy as np

from snake_rules.errors import PlacementExhaustionError

logger = logging.getLogger(__name__)

# Rejection-sampling attempts before falling back to enumerating free cells.
_MAX_RANDOM_PROBES = 32


class Tile(NamedTuple):
    """One grid cell. ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Tile:
        """Return the tile shifted by ``(dx, dy)`` cells."""
        return Tile(self.x + dx, self.y + dy)


class Grid:
    """Fixed-size discrete board.

    The grid holds no state of its own beyond its dimensions; occupancy is
    supplied by the caller on every query so the snake and item list stay
    the single source of truth. Free-cell enumeration uses a NumPy mask
    with ``(y, x)`` indexing.
    """

    def __init__(self, width: int = 30, height: int = 30) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def capacity(self) -> int:
        """Total number of cells on the board."""
        return self.width * self.height

    @property
    def center(self) -> Tile:
        return Tile(self.width // 2, self.height // 2)

    def in_bounds(self, tile: Tile) -> bool:
        """Check whether a tile lies within the playable area."""
        return 0 <= tile.x < self.width and 0 <= tile.y < self.height

    def occupancy(self, occupied: Iterable[Tile]) -> np.ndarray:
        """Return a boolean ``(height, width)`` mask of occupied cells.

        Tiles outside the board are ignored.
        """
        mask = np.zeros((self.height, self.width), dtype=bool)
        for tile in occupied:
            if self.in_bounds(tile):
                mask[tile.y, tile.x] = True
        return mask

    def free_tiles(self, occupied: Iterable[Tile]) -> list[Tile]:
        """Return every unoccupied tile in row-major order."""
        ys, xs = np.where(~self.occupancy(occupied))
        return [Tile(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def random_free_tile(
        self,
        occupied: Iterable[Tile],
        rng: np.random.Generator,
    ) -> Tile:
        """Pick a tile uniformly at random among unoccupied cells.

        Samples the whole board and rejects occupied cells for a bounded
        number of attempts, then falls back to choosing from the full list
        of free cells. Raises :class:`PlacementExhaustionError` when the
        board is full.
        """
        taken = {t for t in occupied if self.in_bounds(t)}
        if len(taken) >= self.capacity:
            raise PlacementExhaustionError(
                f"No free tile left on a {self.width}x{self.height} board."
            )

        for _ in range(_MAX_RANDOM_PROBES):
            candidate = Tile(
                int(rng.integers(self.width)), int(rng.integers(self.height)),
            )
            if candidate not in taken:
                return candidate

        free = self.free_tiles(taken)
        logger.debug(
            "Random probing exhausted; choosing among %d free tiles.", len(free),
        )
        return free[int(rng.integers(len(free)))]

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
