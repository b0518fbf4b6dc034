"""Exception types raised by the rules engine."""

from __future__ import annotations


class SnakeRulesError(Exception):
    """Base class for all rules-engine errors."""


class InvalidInputError(SnakeRulesError, ValueError):
    """An input key code or direction change was rejected."""


class PlacementExhaustionError(SnakeRulesError, RuntimeError):
    """No free tile is left on the board to place an item."""


class PersistenceError(SnakeRulesError, OSError):
    """A score store could not read or write its backing storage."""
