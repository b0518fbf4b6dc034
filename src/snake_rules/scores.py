"""Score records and the stores that persist them."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from snake_rules.errors import PersistenceError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Score:
    """Final score of one game."""

    player_name: str
    score: int
    timestamp: str = field(default_factory=_now)

    def to_dict(self) -> dict:
        return asdict(self)


class ScoreSink(Protocol):
    """Anything that accepts finished-game scores."""

    def add_score(self, score: Score) -> None: ...


class MemoryScoreStore:
    """Keeps scores in process memory."""

    def __init__(self) -> None:
        self._scores: list[Score] = []

    def add_score(self, score: Score) -> None:
        self._scores.append(score)

    @property
    def scores(self) -> list[Score]:
        return list(self._scores)

    def top(self, limit: int = 10) -> list[Score]:
        return sorted(self._scores, key=lambda s: s.score, reverse=True)[:limit]


class JsonScoreStore:
    """File-backed score store.

    All scores live in a single JSON document of the form
    ``{"scores": [{"player_name": ..., "score": ..., "timestamp": ...}]}``.
    The file is rewritten on every :meth:`add_score`.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[Score]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text())
            return [Score(**s) for s in raw.get("scores", [])]
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise PersistenceError(
                f"Cannot read score store {self._path}: {exc}"
            ) from exc

    def _write(self, scores: list[Score]) -> None:
        data = {"scores": [s.to_dict() for s in scores]}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as exc:
            raise PersistenceError(
                f"Cannot write score store {self._path}: {exc}"
            ) from exc

    def add_score(self, score: Score) -> None:
        """Append a score and rewrite the store."""
        scores = self._read()
        scores.append(score)
        self._write(scores)
        logger.info(
            "Saved score %d for '%s' to %s.",
            score.score, score.player_name, self._path,
        )

    @property
    def scores(self) -> list[Score]:
        return self._read()

    def top(self, limit: int = 10) -> list[Score]:
        """Return the *limit* highest scores, best first."""
        return sorted(self._read(), key=lambda s: s.score, reverse=True)[:limit]
