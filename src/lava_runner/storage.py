"""High-score persistence.

The store holds a single integer. It is read once when a run state machine is
created and written only when a game over beats the previous best. Storage
failures never reach the frame loop: the store logs the problem and keeps
working in memory for the rest of the session, starting from 0 if the read
failed.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, Union

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Persistent scalar store used at game-over transitions."""

    def get_high_score(self) -> int:
        ...

    def set_high_score(self, score: int) -> None:
        ...


class MemoryHighScoreStore:
    """Session-only store."""

    def __init__(self, initial: int = 0):
        self._high_score = int(initial)

    def get_high_score(self) -> int:
        return self._high_score

    def set_high_score(self, score: int) -> None:
        self._high_score = int(score)


class JsonHighScoreStore:
    """Stores the high score as {"high_score": n} in a JSON file.

    Usage:
        store = JsonHighScoreStore("data/high_score.json")
        best = store.get_high_score()
        store.set_high_score(best + 10)
    """

    def __init__(self, path: Union[str, Path] = "data/high_score.json"):
        self.path = Path(path)
        self._high_score = 0
        self._loaded = False
        self.degraded = False  # True once storage failed; memory only from then on

    def get_high_score(self) -> int:
        if self._loaded or self.degraded:
            return self._high_score

        self._loaded = True
        if not self.path.exists():
            return self._high_score

        try:
            with open(self.path) as f:
                data = json.load(f)
            self._high_score = int(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as exc:
            logger.warning(
                "Could not read high score from %s (%s); using 0 for this session",
                self.path, exc,
            )
            self._high_score = 0
            self.degraded = True

        return self._high_score

    def set_high_score(self, score: int) -> None:
        self._high_score = int(score)
        self._loaded = True
        if self.degraded:
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"high_score": self._high_score}, f)
        except OSError as exc:
            logger.warning(
                "Could not write high score to %s (%s); keeping it in memory",
                self.path, exc,
            )
            self.degraded = True
