"""Run lifecycle: RUNNING / GAME_OVER, scoring and difficulty ramp.

While running, the world speeds up a little every frame and the score grows
with distance. Every level_distance of travel the level advances and the
world gets a one-off speed bonus. Touching the lava, dropping below the
viewport or falling behind the camera ends the run; scoring stops at that
point and the game-over banner starts sliding in.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .config import RunConfig
from .entities import Player, World
from .storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class RunState:
    """Score and lifecycle data for the current run."""
    score: int = 0
    high_score: int = 0
    level: int = 1
    phase: RunPhase = RunPhase.RUNNING
    banner_progress: float = 0.0  # 0 = hidden, 1 = at rest
    distance: float = 0.0  # World distance since the last level advance
    death_cause: Optional[str] = None  # "lava", "fall", "behind"

    @property
    def running(self) -> bool:
        return self.phase is RunPhase.RUNNING


class RunStateMachine:
    """Owns RunState and every transition on it."""

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        store: Optional[HighScoreStore] = None,
    ):
        self.config = config or RunConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.state = RunState(high_score=self.store.get_high_score())

    def terminal_cause(self, player: Player, world: World) -> Optional[str]:
        """Why the run should end this frame, or None."""
        if player.bottom >= world.lava_level:
            return "lava"
        if player.y > world.viewport_height:
            return "fall"
        if player.world_x(world.camera_x) < world.camera_x - self.config.behind_margin:
            return "behind"
        return None

    def is_terminal(self, player: Player, world: World) -> bool:
        return self.terminal_cause(player, world) is not None

    def accelerate(self, world: World) -> None:
        """Per-frame speed ramp and level tracking. Call after the camera moved."""
        if not self.state.running:
            return

        self.state.distance += world.world_speed
        world.world_speed += self.config.speed_increment

        if self.state.distance >= self.config.level_distance:
            self.state.distance -= self.config.level_distance
            self.state.level += 1
            world.world_speed += self.config.level_speed_bonus
            logger.info(
                "Level %d reached, world speed %.2f", self.state.level, world.world_speed
            )

    def award_distance(self, world: World) -> None:
        """Distance score for this frame."""
        if self.state.running:
            self.state.score += math.floor(world.world_speed)

    def add_bonus(self, points: int) -> None:
        if self.state.running:
            self.state.score += points

    def game_over(self, cause: Optional[str] = None) -> None:
        """RUNNING -> GAME_OVER. Saves the high score when it was beaten."""
        state = self.state
        if not state.running:
            return

        state.phase = RunPhase.GAME_OVER
        state.banner_progress = 0.0
        state.death_cause = cause

        if state.score > state.high_score:
            state.high_score = state.score
            self.store.set_high_score(state.score)
            logger.info("Game over (%s): new high score %d", cause, state.score)
        else:
            logger.info(
                "Game over (%s): score %d, high score %d", cause, state.score, state.high_score
            )

    def tick_banner(self) -> None:
        if self.state.running:
            return
        step = 1.0 / self.config.banner_frames
        self.state.banner_progress = min(1.0, self.state.banner_progress + step)

    def restart(self) -> None:
        """Back to RUNNING with a fresh score. The high score is kept."""
        self.state = RunState(high_score=self.state.high_score)
        logger.info("Run restarted, high score %d", self.state.high_score)
