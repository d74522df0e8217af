"""Endless procedural level generation with reachability guarantees.

The generator keeps a frontier (World.next_spawn_x) ahead of the visible
window and fills the space behind it with a platform stream:

- Platform heights come from [base_height, base_height + height_span]
- Gaps come from [gap_min, gap_min + gap_span], measured from the previous
  platform's right edge
- Empty stretches (frontier skips) are only taken while the accumulated gap
  can still be cleared by a maximum-effort jump

Both spans are derived from player kinematics (see constraints.py), so no
emitted pair of consecutive platforms is out of reach. Entities that fall far
enough behind the camera are pruned to keep memory bounded.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .config import PhysicsConfig, LayoutConfig, GameConfig
from .constraints import height_span, gap_span
from .entities import BLOCK_PALETTE, Collectible, Platform, World

logger = logging.getLogger(__name__)


@dataclass
class Segment:
    """Transition from the previous platform to a newly emitted one."""
    platform: Platform
    gap: float  # Previous right edge to this left edge
    height: float  # Height of this platform above the lava
    height_delta: float  # Change in height from the previous platform


class LevelGenerator:
    """Extends the platform/collectible stream ahead of the camera."""

    def __init__(
        self,
        physics: PhysicsConfig,
        layout: LayoutConfig,
        seed: Optional[int] = None,
        history_limit: int = 256,
    ):
        self.physics = physics
        self.layout = layout
        self._rng = random.Random(seed)

        # Most recent transitions, for reachability auditing
        self.history: Deque[Segment] = deque(maxlen=history_limit)
        self._last_right: Optional[float] = None
        self._last_height: Optional[float] = None

        self._compute_reachability()

    def _compute_reachability(self) -> None:
        self.max_jump_height = self.physics.max_jump_height
        self.max_jump_distance = self.physics.max_jump_distance
        self.height_span = height_span(self.physics, self.layout)
        self.gap_span = gap_span(self.physics, self.layout)

    def reseed(self, seed: Optional[int]) -> None:
        self._rng.seed(seed)

    def reset(self) -> None:
        """Forget the previous run. The next extend() starts at frontier 0."""
        self.history.clear()
        self._last_right = None
        self._last_height = None

    def extend(self, world: World) -> int:
        """Generate until the frontier covers the viewport plus lookahead.

        Returns:
            Number of platforms emitted.
        """
        layout = self.layout
        emitted = 0

        if world.next_spawn_x <= 0 and self._last_right is None:
            self._emit_runway(world)
            emitted += 1
        elif self._last_right is None:
            self._last_right = world.next_spawn_x
            self._last_height = layout.base_height

        horizon = world.camera_x + world.viewport_width + layout.lookahead
        while world.next_spawn_x < horizon:
            if self._rng.random() < layout.platform_chance or not self._can_skip(world):
                self._emit_platform(world)
                emitted += 1
            else:
                world.next_spawn_x += layout.skip_step

        if emitted:
            logger.debug(
                "Generated %d platforms, frontier at %.0f", emitted, world.next_spawn_x
            )
        return emitted

    def prune(self, world: World) -> None:
        """Drop entities further than retention_margin behind the camera."""
        cutoff = world.camera_x - self.layout.retention_margin
        world.platforms = [p for p in world.platforms if p.x >= cutoff]
        world.collectibles = [c for c in world.collectibles if c.x >= cutoff]

    def _can_skip(self, world: World) -> bool:
        """Whether an empty stretch still leaves the next platform reachable."""
        pending = world.next_spawn_x - self._last_right
        worst = pending + self.layout.skip_step + self.layout.gap_min + self.gap_span
        return worst <= self.max_jump_distance

    def _emit_runway(self, world: World) -> None:
        """Flat starting platform at world x 0, under the spawn point."""
        layout = self.layout
        block, color = BLOCK_PALETTE[0]
        height = layout.base_height
        runway = Platform(
            x=0.0,
            y=world.lava_level - height,
            width=layout.runway_width,
            height=layout.platform_thickness,
            block=block,
            color=color,
        )
        world.platforms.append(runway)
        world.next_spawn_x = runway.right
        self.history.append(Segment(runway, gap=0.0, height=height, height_delta=0.0))
        self._last_right = runway.right
        self._last_height = height

    def _emit_platform(self, world: World) -> None:
        layout = self.layout
        rng = self._rng

        height = layout.base_height + rng.uniform(0.0, self.height_span)
        width = rng.choice(layout.platform_widths)
        gap = layout.gap_min + rng.uniform(0.0, self.gap_span)
        block, color = rng.choice(BLOCK_PALETTE)

        platform = Platform(
            x=world.next_spawn_x + gap,
            y=world.lava_level - height,
            width=width,
            height=layout.platform_thickness,
            block=block,
            color=color,
        )
        world.platforms.append(platform)

        if rng.random() < layout.collectible_chance:
            size = layout.collectible_size
            world.collectibles.append(Collectible(
                x=platform.x + size / 2,
                y=platform.y - size,
                width=size,
                height=size,
            ))

        self.history.append(Segment(
            platform,
            gap=platform.x - self._last_right,
            height=height,
            height_delta=height - self._last_height,
        ))
        self._last_right = platform.right
        self._last_height = height
        world.next_spawn_x = platform.right

    @classmethod
    def from_config(cls, config: GameConfig, seed: Optional[int] = None) -> "LevelGenerator":
        """Create generator from full game config."""
        return cls(physics=config.physics, layout=config.layout, seed=seed)
