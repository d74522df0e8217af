"""Game entities: Player, platforms, collectibles and the scrolling world.

Entities are plain data records. Coordinates follow screen conventions: the
origin is the top-left corner and y grows downward. Platforms and
collectibles live in world space; the player's x is screen-fixed and must be
offset by the camera before it is compared against them.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .config import PhysicsConfig


class Rect(NamedTuple):
    """Axis-aligned rectangle (x, y is the top-left corner)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class BlockType(Enum):
    """Render-only material tag for platforms."""
    STONE = "stone"
    WOOD = "wood"


# (block type, base color) pairs platforms are drawn from
BLOCK_PALETTE: Tuple[Tuple[BlockType, Tuple[int, int, int]], ...] = (
    (BlockType.STONE, (139, 115, 85)),
    (BlockType.WOOD, (160, 82, 45)),
    (BlockType.STONE, (101, 67, 33)),
    (BlockType.WOOD, (93, 78, 55)),
    (BlockType.WOOD, (139, 69, 19)),
    (BlockType.STONE, (105, 105, 105)),
    (BlockType.STONE, (119, 136, 153)),
)


@dataclass
class Player:
    """Player character.

    x is a screen coordinate, y is shared by screen and world. Mutated every
    frame by the simulator and the collision resolver; recreated on restart.
    """
    x: float = 100.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    width: float = 32.0
    height: float = 64.0
    max_speed: float = 8.0
    jump_power: float = 15.0
    jump_max: int = 2
    on_ground: bool = False
    jumps_used: int = 0
    jump_latched: bool = False  # True while the jump key is held after triggering

    @classmethod
    def from_config(
        cls,
        physics: PhysicsConfig,
        position: Tuple[float, float],
    ) -> "Player":
        """Create a player at rest with kinematics taken from the physics config."""
        x, y = position
        return cls(
            x=x,
            y=y,
            max_speed=physics.max_speed,
            jump_power=physics.jump_power,
            jump_max=physics.jump_max,
        )

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    def world_x(self, camera_x: float) -> float:
        return self.x + camera_x

    def world_rect(self, camera_x: float) -> Rect:
        """Player rectangle in world space."""
        return Rect(self.x + camera_x, self.y, self.width, self.height)

    def screen_rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Platform:
    """Solid world-space block. Immutable once generated."""
    x: float
    y: float
    width: float
    height: float = 32.0
    block: BlockType = BlockType.STONE
    color: Tuple[int, int, int] = BLOCK_PALETTE[0][1]

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Collectible:
    """Bonus item. Flips to collected exactly once."""
    x: float
    y: float
    width: float = 32.0
    height: float = 32.0
    collected: bool = False
    value: int = 0  # Points awarded, recorded at pickup

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class World:
    """Camera, generation frontier and the active entity sets."""
    viewport_width: float = 800.0
    viewport_height: float = 600.0
    lava_thickness: float = 32.0
    camera_x: float = 0.0
    world_speed: float = 1.5
    next_spawn_x: float = 0.0
    platforms: List[Platform] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)

    @property
    def lava_level(self) -> float:
        """Screen y of the lava surface. Follows the viewport height."""
        return self.viewport_height - self.lava_thickness

    def reset(self, world_speed: float) -> None:
        """Rewind the camera and frontier and drop every entity."""
        self.camera_x = 0.0
        self.world_speed = world_speed
        self.next_spawn_x = 0.0
        self.platforms = []
        self.collectibles = []

    def resize(self, width: float, height: float) -> float:
        """Change the viewport and move every entity with the lava surface.

        Heights above the lava are preserved, so reachability between
        existing and newly generated platforms is unaffected.

        Returns:
            Vertical shift applied, for callers that own other entities.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        old_lava = self.lava_level
        self.viewport_width = width
        self.viewport_height = height
        dy = self.lava_level - old_lava

        if dy:
            self.platforms = [dataclasses.replace(p, y=p.y + dy) for p in self.platforms]
            for item in self.collectibles:
                item.y += dy
        return dy

    def platform_under(self, world_x: float) -> Optional[Platform]:
        """Topmost platform spanning world_x, if any."""
        spanning = [p for p in self.platforms if p.x <= world_x < p.right]
        if not spanning:
            return None
        return min(spanning, key=lambda p: p.y)
