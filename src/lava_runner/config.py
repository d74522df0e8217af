"""Configuration system for the endless lava runner.

Parameters are grouped the way the simulation consumes them:
- PhysicsConfig: player kinematics (gravity, friction, speed, jump)
- LayoutConfig: procedural generation bounds (gaps, heights, lookahead)
- RunConfig: run pacing and scoring (world speed, levels, banner)
- GameConfig: everything above plus the display settings

All units are pixels and frames. The simulation uses a fixed per-frame step,
so velocities are px/frame and accelerations are px/frame².
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, ClassVar, Optional
import random


@dataclass
class PhysicsConfig:
    """Player kinematics.

    Reachability of generated levels is derived from these values, so the
    level generator and the simulator must always share one instance.
    """

    gravity: float = 0.6  # Added to vy every frame
    friction: float = 0.85  # vx multiplier every frame
    move_accel: float = 1.2  # vx change per frame while left/right is held
    max_speed: float = 8.0  # |vx| cap
    jump_power: float = 15.0  # Initial upward speed of a jump
    jump_max: int = 2  # Jumps allowed before landing again

    # Screen-x band the player is kept inside while the world scrolls
    comfort_band: Tuple[float, float] = (50.0, 200.0)

    # === SAMPLING RANGES ===

    GRAVITY_RANGE: ClassVar[Tuple[float, float]] = (0.45, 0.9)
    JUMP_POWER_RANGE: ClassVar[Tuple[float, float]] = (12.0, 18.0)
    MAX_SPEED_RANGE: ClassVar[Tuple[float, float]] = (6.0, 11.0)
    FRICTION_RANGE: ClassVar[Tuple[float, float]] = (0.75, 0.92)
    JUMP_MAX_RANGE: ClassVar[Tuple[int, int]] = (1, 3)

    def __post_init__(self):
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")
        if self.jump_power <= 0:
            raise ValueError(f"jump_power must be positive, got {self.jump_power}")
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if not (0.0 < self.friction <= 1.0):
            raise ValueError(f"friction must be in (0, 1], got {self.friction}")
        if self.jump_max < 1:
            raise ValueError(f"jump_max must be at least 1, got {self.jump_max}")
        low, high = self.comfort_band
        if low > high:
            raise ValueError(f"comfort_band {self.comfort_band} is inverted")

    # === DERIVED REACHABILITY ===

    @property
    def max_jump_height(self) -> float:
        """Apex of a single jump: v² / 2g."""
        return self.jump_power ** 2 / (2 * self.gravity)

    @property
    def max_jump_distance(self) -> float:
        """Horizontal reach at full speed for the time it takes to reach the apex."""
        return self.max_speed * (self.jump_power / self.gravity)

    @classmethod
    def sample(cls, rng: Optional[random.Random] = None) -> "PhysicsConfig":
        """Sample all physics parameters (module RNG if rng is None)."""
        rng = rng or random
        return cls(
            gravity=rng.uniform(*cls.GRAVITY_RANGE),
            friction=rng.uniform(*cls.FRICTION_RANGE),
            max_speed=rng.uniform(*cls.MAX_SPEED_RANGE),
            jump_power=rng.uniform(*cls.JUMP_POWER_RANGE),
            jump_max=rng.randint(*cls.JUMP_MAX_RANGE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gravity": self.gravity,
            "friction": self.friction,
            "move_accel": self.move_accel,
            "max_speed": self.max_speed,
            "jump_power": self.jump_power,
            "jump_max": self.jump_max,
            "comfort_band": list(self.comfort_band),
        }

    def to_dict_with_derived(self) -> Dict[str, Any]:
        """Convert to dictionary including derived reachability values."""
        return {
            **self.to_dict(),
            "max_jump_height": self.max_jump_height,
            "max_jump_distance": self.max_jump_distance,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PhysicsConfig":
        """Create from dictionary (ignores derived values)."""
        return cls(
            gravity=d.get("gravity", 0.6),
            friction=d.get("friction", 0.85),
            move_accel=d.get("move_accel", 1.2),
            max_speed=d.get("max_speed", 8.0),
            jump_power=d.get("jump_power", 15.0),
            jump_max=d.get("jump_max", 2),
            comfort_band=tuple(d.get("comfort_band", (50.0, 200.0))),
        )


@dataclass
class LayoutConfig:
    """Procedural generation parameters.

    Heights are measured upward from the lava surface. Gaps are measured from
    the right edge of the previous platform to the left edge of the next.
    """
    lookahead: float = 1000.0  # Generate this far past the right edge of the viewport
    retention_margin: float = 200.0  # Keep entities this far behind the camera
    broad_phase_margin: float = 100.0  # Collision candidates must lie this close to the viewport

    platform_chance: float = 0.8
    collectible_chance: float = 0.3
    skip_step: float = 64.0  # Frontier advance when no platform is emitted

    platform_widths: Tuple[float, ...] = (64.0, 128.0, 192.0)
    platform_thickness: float = 32.0
    collectible_size: float = 32.0
    runway_width: float = 320.0  # Starting platform under the spawn point

    base_height: float = 80.0
    height_cap: float = 120.0
    height_safety: float = 50.0

    gap_min: float = 32.0
    gap_cap: float = 80.0
    gap_safety: float = 40.0

    PLATFORM_CHANCE_RANGE: ClassVar[Tuple[float, float]] = (0.6, 0.95)
    COLLECTIBLE_CHANCE_RANGE: ClassVar[Tuple[float, float]] = (0.1, 0.5)
    HEIGHT_CAP_RANGE: ClassVar[Tuple[float, float]] = (60.0, 160.0)
    GAP_CAP_RANGE: ClassVar[Tuple[float, float]] = (40.0, 120.0)

    def __post_init__(self):
        if not self.platform_widths:
            raise ValueError("platform_widths must not be empty")
        if min(self.platform_widths) <= 0:
            raise ValueError(f"platform_widths must be positive, got {self.platform_widths}")
        if self.skip_step <= 0:
            raise ValueError(f"skip_step must be positive, got {self.skip_step}")
        if self.lookahead < 0 or self.retention_margin < 0:
            raise ValueError("lookahead and retention_margin must be non-negative")

    @classmethod
    def sample(cls, rng: Optional[random.Random] = None) -> "LayoutConfig":
        """Sample random layout config."""
        rng = rng or random
        return cls(
            platform_chance=rng.uniform(*cls.PLATFORM_CHANCE_RANGE),
            collectible_chance=rng.uniform(*cls.COLLECTIBLE_CHANCE_RANGE),
            height_cap=rng.uniform(*cls.HEIGHT_CAP_RANGE),
            gap_cap=rng.uniform(*cls.GAP_CAP_RANGE),
        )


@dataclass
class RunConfig:
    """Run pacing, scoring and terminal conditions."""
    initial_world_speed: float = 1.5
    speed_increment: float = 0.005  # Per frame while running
    collectible_multiplier: float = 50.0  # Bonus = floor(world_speed * multiplier)

    level_distance: float = 5000.0  # World distance per level
    level_speed_bonus: float = 1.0  # World speed added on each level advance

    lava_thickness: float = 32.0
    behind_margin: float = 100.0  # Falling this far behind the camera ends the run

    player_start_x: float = 100.0
    spawn_height: float = 200.0  # Spawn this far above the lava

    banner_frames: int = 30  # Frames for the game-over banner to slide in
    banner_target_ratio: float = 0.5  # Banner rest position as a fraction of viewport height

    def __post_init__(self):
        if self.level_distance <= 0:
            raise ValueError(f"level_distance must be positive, got {self.level_distance}")
        if self.banner_frames < 1:
            raise ValueError(f"banner_frames must be at least 1, got {self.banner_frames}")


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    run: RunConfig = field(default_factory=RunConfig)

    # Display settings
    screen_width: int = 800
    screen_height: int = 600
    fps: int = 60

    def __post_init__(self):
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError(
                f"screen size must be positive, got {self.screen_width}x{self.screen_height}"
            )

    @classmethod
    def sample_physics_only(cls, rng: Optional[random.Random] = None) -> "GameConfig":
        """Sample config with full physics variation."""
        return cls(physics=PhysicsConfig.sample(rng))

    @classmethod
    def sample_full(cls, rng: Optional[random.Random] = None) -> "GameConfig":
        """Sample physics and layout together."""
        return cls(physics=PhysicsConfig.sample(rng), layout=LayoutConfig.sample(rng))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
        }


# Predefined configurations
CONFIGS = {
    # Classic feel
    "default": GameConfig(),

    # One jump only, no recovery in the air
    "classic": GameConfig(physics=PhysicsConfig(jump_max=1)),

    # Low gravity, long arcs
    "floaty": GameConfig(physics=PhysicsConfig(gravity=0.45, jump_power=14.0)),

    # Heavy player, short hops, sticky stops
    "heavy": GameConfig(physics=PhysicsConfig(gravity=0.85, jump_power=16.0, friction=0.78)),

    # Fast world from the start
    "sprint": GameConfig(run=RunConfig(initial_world_speed=3.0, speed_increment=0.008)),

    # Slow ramp, long levels
    "marathon": GameConfig(run=RunConfig(speed_increment=0.002, level_distance=10000.0)),
}
