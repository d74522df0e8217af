"""Core simulation engine.

Sequences one frame of the runner: camera scroll, level generation, player
movement, collision resolution, pruning and run-state evaluation. The engine
is headless; rendering and input live in collaborators that exchange
InputSnapshot / FrameSnapshot values with it.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

from .collision import CollisionResolver, Contact
from .config import GameConfig
from .entities import Collectible, Platform, Player, Rect, World
from .level_gen import LevelGenerator
from .physics import InputSnapshot, PhysicsSimulator
from .run_state import RunPhase, RunStateMachine
from .storage import HighScoreStore


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one frame, handed to the render sink."""
    player: Rect  # Screen space
    platforms: Tuple[Platform, ...]
    collectibles: Tuple[Collectible, ...]
    camera_x: float
    world_speed: float
    viewport: Tuple[float, float]
    lava_level: float
    score: int
    high_score: int
    level: int
    phase: RunPhase
    banner_progress: float
    banner_target_y: float
    frame: int

    @property
    def game_over(self) -> bool:
        return self.phase is RunPhase.GAME_OVER


class RunnerEngine:
    """Headless game engine coordinating all systems.

    Handles:
    - Fixed-step frame sequencing
    - Run restart
    - Viewport changes
    - Snapshots for rendering and observation
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None,
    ):
        """Initialize engine and generate the opening stretch.

        Args:
            config: Game configuration. Uses defaults if None.
            store: High-score store. Session memory if None.
            seed: Level generation seed. Random if None.
        """
        self.config = config or GameConfig()

        self.simulator = PhysicsSimulator(self.config.physics)
        self.resolver = CollisionResolver(self.config.layout.broad_phase_margin)
        self.generator = LevelGenerator.from_config(self.config, seed=seed)
        self.state_machine = RunStateMachine(self.config.run, store)

        self.world = World(
            viewport_width=self.config.screen_width,
            viewport_height=self.config.screen_height,
            lava_thickness=self.config.run.lava_thickness,
            world_speed=self.config.run.initial_world_speed,
        )
        self.player = self._spawn_player()
        self.frame_count = 0
        self.last_contacts: Tuple[Contact, ...] = ()

        self.generator.extend(self.world)

    @property
    def state(self):
        return self.state_machine.state

    @property
    def running(self) -> bool:
        return self.state_machine.state.running

    @property
    def banner_target_y(self) -> float:
        """Rest position of the game-over banner for the current viewport."""
        return self.world.viewport_height * self.config.run.banner_target_ratio

    def _spawn_player(self) -> Player:
        run = self.config.run
        position = (run.player_start_x, self.world.lava_level - run.spawn_height)
        return Player.from_config(self.config.physics, position)

    def step(self, inputs: Optional[InputSnapshot] = None) -> FrameSnapshot:
        """Advance one frame.

        Args:
            inputs: Input state for this frame. No keys held if None.

        Returns:
            Snapshot of the world after the frame.
        """
        inputs = inputs or InputSnapshot()
        self.frame_count += 1

        if not self.running:
            self.state_machine.tick_banner()
            return self.snapshot()

        world = self.world
        world.camera_x += world.world_speed
        self.state_machine.accelerate(world)

        self.generator.extend(world)

        self.simulator.step(self.player, inputs)

        self.last_contacts = tuple(self.resolver.resolve_platforms(
            self.player, world.camera_x, world.viewport_width, world.platforms,
        ))
        bonus = self.resolver.collect(
            self.player,
            world.camera_x,
            world.viewport_width,
            world.collectibles,
            world.world_speed,
            self.config.run.collectible_multiplier,
        )
        self.state_machine.add_bonus(bonus)

        self.generator.prune(world)

        cause = self.state_machine.terminal_cause(self.player, world)
        if cause is not None:
            self.state_machine.game_over(cause)
        else:
            self.state_machine.award_distance(world)

        return self.snapshot()

    def restart(self, seed: Optional[int] = None) -> None:
        """Start a new run: fresh camera, speed, score, player and level.

        Args:
            seed: Reseed level generation. The stream continues if None.
        """
        if seed is not None:
            self.generator.reseed(seed)
        self.world.reset(self.config.run.initial_world_speed)
        self.generator.reset()
        self.state_machine.restart()
        self.player = self._spawn_player()
        self.last_contacts = ()
        self.generator.extend(self.world)

    def resize(self, width: float, height: float) -> None:
        """Apply a new viewport size. Lava level and banner target follow it."""
        dy = self.world.resize(width, height)
        self.player.y += dy
        self.generator.extend(self.world)

    def snapshot(self) -> FrameSnapshot:
        world = self.world
        state = self.state_machine.state
        return FrameSnapshot(
            player=self.player.screen_rect(),
            platforms=tuple(world.platforms),
            collectibles=tuple(dataclasses.replace(c) for c in world.collectibles),
            camera_x=world.camera_x,
            world_speed=world.world_speed,
            viewport=(world.viewport_width, world.viewport_height),
            lava_level=world.lava_level,
            score=state.score,
            high_score=state.high_score,
            level=state.level,
            phase=state.phase,
            banner_progress=state.banner_progress,
            banner_target_y=self.banner_target_y,
            frame=self.frame_count,
        )

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for observation/logging.

        Returns:
            Dictionary with player kinematics, camera and run flags.
        """
        state = self.state_machine.state
        return {
            "player_position": self.player.position,
            "player_velocity": self.player.velocity,
            "player_on_ground": self.player.on_ground,
            "jumps_used": self.player.jumps_used,
            "camera_x": self.world.camera_x,
            "world_speed": self.world.world_speed,
            "frontier": self.world.next_spawn_x,
            "score": state.score,
            "high_score": state.high_score,
            "level": state.level,
            "running": state.running,
            "death_cause": state.death_cause,
            "contacts": [c.kind.name for c in self.last_contacts],
        }
