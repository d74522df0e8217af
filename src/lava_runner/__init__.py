"""lava-runner: endless scrolling platformer over a lava floor.

A fixed-position runner is carried through a procedurally generated stream of
platforms that scrolls past at ever increasing speed. The headless engine
(physics, collision, reachable level generation, run state machine) is
independent of pygame; pygame supplies the input source and renderer, and a
Gymnasium environment exposes the engine for automated play-testing.
"""

from .config import PhysicsConfig, LayoutConfig, RunConfig, GameConfig, CONFIGS
from .entities import Player, Platform, Collectible, World, Rect, BlockType
from .physics import InputSnapshot, PhysicsSimulator
from .collision import CollisionResolver, Contact, ContactKind, rects_overlap
from .constraints import ParameterConstraints, ConstrainedSampler, ConstraintResult, ConstraintViolation
from .level_gen import LevelGenerator, Segment
from .run_state import RunPhase, RunState, RunStateMachine
from .storage import HighScoreStore, MemoryHighScoreStore, JsonHighScoreStore
from .engine import RunnerEngine, FrameSnapshot
from .driver import CancellationToken, FrameDriver, GameHost, run_loop

__all__ = [
    "PhysicsConfig",
    "LayoutConfig",
    "RunConfig",
    "GameConfig",
    "CONFIGS",
    "Player",
    "Platform",
    "Collectible",
    "World",
    "Rect",
    "BlockType",
    "InputSnapshot",
    "PhysicsSimulator",
    "CollisionResolver",
    "Contact",
    "ContactKind",
    "rects_overlap",
    "ParameterConstraints",
    "ConstrainedSampler",
    "ConstraintResult",
    "ConstraintViolation",
    "LevelGenerator",
    "Segment",
    "RunPhase",
    "RunState",
    "RunStateMachine",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "JsonHighScoreStore",
    "RunnerEngine",
    "FrameSnapshot",
    "CancellationToken",
    "FrameDriver",
    "GameHost",
    "run_loop",
]
