"""Gymnasium environment wrapper for the runner.

Provides standard Gym API for automated play-testing and data collection.
Observations include both RGB frames and a structured state vector.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Any, Tuple

import pygame

from .config import GameConfig
from .engine import RunnerEngine
from .physics import InputSnapshot
from .render import PygameRenderer
from .storage import MemoryHighScoreStore


# Discrete move action values
MOVE_NONE = 0
MOVE_LEFT = 1
MOVE_RIGHT = 2

STATE_SIZE = 12


class RunnerEnv(gymnasium.Env):
    """Gymnasium wrapper for the runner.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame (zeros unless
               a render_mode is set)
        'state': float32 array of shape (12,) - state vector containing:
            [0-1] player screen position (x, y)
            [2-3] player velocity (vx, vy)
            [4]   on ground (0/1)
            [5]   jumps used
            [6]   camera x
            [7]   world speed
            [8]   clearance above the lava
            [9]   score
            [10]  level
            [11]  game over (0/1)

    Action space (Dict):
        'move': int in {0, 1, 2} - none / left / right
        'jump': int in {0, 1} - jump key held (a jump triggers on 0 -> 1)

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        score: score gained this step (distance + collectibles)
        death: 1.0 on the step the run ends
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (128, 128),
        max_episode_steps: int = 2000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "score": 0.01,
            "death": -10.0,
        }

        self.action_space = spaces.Dict({
            "move": spaces.Discrete(3),
            "jump": spaces.Discrete(2),
        })

        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(STATE_SIZE,),
                dtype=np.float32,
            ),
        })

        # Initialize pygame (caller sets SDL_VIDEODRIVER for headless)
        if not pygame.get_init():
            pygame.init()

        self._surface = pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )
        self._renderer = PygameRenderer(self._surface, draw_hud=False)

        self._display = None
        self._display_renderer = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("RunnerEnv")
            self._display_renderer = PygameRenderer(self._display, flip=True)

        # High score survives across episodes
        self._store = MemoryHighScoreStore()
        self._engine: Optional[RunnerEngine] = None
        self._episode_steps = 0
        self._level_seed = 0

    @property
    def engine(self) -> Optional[RunnerEngine]:
        return self._engine

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        level_seed = int(self.np_random.integers(0, 2**31))
        self._engine = RunnerEngine(self.config, store=self._store, seed=level_seed)
        self._level_seed = level_seed
        self._episode_steps = 0

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        assert self._engine is not None, "Must call reset() before step()"

        score_before = self._engine.state.score
        was_running = self._engine.running

        self._engine.step(self._to_input(action))
        self._episode_steps += 1

        reward_signals = {
            "score": float(self._engine.state.score - score_before),
            "death": 1.0 if was_running and not self._engine.running else 0.0,
        }
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = not self._engine.running
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    @staticmethod
    def _to_input(action) -> InputSnapshot:
        move = action["move"]
        if isinstance(move, np.ndarray):
            move = move.item()
        jump = action["jump"]
        if isinstance(jump, np.ndarray):
            jump = jump.item()
        move = int(move)
        return InputSnapshot(
            left=move == MOVE_LEFT,
            right=move == MOVE_RIGHT,
            jump=bool(int(jump)),
        )

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self):
        # Frames are only drawn when a render mode asks for them
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros(
                (self.obs_height, self.obs_width, 3), dtype=np.uint8
            )
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _get_state_vector(self):
        state = np.zeros(STATE_SIZE, dtype=np.float32)
        engine = self._engine
        if engine is None:
            return state

        player = engine.player
        world = engine.world
        run = engine.state

        state[0] = player.x
        state[1] = player.y
        state[2] = player.vx
        state[3] = player.vy
        state[4] = float(player.on_ground)
        state[5] = float(player.jumps_used)
        state[6] = world.camera_x
        state[7] = world.world_speed
        state[8] = world.lava_level - player.bottom
        state[9] = float(run.score)
        state[10] = float(run.level)
        state[11] = float(not run.running)
        return state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        self._renderer.draw(self._engine.snapshot())
        scaled = pygame.transform.scale(
            self._surface, (self.obs_width, self.obs_height)
        )
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            self._display_renderer.draw(self._engine.snapshot())

    def _get_info(self) -> Dict[str, Any]:
        info = self._engine.get_state() if self._engine else {}
        info["episode_steps"] = self._episode_steps
        info["level_seed"] = self._level_seed
        return info

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
