"""Scripted policies for automated play-testing.

Each policy takes an observation and returns an action dict
compatible with RunnerEnv's action space.
"""

import numpy as np
from typing import Dict, Any, Optional

from .gym_env import MOVE_NONE, MOVE_LEFT, MOVE_RIGHT


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> Dict[str, Any]:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> Dict[str, Any]:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass

    def _make_action(self, move: int, jump: int) -> Dict[str, Any]:
        return {"move": int(move), "jump": int(jump)}


class IdlePolicy(BasePolicy):
    """Never presses anything. Baseline for how long the runway lasts."""

    name = "idle"

    def act(self, obs):
        return self._make_action(MOVE_NONE, 0)


class RandomPolicy(BasePolicy):
    """Uniform random actions each step."""

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        move = int(self.rng.integers(0, 3))
        jump = int(self.rng.random() < 0.15)  # 15% chance the key is held this step
        return self._make_action(move, jump)


class HopPolicy(BasePolicy):
    """Holds right and taps jump whenever it is on the ground.

    Jumps are edge-triggered, so the key is released on every other step.
    """

    name = "hop"

    def __init__(self):
        self._held = False

    def reset(self):
        self._held = False

    def act(self, obs):
        state = obs["state"]
        on_ground = state[4] > 0.5

        jump = on_ground and not self._held
        self._held = jump
        return self._make_action(MOVE_RIGHT, int(jump))


class BackpedalPolicy(BasePolicy):
    """Holds left. Exercises the left edge of the comfort band."""

    name = "backpedal"

    def act(self, obs):
        return self._make_action(MOVE_LEFT, 0)


POLICIES = {
    "idle": IdlePolicy,
    "random": RandomPolicy,
    "hop": HopPolicy,
    "backpedal": BackpedalPolicy,
}
