"""Tests for Gymnasium environment wrapper."""

import numpy as np
import pytest

from lava_runner.gym_env import RunnerEnv, MOVE_NONE, MOVE_RIGHT, STATE_SIZE
from lava_runner.config import GameConfig, PhysicsConfig


@pytest.fixture
def env():
    e = RunnerEnv(max_episode_steps=200)
    yield e
    e.close()


def idle():
    return {"move": MOVE_NONE, "jump": 0}


class TestRunnerEnvCreation:
    def test_create_default(self, env):
        assert env.observation_space is not None
        assert env.action_space is not None

    def test_create_with_config(self):
        config = GameConfig(physics=PhysicsConfig(jump_max=1))
        env = RunnerEnv(config=config)
        assert env.config.physics.jump_max == 1
        env.close()

    def test_custom_resolution(self):
        env = RunnerEnv(obs_resolution=(64, 64))
        obs, _ = env.reset(seed=42)
        assert obs["rgb"].shape == (64, 64, 3)
        env.close()


class TestRunnerEnvReset:
    def test_reset_returns_obs_and_info(self, env):
        obs, info = env.reset(seed=42)
        assert obs["state"].shape == (STATE_SIZE,)
        assert obs["state"].dtype == np.float32
        assert info["running"]
        assert info["episode_steps"] == 0

    def test_obs_in_space(self, env):
        obs, _ = env.reset(seed=0)
        assert env.observation_space.contains(obs)

    def test_same_seed_same_level(self, env):
        _, info_a = env.reset(seed=7)
        platforms_a = env.engine.world.platforms
        _, info_b = env.reset(seed=7)
        assert info_a["level_seed"] == info_b["level_seed"]
        assert env.engine.world.platforms == platforms_a

    def test_reset_starts_fresh_run(self, env):
        env.reset(seed=1)
        for _ in range(20):
            env.step(idle())
        obs, info = env.reset()
        assert info["score"] == 0
        assert obs["state"][6] == 0.0  # camera


class TestRunnerEnvStep:
    def test_step_returns_five_tuple(self, env):
        env.reset(seed=42)
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert "reward_signals" in info

    def test_score_reward(self, env):
        env.reset(seed=42)
        _, reward, _, _, info = env.step(idle())
        assert info["reward_signals"]["score"] == 1.0
        assert reward == pytest.approx(0.01)

    def test_death_terminates(self, env):
        env.reset(seed=42)
        engine = env.engine
        engine.world.platforms = []
        engine.player.y = engine.world.lava_level - engine.player.height

        _, reward, terminated, _, info = env.step(idle())

        assert terminated
        assert info["reward_signals"]["death"] == 1.0
        assert reward == pytest.approx(-10.0)

    def test_truncation(self):
        env = RunnerEnv(max_episode_steps=5)
        env.reset(seed=42)
        truncated = False
        for _ in range(5):
            _, _, _, truncated, _ = env.step(idle())
        assert truncated
        env.close()

    def test_move_action_reaches_player(self, env):
        obs, _ = env.reset(seed=42)
        x0 = obs["state"][0]
        obs, _, _, _, _ = env.step({"move": MOVE_RIGHT, "jump": 0})
        assert obs["state"][0] > x0
        assert obs["state"][2] > 0

    def test_numpy_actions_accepted(self, env):
        env.reset(seed=42)
        env.step({"move": np.array(2), "jump": np.array(1)})
        assert env.engine.player.jumps_used == 1


class TestRunnerEnvRender:
    def test_rgb_array_mode(self):
        env = RunnerEnv(render_mode="rgb_array", obs_resolution=(96, 128))
        obs, _ = env.reset(seed=3)
        assert obs["rgb"].shape == (96, 128, 3)
        assert obs["rgb"].dtype == np.uint8
        assert obs["rgb"].any()

        frame = env.render()
        assert frame.shape == (96, 128, 3)
        env.close()

    def test_no_render_mode_gives_blank_frames(self, env):
        obs, _ = env.reset(seed=3)
        assert not obs["rgb"].any()
