"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pytest

from lava_runner.config import GameConfig
from lava_runner.engine import RunnerEngine
from lava_runner.entities import Player, World
from lava_runner.storage import MemoryHighScoreStore


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def world():
    """Empty 800x600 world at the start of a run."""
    return World(viewport_width=800, viewport_height=600)


@pytest.fixture
def player():
    """Player at rest in the middle of the comfort band."""
    return Player(x=100.0, y=100.0)


@pytest.fixture
def engine(game_config):
    """Seeded engine with a session-only high score."""
    return RunnerEngine(game_config, store=MemoryHighScoreStore(), seed=42)
