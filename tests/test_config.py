"""Tests for configuration system."""

import pytest

from lava_runner.config import (
    PhysicsConfig, LayoutConfig, RunConfig, GameConfig, CONFIGS,
)


class TestPhysicsConfig:
    def test_defaults(self):
        config = PhysicsConfig()
        assert config.gravity == 0.6
        assert config.friction == 0.85
        assert config.move_accel == 1.2
        assert config.max_speed == 8.0
        assert config.jump_power == 15.0
        assert config.jump_max == 2
        assert config.comfort_band == (50.0, 200.0)

    def test_max_jump_height(self):
        config = PhysicsConfig()
        # 15² / (2 * 0.6)
        assert config.max_jump_height == pytest.approx(187.5)

    def test_max_jump_distance(self):
        config = PhysicsConfig()
        # 8 * 15 / 0.6
        assert config.max_jump_distance == pytest.approx(200.0)

    def test_stronger_jump_reaches_higher(self):
        weak = PhysicsConfig(jump_power=12.0)
        strong = PhysicsConfig(jump_power=18.0)
        assert strong.max_jump_height > weak.max_jump_height
        assert strong.max_jump_distance > weak.max_jump_distance

    @pytest.mark.parametrize("kwargs", [
        {"gravity": 0.0},
        {"gravity": -1.0},
        {"jump_power": 0.0},
        {"max_speed": -2.0},
        {"friction": 0.0},
        {"friction": 1.5},
        {"jump_max": 0},
        {"comfort_band": (200.0, 50.0)},
    ])
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            PhysicsConfig(**kwargs)

    def test_sample_within_ranges(self):
        for _ in range(20):
            config = PhysicsConfig.sample()
            assert PhysicsConfig.GRAVITY_RANGE[0] <= config.gravity <= PhysicsConfig.GRAVITY_RANGE[1]
            assert PhysicsConfig.JUMP_POWER_RANGE[0] <= config.jump_power <= PhysicsConfig.JUMP_POWER_RANGE[1]
            assert PhysicsConfig.MAX_SPEED_RANGE[0] <= config.max_speed <= PhysicsConfig.MAX_SPEED_RANGE[1]
            assert PhysicsConfig.JUMP_MAX_RANGE[0] <= config.jump_max <= PhysicsConfig.JUMP_MAX_RANGE[1]

    def test_dict_roundtrip(self):
        config = PhysicsConfig(gravity=0.7, jump_max=3)
        restored = PhysicsConfig.from_dict(config.to_dict())
        assert restored == config

    def test_from_dict_ignores_derived(self):
        d = PhysicsConfig().to_dict_with_derived()
        assert "max_jump_height" in d
        restored = PhysicsConfig.from_dict(d)
        assert restored == PhysicsConfig()


class TestLayoutConfig:
    def test_defaults(self):
        config = LayoutConfig()
        assert config.lookahead == 1000.0
        assert config.retention_margin == 200.0
        assert config.broad_phase_margin == 100.0
        assert config.platform_chance == 0.8
        assert config.collectible_chance == 0.3
        assert config.platform_widths == (64.0, 128.0, 192.0)

    def test_rejects_empty_widths(self):
        with pytest.raises(ValueError):
            LayoutConfig(platform_widths=())

    def test_rejects_non_positive_skip(self):
        with pytest.raises(ValueError):
            LayoutConfig(skip_step=0.0)

    def test_sample_within_ranges(self):
        for _ in range(20):
            config = LayoutConfig.sample()
            assert 0.6 <= config.platform_chance <= 0.95
            assert 0.1 <= config.collectible_chance <= 0.5


class TestRunConfig:
    def test_defaults(self):
        config = RunConfig()
        assert config.initial_world_speed == 1.5
        assert config.speed_increment == 0.005
        assert config.collectible_multiplier == 50.0
        assert config.banner_frames == 30

    def test_rejects_zero_level_distance(self):
        with pytest.raises(ValueError):
            RunConfig(level_distance=0.0)


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.screen_width == 800
        assert config.screen_height == 600
        assert config.fps == 60

    def test_rejects_empty_screen(self):
        with pytest.raises(ValueError):
            GameConfig(screen_width=0)

    def test_sample_physics_only(self):
        config = GameConfig.sample_physics_only()
        assert config.layout == LayoutConfig()

    def test_to_dict(self):
        d = GameConfig().to_dict()
        assert d["physics"]["gravity"] == 0.6
        assert d["screen_width"] == 800


class TestPresets:
    def test_all_presets_construct(self):
        assert "default" in CONFIGS
        for name, config in CONFIGS.items():
            assert isinstance(config, GameConfig), name

    def test_classic_single_jump(self):
        assert CONFIGS["classic"].physics.jump_max == 1
