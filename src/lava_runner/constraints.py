"""Reachability constraints for generated levels.

The generator draws every platform height and gap from bounded ranges. This
module owns those bounds and checks that, for a given physics/layout pair,
the worst case the generator can produce is still within a maximum-effort
jump:

- height_span(): platform heights vary by at most this much
- gap_span(): gaps exceed gap_min by at most this much
- validate_*(): report configurations whose bounds do not hold

A "valid" config means every generated transition is physically possible,
not that it is easy.
"""

from dataclasses import dataclass
from typing import List, Optional
import random

from .config import PhysicsConfig, LayoutConfig, GameConfig


def height_span(physics: PhysicsConfig, layout: LayoutConfig) -> float:
    """Range of platform heights above base_height."""
    return max(0.0, min(layout.height_cap, physics.max_jump_height - layout.height_safety))


def gap_span(physics: PhysicsConfig, layout: LayoutConfig) -> float:
    """Range of gaps above gap_min."""
    return max(0.0, min(layout.gap_cap, physics.max_jump_distance - layout.gap_safety))


def max_gap(physics: PhysicsConfig, layout: LayoutConfig) -> float:
    """Largest gap a single platform emission can draw."""
    return layout.gap_min + gap_span(physics, layout)


@dataclass
class ConstraintViolation:
    """Describes a constraint violation."""
    param: str
    message: str
    severity: str  # "error" = unreachable platforms possible, "warning" = tight but reachable


@dataclass
class ConstraintResult:
    """Result of constraint validation."""
    valid: bool
    violations: List[ConstraintViolation]

    def __bool__(self) -> bool:
        return self.valid


class ParameterConstraints:
    """Checks that generator bounds stay inside the player's reach."""

    # A jump lower than the player is tall makes most platforms pointless
    MIN_USEFUL_JUMP_HEIGHT = 64.0
    # Warn when the worst gap uses more than this fraction of the reach
    TIGHT_GAP_RATIO = 0.9

    @classmethod
    def validate_physics(cls, physics: PhysicsConfig) -> ConstraintResult:
        """Validate physics config on its own."""
        violations = []

        if physics.max_jump_height < cls.MIN_USEFUL_JUMP_HEIGHT:
            violations.append(ConstraintViolation(
                "jump_power",
                f"Jump apex {physics.max_jump_height:.0f} < {cls.MIN_USEFUL_JUMP_HEIGHT:.0f}",
                "warning"
            ))

        low, high = physics.comfort_band
        if high - low < 1.0:
            violations.append(ConstraintViolation(
                "comfort_band",
                f"Comfort band {physics.comfort_band} leaves no room to steer",
                "warning"
            ))

        errors = [v for v in violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=violations)

    @classmethod
    def validate_layout(cls, layout: LayoutConfig, physics: PhysicsConfig) -> ConstraintResult:
        """Validate layout bounds against physics reach."""
        violations = []

        reach = physics.max_jump_distance
        apex = physics.max_jump_height

        worst_gap = max_gap(physics, layout)
        if worst_gap > reach:
            violations.append(ConstraintViolation(
                "gap_min",
                f"Gap up to {worst_gap:.0f} > jump reach {reach:.0f}",
                "error"
            ))
        elif worst_gap > reach * cls.TIGHT_GAP_RATIO:
            violations.append(ConstraintViolation(
                "gap_cap",
                f"Gap up to {worst_gap:.0f} is within 10% of jump reach {reach:.0f}",
                "warning"
            ))

        span = height_span(physics, layout)
        if span > apex:
            violations.append(ConstraintViolation(
                "height_cap",
                f"Height change up to {span:.0f} > jump apex {apex:.0f}",
                "error"
            ))
        if span == 0.0:
            violations.append(ConstraintViolation(
                "height_safety",
                "Height span collapsed to zero, every platform sits at base_height",
                "warning"
            ))

        for name in ("platform_chance", "collectible_chance"):
            value = getattr(layout, name)
            if not (0.0 <= value <= 1.0):
                violations.append(ConstraintViolation(
                    name,
                    f"{name} {value} outside [0, 1]",
                    "error"
                ))

        errors = [v for v in violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=violations)

    @classmethod
    def validate_config(cls, config: GameConfig) -> ConstraintResult:
        """Validate full game config."""
        all_violations = []

        physics_result = cls.validate_physics(config.physics)
        all_violations.extend(physics_result.violations)

        layout_result = cls.validate_layout(config.layout, config.physics)
        all_violations.extend(layout_result.violations)

        errors = [v for v in all_violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=all_violations)


class ConstrainedSampler:
    """Samples parameters while respecting reachability constraints."""

    def __init__(self, max_attempts: int = 100, seed: Optional[int] = None):
        self.max_attempts = max_attempts
        self._rng = random.Random(seed)

    def sample_physics(self, layout: Optional[LayoutConfig] = None) -> PhysicsConfig:
        """Sample physics that the given layout can generate reachable levels for.

        Raises:
            RuntimeError: If no valid sample is found within max_attempts.
        """
        layout = layout or LayoutConfig()
        for _ in range(self.max_attempts):
            physics = PhysicsConfig.sample(self._rng)
            if ParameterConstraints.validate_layout(layout, physics):
                return physics
        raise RuntimeError(
            f"No reachable physics config found in {self.max_attempts} attempts"
        )

    def sample_config(self) -> GameConfig:
        """Sample a full config that passes validation."""
        for _ in range(self.max_attempts):
            config = GameConfig.sample_full(self._rng)
            if ParameterConstraints.validate_config(config):
                return config
        raise RuntimeError(
            f"No valid config found in {self.max_attempts} attempts"
        )
