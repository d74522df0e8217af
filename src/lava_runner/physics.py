"""Per-frame movement model for the player.

This module handles input response, friction, gravity and integration. It
uses a fixed per-frame step: the scheduler never passes a time delta, so
every constant here is expressed per frame.
"""

from dataclasses import dataclass
from typing import Optional

from .config import PhysicsConfig
from .entities import Player


@dataclass(frozen=True)
class InputSnapshot:
    """Input state sampled once at the start of a frame.

    jump is the held state of the jump key; the simulator turns it into a
    single trigger per press.
    """
    left: bool = False
    right: bool = False
    jump: bool = False


class PhysicsSimulator:
    """Applies input, friction and gravity to the player, then integrates."""

    def __init__(self, config: Optional[PhysicsConfig] = None):
        self.config = config or PhysicsConfig()

    def step(self, player: Player, inputs: InputSnapshot) -> None:
        """Advance the player by one frame."""
        self._apply_horizontal_intent(player, inputs)
        self._apply_jump_intent(player, inputs)

        # Friction decays vx toward zero whether or not a key is held
        player.vx *= self.config.friction
        # No terminal velocity
        player.vy += self.config.gravity

        player.x += player.vx
        player.y += player.vy

        self._clamp_to_comfort_band(player)

    def _apply_horizontal_intent(self, player: Player, inputs: InputSnapshot) -> None:
        accel = self.config.move_accel
        if inputs.left:
            player.vx = max(player.vx - accel, -player.max_speed)
        if inputs.right:
            player.vx = min(player.vx + accel, player.max_speed)

    def _apply_jump_intent(self, player: Player, inputs: InputSnapshot) -> None:
        """Edge-triggered jump: one jump per press, up to jump_max before landing."""
        if not inputs.jump:
            player.jump_latched = False
            return
        if player.jump_latched:
            return
        player.jump_latched = True
        if player.jumps_used < player.jump_max:
            player.vy = -player.jump_power
            player.jumps_used += 1
            player.on_ground = False

    def _clamp_to_comfort_band(self, player: Player) -> None:
        low, high = self.config.comfort_band
        if player.x < low:
            player.x = low
            player.vx = 0.0
        elif player.x > high:
            player.x = high
            player.vx = 0.0
