"""Collision detection and resolution against world-space rectangles.

The player is converted to world space (screen x + camera x) before testing.
Each overlapping platform is resolved on its own, in list order, with the
first matching rule winning for that platform. Overlaps are not reconciled
globally, so a platform resolved later can undo an earlier correction in the
same frame.
"""

import math
from enum import Enum, auto
from typing import Iterable, List, NamedTuple

from .entities import Collectible, Platform, Player, Rect


class ContactKind(Enum):
    """Which side of a platform the player was pushed out of."""
    LANDING = auto()
    CEILING = auto()
    SIDE_RIGHT = auto()  # Player moving right hit the platform's left face
    SIDE_LEFT = auto()  # Player moving left hit the platform's right face


class Contact(NamedTuple):
    kind: ContactKind
    platform: Platform


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap. Rectangles that only share an edge do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


class CollisionResolver:
    """Resolves player/platform overlaps and collectible pickups."""

    def __init__(self, broad_phase_margin: float = 100.0):
        self.broad_phase_margin = broad_phase_margin

    def in_broad_phase(
        self, rect: Rect, camera_x: float, viewport_width: float
    ) -> bool:
        """Cheap reject for entities far outside the visible window."""
        margin = self.broad_phase_margin
        if rect.x + rect.width < camera_x - margin:
            return False
        if rect.x > camera_x + viewport_width + margin:
            return False
        return True

    def resolve_platforms(
        self,
        player: Player,
        camera_x: float,
        viewport_width: float,
        platforms: Iterable[Platform],
    ) -> List[Contact]:
        """Push the player out of every overlapping platform.

        Clears on_ground first; only a landing this frame sets it again.

        Returns:
            Contacts in the order they were resolved.
        """
        player.on_ground = False
        contacts = []

        for platform in platforms:
            if not self.in_broad_phase(platform.rect, camera_x, viewport_width):
                continue
            if not rects_overlap(player.world_rect(camera_x), platform.rect):
                continue

            kind = self._resolve_one(player, camera_x, platform)
            if kind is not None:
                contacts.append(Contact(kind, platform))

        return contacts

    def _resolve_one(self, player: Player, camera_x: float, platform: Platform):
        world_left = player.x + camera_x

        if player.vy > 0 and player.y < platform.y:
            player.y = platform.y - player.height
            player.vy = 0.0
            player.on_ground = True
            player.jumps_used = 0
            return ContactKind.LANDING

        if player.vy < 0 and player.y + player.height > platform.bottom:
            player.y = platform.bottom
            player.vy = 0.0
            return ContactKind.CEILING

        if player.vx > 0 and world_left < platform.x:
            player.x = platform.x - player.width - camera_x
            player.vx = 0.0
            return ContactKind.SIDE_RIGHT

        if player.vx < 0 and world_left + player.width > platform.right:
            player.x = platform.right - camera_x
            player.vx = 0.0
            return ContactKind.SIDE_LEFT

        return None

    def collect(
        self,
        player: Player,
        camera_x: float,
        viewport_width: float,
        collectibles: Iterable[Collectible],
        world_speed: float,
        multiplier: float = 50.0,
    ) -> int:
        """Mark touched collectibles as collected.

        Returns:
            Total bonus awarded this frame. Collected items never award again.
        """
        bonus = 0
        player_rect = player.world_rect(camera_x)

        for item in collectibles:
            if item.collected:
                continue
            if not self.in_broad_phase(item.rect, camera_x, viewport_width):
                continue
            if rects_overlap(player_rect, item.rect):
                item.collected = True
                item.value = math.floor(world_speed * multiplier)
                bonus += item.value

        return bonus
