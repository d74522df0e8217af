"""Pygame collaborators: keyboard input source and frame renderer.

Neither class is needed by the simulation itself. KeyboardInput turns pygame
events into InputSnapshot values plus restart/quit/resize requests;
PygameRenderer draws a FrameSnapshot onto any pygame surface.
"""

from typing import Optional, Set, Tuple

import pygame

from .engine import FrameSnapshot
from .physics import InputSnapshot


# Colors (RGB)
COLOR_SKY = (44, 62, 80)
COLOR_LAVA = (207, 16, 32)
COLOR_LAVA_GLOW = (255, 140, 0)
COLOR_PLAYER = (52, 152, 219)
COLOR_PLAYER_HEAD = (255, 205, 148)
COLOR_COLLECTIBLE = (39, 174, 96)
COLOR_COLLECTED = (243, 156, 18)
COLOR_OUTLINE = (20, 20, 20)
COLOR_HUD = (236, 240, 241)
COLOR_BANNER = (192, 57, 43)

LEFT_KEYS = (pygame.K_a, pygame.K_LEFT)
RIGHT_KEYS = (pygame.K_d, pygame.K_RIGHT)
JUMP_KEYS = (pygame.K_w, pygame.K_UP, pygame.K_SPACE)

BANNER_HEIGHT = 80


class KeyboardInput:
    """Key-state tracker fed from the pygame event queue."""

    def __init__(self):
        self._held: Set[int] = set()
        self.restart_requested = False
        self.quit_requested = False
        self.resize_to: Optional[Tuple[int, int]] = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.KEYDOWN:
            self._held.add(event.key)
            if event.key == pygame.K_ESCAPE:
                self.quit_requested = True
            elif event.key == pygame.K_r:
                self.restart_requested = True
        elif event.type == pygame.KEYUP:
            self._held.discard(event.key)
        elif event.type == pygame.VIDEORESIZE:
            self.resize_to = (event.w, event.h)

    def pump(self) -> None:
        """Drain the pygame event queue."""
        for event in pygame.event.get():
            self.handle_event(event)

    def snapshot(self) -> InputSnapshot:
        held = self._held
        return InputSnapshot(
            left=any(k in held for k in LEFT_KEYS),
            right=any(k in held for k in RIGHT_KEYS),
            jump=any(k in held for k in JUMP_KEYS),
        )


class PygameRenderer:
    """Draws snapshots onto a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        draw_hud: bool = True,
        flip: bool = False,
    ):
        """
        Args:
            surface: Target surface (display or offscreen).
            draw_hud: Draw score text and the game-over banner.
            flip: Call pygame.display.flip() after each frame.
        """
        self.surface = surface
        self.draw_hud = draw_hud
        self.flip = flip
        self._font = None
        self._banner_font = None

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def draw(self, snapshot: FrameSnapshot) -> None:
        self.surface.fill(COLOR_SKY)

        self._draw_lava(snapshot)
        self._draw_platforms(snapshot)
        self._draw_collectibles(snapshot)
        self._draw_player(snapshot)

        if self.draw_hud:
            self._draw_hud(snapshot)
            if snapshot.game_over:
                self._draw_banner(snapshot)

        if self.flip:
            pygame.display.flip()

    def _visible(self, screen_x: float, width: float, margin: float = 100.0) -> bool:
        return screen_x + width >= -margin and screen_x <= self.surface.get_width() + margin

    def _draw_lava(self, snapshot: FrameSnapshot) -> None:
        width = self.surface.get_width()
        lava_top = int(snapshot.lava_level)
        height = max(0, self.surface.get_height() - lava_top)
        pygame.draw.rect(self.surface, COLOR_LAVA, (0, lava_top, width, height))
        # Glow band scrolls with the world
        offset = int(snapshot.camera_x) % 64
        for x in range(-offset, width, 64):
            pygame.draw.rect(self.surface, COLOR_LAVA_GLOW, (x, lava_top, 32, 4))

    def _draw_platforms(self, snapshot: FrameSnapshot) -> None:
        for plat in snapshot.platforms:
            screen_x = plat.x - snapshot.camera_x
            if not self._visible(screen_x, plat.width):
                continue
            rect = (int(screen_x), int(plat.y), int(plat.width), int(plat.height))
            pygame.draw.rect(self.surface, plat.color, rect)
            pygame.draw.rect(self.surface, COLOR_OUTLINE, rect, width=2)

    def _draw_collectibles(self, snapshot: FrameSnapshot) -> None:
        for item in snapshot.collectibles:
            screen_x = item.x - snapshot.camera_x
            if not self._visible(screen_x, item.width, margin=50.0):
                continue
            color = COLOR_COLLECTED if item.collected else COLOR_COLLECTIBLE
            rect = (int(screen_x), int(item.y), int(item.width), int(item.height))
            pygame.draw.rect(self.surface, color, rect)
            pygame.draw.rect(self.surface, COLOR_OUTLINE, rect, width=2)

    def _draw_player(self, snapshot: FrameSnapshot) -> None:
        x, y, w, h = snapshot.player
        pygame.draw.rect(self.surface, COLOR_PLAYER, (int(x), int(y), int(w), int(h)))
        head = int(h * 0.3)
        pygame.draw.rect(self.surface, COLOR_PLAYER_HEAD, (int(x), int(y), int(w), head))
        pygame.draw.rect(self.surface, COLOR_OUTLINE, (int(x), int(y), int(w), int(h)), width=2)

    def _draw_hud(self, snapshot: FrameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.Font(None, 28)
        text = (
            f"Score: {snapshot.score}  |  Best: {snapshot.high_score}  |  "
            f"Level: {snapshot.level}  |  Speed: {snapshot.world_speed:.1f}"
        )
        surface = self._font.render(text, True, COLOR_HUD)
        self.surface.blit(surface, (10, 10))

    def _draw_banner(self, snapshot: FrameSnapshot) -> None:
        """Game-over banner sliding from above the screen to its target."""
        if self._banner_font is None:
            self._banner_font = pygame.font.Font(None, 48)
        width = self.surface.get_width()
        start_y = -BANNER_HEIGHT
        target_y = snapshot.banner_target_y - BANNER_HEIGHT / 2
        y = start_y + (target_y - start_y) * snapshot.banner_progress

        pygame.draw.rect(self.surface, COLOR_BANNER, (0, int(y), width, BANNER_HEIGHT))
        label = self._banner_font.render(
            f"GAME OVER! Score {snapshot.score} - press R", True, COLOR_HUD
        )
        self.surface.blit(
            label, label.get_rect(center=(width // 2, int(y + BANNER_HEIGHT / 2)))
        )
