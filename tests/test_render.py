"""Tests for pygame input and rendering (headless)."""

import pygame
import pytest

from lava_runner.physics import InputSnapshot
from lava_runner.render import KeyboardInput, PygameRenderer, COLOR_SKY, COLOR_LAVA


@pytest.fixture(scope="module", autouse=True)
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


def key_event(kind, key):
    return pygame.event.Event(kind, key=key)


class TestKeyboardInput:
    def test_no_keys(self):
        assert KeyboardInput().snapshot() == InputSnapshot()

    def test_held_keys(self):
        keyboard = KeyboardInput()
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_RIGHT))
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_SPACE))
        assert keyboard.snapshot() == InputSnapshot(right=True, jump=True)

        keyboard.handle_event(key_event(pygame.KEYUP, pygame.K_SPACE))
        assert keyboard.snapshot() == InputSnapshot(right=True)

    def test_alternate_bindings(self):
        keyboard = KeyboardInput()
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_a))
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_w))
        assert keyboard.snapshot() == InputSnapshot(left=True, jump=True)

    def test_restart_and_quit(self):
        keyboard = KeyboardInput()
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_r))
        assert keyboard.restart_requested
        keyboard.handle_event(key_event(pygame.KEYDOWN, pygame.K_ESCAPE))
        assert keyboard.quit_requested

    def test_window_close(self):
        keyboard = KeyboardInput()
        keyboard.handle_event(pygame.event.Event(pygame.QUIT))
        assert keyboard.quit_requested

    def test_resize(self):
        keyboard = KeyboardInput()
        keyboard.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=1024, h=768, size=(1024, 768)))
        assert keyboard.resize_to == (1024, 768)


class TestPygameRenderer:
    def test_draws_sky_and_lava(self, engine):
        surface = pygame.Surface((800, 600))
        PygameRenderer(surface).draw(engine.snapshot())

        assert surface.get_at((400, 200))[:3] == COLOR_SKY
        assert surface.get_at((400, 590))[:3] == COLOR_LAVA

    def test_draws_player(self, engine):
        surface = pygame.Surface((800, 600))
        PygameRenderer(surface, draw_hud=False).draw(engine.snapshot())
        x, y, w, h = engine.player.screen_rect()
        assert surface.get_at((int(x + w / 2), int(y + h / 2)))[:3] != COLOR_SKY

    def test_game_over_banner(self, engine):
        engine.world.platforms = []
        engine.player.y = engine.world.lava_level - engine.player.height
        engine.step()
        for _ in range(30):
            engine.step()

        surface = pygame.Surface((800, 600))
        PygameRenderer(surface).draw(engine.snapshot())
        # Banner rests centred on half the viewport height
        assert surface.get_at((5, 300))[:3] != COLOR_SKY

    def test_offscreen_surface_swap(self, engine):
        renderer = PygameRenderer(pygame.Surface((400, 300)))
        other = pygame.Surface((800, 600))
        renderer.set_surface(other)
        renderer.draw(engine.snapshot())
        assert renderer.surface is other
