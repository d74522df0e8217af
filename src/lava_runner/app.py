"""Interactive pygame front end."""

from typing import Optional

import pygame

from .config import GameConfig
from .driver import GameHost, run_loop
from .engine import RunnerEngine
from .render import KeyboardInput, PygameRenderer
from .storage import JsonHighScoreStore


def run(
    config: Optional[GameConfig] = None,
    high_score_path: str = "data/high_score.json",
) -> None:
    """Open a window and play until the window is closed or Esc is pressed."""
    config = config or GameConfig()

    pygame.init()
    screen = pygame.display.set_mode(
        (config.screen_width, config.screen_height), pygame.RESIZABLE
    )
    pygame.display.set_caption("Lava Runner")
    clock = pygame.time.Clock()

    engine = RunnerEngine(config, store=JsonHighScoreStore(high_score_path))
    keyboard = KeyboardInput()
    renderer = PygameRenderer(screen, flip=True)

    host = GameHost()
    host.start(engine, keyboard, renderer)

    was_running = True

    def schedule() -> None:
        nonlocal was_running
        clock.tick(config.fps)
        keyboard.pump()

        if keyboard.quit_requested:
            host.stop()
            return
        if keyboard.resize_to is not None:
            width, height = keyboard.resize_to
            keyboard.resize_to = None
            renderer.set_surface(pygame.display.get_surface())
            engine.resize(width, height)
        if keyboard.restart_requested:
            keyboard.restart_requested = False
            engine.restart()
            print(f"NEW RUN: high score {engine.state.high_score}")

        if was_running and not engine.running:
            state = engine.state
            print(f"GAME OVER ({state.death_cause}): score {state.score} | level {state.level}")
        was_running = engine.running

    try:
        run_loop(host, schedule)
    finally:
        pygame.quit()
