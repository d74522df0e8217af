"""Frame driver: the single loop that ticks the engine.

A GameHost owns at most one live FrameDriver. Starting a new game cancels the
previous driver's token, and every driver checks its token before touching
its engine, so a replaced instance can never step again even if a stale
scheduler callback still fires.
"""

import logging
from typing import Callable, Optional, Protocol

from .engine import FrameSnapshot, RunnerEngine
from .physics import InputSnapshot

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def snapshot(self) -> InputSnapshot:
        ...


class RenderSink(Protocol):
    def draw(self, snapshot: FrameSnapshot) -> None:
        ...


class CancellationToken:
    """One-way switch shared between a host and the driver it started."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class FrameDriver:
    """Samples input, steps the engine and hands the result to the sink."""

    def __init__(
        self,
        engine: RunnerEngine,
        input_source: InputSource,
        render_sink: Optional[RenderSink] = None,
        token: Optional[CancellationToken] = None,
    ):
        self.engine = engine
        self.input_source = input_source
        self.render_sink = render_sink
        self.token = token or CancellationToken()
        self.frames = 0

    def frame(self) -> bool:
        """Run one frame.

        Returns:
            False without doing anything once the token is cancelled.
        """
        if self.token.cancelled:
            return False

        snapshot = self.engine.step(self.input_source.snapshot())
        if self.render_sink is not None:
            self.render_sink.draw(snapshot)
        self.frames += 1
        return True


class GameHost:
    """Owner of the single active simulation."""

    def __init__(self):
        self._driver: Optional[FrameDriver] = None

    @property
    def driver(self) -> Optional[FrameDriver]:
        return self._driver

    @property
    def engine(self) -> Optional[RunnerEngine]:
        return self._driver.engine if self._driver else None

    def start(
        self,
        engine: RunnerEngine,
        input_source: InputSource,
        render_sink: Optional[RenderSink] = None,
    ) -> FrameDriver:
        """Install a new game, invalidating the previous one."""
        if self._driver is not None:
            self._driver.token.cancel()
            logger.info("Replaced running game after %d frames", self._driver.frames)
        self._driver = FrameDriver(engine, input_source, render_sink, CancellationToken())
        return self._driver

    def frame(self) -> bool:
        if self._driver is None:
            return False
        return self._driver.frame()

    def stop(self) -> None:
        if self._driver is not None:
            self._driver.token.cancel()


def run_loop(
    host: GameHost,
    scheduler: Callable[[], object],
    max_frames: Optional[int] = None,
) -> int:
    """Drive host.frame() once per scheduler tick until the host stops.

    Args:
        host: Host whose current driver is ticked.
        scheduler: Called before every frame; blocks until the next refresh
            (e.g. pygame Clock.tick) and may stop the host.
        max_frames: Stop after this many frames. Unbounded if None.

    Returns:
        Number of frames run.
    """
    frames = 0
    while max_frames is None or frames < max_frames:
        scheduler()
        if not host.frame():
            break
        frames += 1
    return frames
