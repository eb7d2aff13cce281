"""
Game loop driver: frame timing, clamping and the Stopped/Running/Paused machine
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .simulation import InputSnapshot, World

logger = logging.getLogger(__name__)


class LoopState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class FrameScheduler:
    """
    Platform frame callback. request_frame() registers a callback that the
    host invokes once, with the current time in milliseconds, on its next frame.
    """

    def request_frame(self, callback: Callable[[float], None]) -> None:
        raise NotImplementedError


class GameLoop:
    """
    Drives World.step and the renderer from the host's frame callback.
    Stopping only stops rescheduling; an in-flight frame always completes.
    """

    def __init__(
        self,
        world: World,
        renderer,
        scheduler: FrameScheduler,
        input_source: Optional[Callable[[], InputSnapshot]] = None,
        fixed_step_ms: Optional[float] = None,
    ):
        self.world = world
        self.renderer = renderer
        self.scheduler = scheduler
        self.input_source = input_source or InputSnapshot
        self.fixed_step_ms = fixed_step_ms

        self.state = LoopState.STOPPED
        self.last_time: Optional[float] = None
        self.frames = 0

    @property
    def is_running(self) -> bool:
        return self.state is not LoopState.STOPPED

    @property
    def is_paused(self) -> bool:
        return self.state is LoopState.PAUSED

    def start(self):
        if self.state is not LoopState.STOPPED:
            return
        self.state = LoopState.RUNNING
        self.last_time = None
        self.world.reset_player()
        logger.debug("Game loop started")
        self.scheduler.request_frame(self.frame)

    def pause(self):
        if self.state is LoopState.RUNNING:
            self.state = LoopState.PAUSED
        elif self.state is LoopState.PAUSED:
            self.state = LoopState.RUNNING

    def stop(self):
        if self.state is not LoopState.STOPPED:
            logger.debug("Game loop stopped after %d frames", self.frames)
        self.state = LoopState.STOPPED

    def elapsed_since(self, now_ms: float) -> float:
        """Clamped frame time for a frame at now_ms, in the world's clamp band"""
        if self.fixed_step_ms is not None:
            return self.fixed_step_ms
        if self.last_time is None:
            return self.world.min_dt
        return self.world.clamp_dt(now_ms - self.last_time)

    def frame(self, now_ms: float):
        if self.state is LoopState.STOPPED:
            return

        elapsed = self.elapsed_since(now_ms)
        self.last_time = now_ms

        if self.state is LoopState.RUNNING:
            self.world.step(elapsed, self.input_source())

        self.renderer.render(self.world, paused=self.is_paused)
        self.frames += 1

        # A step may have ended the round and stopped the loop
        if self.state is not LoopState.STOPPED:
            self.scheduler.request_frame(self.frame)
