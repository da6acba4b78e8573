"""
Animation Loop
--------------
``FuncAnimationDriver`` wraps matplotlib's ``FuncAnimation`` as the
per-frame callback source. ``Visualizer`` ties a driver, a drawing surface
and a ``FrameScheduler`` together and holds the current ``FrameConfig``.

The scheduler outlives every start/stop cycle, so restarting never resets
the morph or the rotation angles.
"""

from __future__ import annotations

import logging

from matplotlib.animation import FuncAnimation

from hyperview.config import FrameConfig
from hyperview.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class FuncAnimationDriver:
    """Calls ``callback()`` once per frame until cancelled."""

    def __init__(self, fig, interval_ms=16):
        self.fig = fig
        self.interval_ms = interval_ms
        self._animation = None
        self._callback = None

    @property
    def running(self):
        return self._animation is not None

    def _on_frame(self, _frame):
        # A timer tick may already be queued when cancel() runs.
        if self._callback is not None:
            self._callback()
        return []

    def start(self, callback):
        if self.running:
            self.cancel()
        self._callback = callback
        self._animation = FuncAnimation(
            self.fig, self._on_frame, frames=None, interval=self.interval_ms,
            blit=False, cache_frame_data=False,
        )
        # The animation's timer only starts on the next draw_event.
        self.fig.canvas.draw_idle()

    def cancel(self):
        self._callback = None
        if self._animation is not None:
            self._animation.event_source.stop()
            self._animation = None


class Visualizer:

    def __init__(self, surface, driver, config: FrameConfig):
        self.surface = surface
        self.driver = driver
        self.config = config
        self.scheduler = FrameScheduler(config.shape)
        self.last_draw_list = None

    @property
    def running(self):
        return self.driver.running

    def frame(self):
        self.last_draw_list = self.scheduler.render(self.config, self.surface)
        return self.last_draw_list

    def start(self):
        logger.info("Starting animation with %s", self.config.shape.name)
        self.driver.start(self.frame)

    def stop(self):
        if not self.driver.running:
            return
        logger.info("Stopping animation after %d frames", self.scheduler.frame_count)
        self.driver.cancel()

    def configure(self, **changes) -> FrameConfig:
        """Swap in a new configuration; validated here, applied next frame."""
        self.config = self.config.replace(**changes)
        return self.config

    def select_shape(self, shape_id):
        return self.configure(shape=shape_id)

    def toggle_playback(self):
        return self.configure(playing=not self.config.playing)
