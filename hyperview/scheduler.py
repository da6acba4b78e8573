"""
Frame Scheduler
---------------
The per-frame driver. Each call to ``step`` morphs the working vertices
toward the configured shape, advances the rotation angles when playing,
rotates and projects every working vertex, and returns a ``DrawList``.

The scheduler exclusively owns the morph buffer and the accumulated angles.
Neither is reset when the configuration changes; a shape change only
retargets the morph.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple, Optional

import numpy as np

from hyperview.config import (
    EDGE_ALPHA,
    EDGE_GREEN,
    GHOST_POINT_COLOR,
    POINT_BASE_RADIUS,
    POINT_MIN_RADIUS,
    TARGET_POINT_COLOR,
    W_COLOR_RANGE,
    FrameConfig,
    RotationAngles,
)
from hyperview.morph import MorphBuffer
from hyperview.projection import project_many
from hyperview.rotation import rotate_many

logger = logging.getLogger(__name__)


class LineCommand(NamedTuple):
    start: tuple
    end: tuple
    stops: tuple  # ((offset, rgba), (offset, rgba))
    edge: tuple


class PointCommand(NamedTuple):
    center: tuple
    radius: float
    color: tuple
    index: int


class DrawList(NamedTuple):
    width: int
    height: int
    lines: tuple
    points: tuple

    def replay(self, surface):
        for line in self.lines:
            surface.draw_line(line.start, line.end, line.stops)
        for point in self.points:
            surface.draw_filled_circle(point.center, point.radius, point.color)


def depth_color(w):
    """Cyan -> purple RGBA for a raw w coordinate."""
    low, high = W_COLOR_RANGE
    intensity = min(1.0, max(0.0, (w - low) / (high - low)))
    red = math.floor(255 * intensity)
    blue = math.floor(255 * (1 - intensity))
    return (red, EDGE_GREEN, blue, EDGE_ALPHA)


def point_radius(depth_factor):
    return max(POINT_MIN_RADIUS, POINT_BASE_RADIUS * depth_factor)


class FrameScheduler:

    def __init__(self, initial_shape=None):
        initial = None if initial_shape is None else initial_shape.vertices
        self.morph = MorphBuffer(initial)
        self.angles = RotationAngles()
        self.frame_count = 0
        self._viewport: Optional[tuple] = None
        self._shape_id = None if initial_shape is None else initial_shape.id

    @property
    def viewport(self):
        return self._viewport

    def step(self, config: FrameConfig, width, height) -> DrawList:
        shape = config.shape
        if shape.id != self._shape_id:
            logger.info("Morphing to %s (%d vertices)", shape.name, shape.vertex_count)
            self._shape_id = shape.id

        working = self.morph.step(shape.vertices)
        if config.playing:
            self.angles = self.angles.advanced(config.speeds)

        rotated = rotate_many(working, self.angles)
        projected = project_many(rotated, width, height, config.scale)

        lines = []
        for i, j in shape.edges:
            if not (projected.visible[i] and projected.visible[j]):
                continue
            start = tuple(float(c) for c in projected.screen[i])
            end = tuple(float(c) for c in projected.screen[j])
            stops = (
                (0.0, depth_color(float(projected.raw_w[i]))),
                (1.0, depth_color(float(projected.raw_w[j]))),
            )
            lines.append(LineCommand(start, end, stops, (i, j)))

        count = shape.vertex_count
        hidden = self.morph.collapsed_mask(count)
        points = []
        for index in np.flatnonzero(projected.visible & ~hidden):
            index = int(index)
            color = TARGET_POINT_COLOR if index < count else GHOST_POINT_COLOR
            center = tuple(float(c) for c in projected.screen[index])
            radius = point_radius(float(projected.depth_factor[index]))
            points.append(PointCommand(center, radius, color, index))

        self.frame_count += 1
        return DrawList(width, height, tuple(lines), tuple(points))

    def render(self, config: FrameConfig, surface) -> DrawList:
        """Run one frame against a drawing surface."""
        size = tuple(surface.size())
        if size != self._viewport or size != tuple(surface.backing_size()):
            logger.debug("Resizing surface to %dx%d", *size)
            surface.resize(*size)
            self._viewport = size

        surface.clear()
        draw_list = self.step(config, *size)
        draw_list.replay(surface)
        surface.flush()
        return draw_list
