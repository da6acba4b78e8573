"""
Drawing Surfaces
----------------
The frame scheduler draws through a small surface interface: ``clear``,
``draw_line`` with two gradient stops, ``draw_filled_circle``, and size
queries plus ``resize``. ``MatplotlibSurface`` draws onto a matplotlib axes in
pixel coordinates; ``RecordingSurface`` keeps the calls for headless use.
"""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.patches import Circle

logger = logging.getLogger(__name__)

GRADIENT_SEGMENTS = 8
LINE_WIDTH = 1.5
BACKGROUND_COLOR = "#0f172a"


class Surface(Protocol):
    def clear(self) -> None: ...

    def draw_line(self, start, end, stops) -> None: ...

    def draw_filled_circle(self, center, radius, color) -> None: ...

    def size(self) -> tuple: ...

    def backing_size(self) -> tuple: ...

    def resize(self, width, height) -> None: ...

    def flush(self) -> None: ...


def to_mpl_rgba(color):
    """(r, g, b, a) with 0-255 channels -> matplotlib 0-1 floats."""
    r, g, b, a = color
    return (r / 255.0, g / 255.0, b / 255.0, float(a))


def gradient_segments(start, end, stops, pieces=GRADIENT_SEGMENTS):
    """Split a line into ``pieces`` segments colored along the two stops."""
    (o0, c0), (o1, c1) = stops
    c0 = np.array(to_mpl_rgba(c0))
    c1 = np.array(to_mpl_rgba(c1))
    t = np.linspace(0.0, 1.0, pieces + 1)
    xs = np.interp(t, (0.0, 1.0), (start[0], end[0]))
    ys = np.interp(t, (0.0, 1.0), (start[1], end[1]))
    segments = np.stack([np.column_stack([xs[:-1], ys[:-1]]), np.column_stack([xs[1:], ys[1:]])], axis=1)

    mids = (t[:-1] + t[1:]) / 2
    frac = np.clip((mids - o0) / (o1 - o0), 0.0, 1.0)[:, None]
    colors = c0 + (c1 - c0) * frac
    return segments, colors


class MatplotlibSurface:

    def __init__(self, ax, background=BACKGROUND_COLOR):
        self.ax = ax
        self.figure = ax.figure
        self._backing = (0, 0)
        self._segments = []
        self._segment_colors = []
        self._circles = []
        self._circle_colors = []

        ax.set_facecolor(background)
        self.figure.set_facecolor(background)
        ax.set_axis_off()
        ax.set_aspect("auto")

    def size(self):
        return tuple(int(v) for v in self.figure.canvas.get_width_height())

    def backing_size(self):
        return self._backing

    def resize(self, width, height):
        # Pixel coordinates, y pointing down.
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self._backing = (int(width), int(height))

    def clear(self):
        for coll in self.ax.collections[:]:
            coll.remove()
        self._segments.clear()
        self._segment_colors.clear()
        self._circles.clear()
        self._circle_colors.clear()

    def draw_line(self, start, end, stops):
        segments, colors = gradient_segments(start, end, stops)
        self._segments.extend(segments)
        self._segment_colors.extend(colors)

    def draw_filled_circle(self, center, radius, color):
        self._circles.append(Circle(center, radius))
        self._circle_colors.append(to_mpl_rgba(color))

    def flush(self):
        """Push the batched primitives onto the axes; returns the new artists."""
        artists = []
        if self._segments:
            lines = LineCollection(self._segments, colors=self._segment_colors, linewidths=LINE_WIDTH)
            self.ax.add_collection(lines)
            artists.append(lines)
        if self._circles:
            points = PatchCollection(self._circles, facecolors=self._circle_colors, edgecolors="none")
            self.ax.add_collection(points)
            artists.append(points)
        return artists


class RecordingSurface:
    """Surface that records draw calls instead of drawing."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self._backing = (0, 0)
        self.lines = []
        self.circles = []
        self.clears = 0
        self.resizes = []
        self.flushes = 0

    def size(self):
        return (self.width, self.height)

    def backing_size(self):
        return self._backing

    def resize(self, width, height):
        self._backing = (width, height)
        self.resizes.append((width, height))

    def clear(self):
        self.clears += 1
        self.lines = []
        self.circles = []

    def draw_line(self, start, end, stops):
        self.lines.append((start, end, stops))

    def draw_filled_circle(self, center, radius, color):
        self.circles.append((center, radius, color))

    def flush(self):
        self.flushes += 1
