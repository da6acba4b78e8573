"""
Two-Stage Perspective Projection
--------------------------------
4D -> 3D with the camera at ``DISTANCE_4D`` on the w axis, then 3D -> 2D with
the camera at ``DISTANCE_3D`` on the z axis. A point at or behind either
camera is not visible; callers drop it from the frame, it is not an error.

Alongside the screen position each projection carries the 4D depth factor
(drives point size) and the original w (drives edge color).
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import numpy as np

from hyperview.config import DISTANCE_3D, DISTANCE_4D, SCREEN_FACTOR


class Projection(NamedTuple):
    screen_x: float
    screen_y: float
    depth_factor: float
    raw_w: float


class ProjectedVertices(NamedTuple):
    """Vectorised projection result; rows where ``visible`` is False hold NaN."""

    screen: np.ndarray  # (n, 2)
    depth_factor: np.ndarray  # (n,)
    raw_w: np.ndarray  # (n,)
    visible: np.ndarray  # (n,) bool

    def get(self, index) -> Optional[Projection]:
        if not self.visible[index]:
            return None
        x, y = self.screen[index]
        return Projection(float(x), float(y), float(self.depth_factor[index]), float(self.raw_w[index]))

    def __len__(self):
        return len(self.visible)


def project(point, width, height, scale) -> Optional[Projection]:
    """Project a single rotated 4D point, or return None when it is not visible."""
    x, y, z, w = (float(c) for c in point)

    w_dist = DISTANCE_4D - w
    if w_dist <= 0:
        return None
    factor4 = 1.0 / w_dist
    x3, y3, z3 = x * factor4, y * factor4, z * factor4

    z_dist = DISTANCE_3D - z3
    if z_dist <= 0:
        return None
    factor3 = 1.0 / z_dist

    size = width * SCREEN_FACTOR * scale
    return Projection(
        x3 * factor3 * size + width / 2,
        y3 * factor3 * size + height / 2,
        factor4,
        w,
    )


def project_many(points, width, height, scale) -> ProjectedVertices:
    """Same as ``project`` for every row of an ``(n, 4)`` array."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 4)
    n = points.shape[0]
    raw_w = points[:, 3].copy()

    w_dist = DISTANCE_4D - raw_w
    visible = w_dist > 0
    factor4 = np.full(n, np.nan)
    np.divide(1.0, w_dist, out=factor4, where=visible)

    xyz = points[:, :3] * factor4[:, None]
    z_dist = DISTANCE_3D - xyz[:, 2]
    visible &= z_dist > 0
    factor3 = np.full(n, np.nan)
    np.divide(1.0, z_dist, out=factor3, where=visible)

    size = width * SCREEN_FACTOR * scale
    screen = xyz[:, :2] * factor3[:, None] * size
    screen += (width / 2, height / 2)
    screen[~visible] = np.nan

    depth_factor = np.where(visible, factor4, np.nan)
    return ProjectedVertices(screen, depth_factor, raw_w, visible)
