"""
4D Rotation
-----------
Six plane rotations applied in the fixed order XY, XZ, XW, YZ, YW, ZW.

Each plane matrix is premultiplied onto the running product, so applying the
composed matrix to a column vector is the same as applying the sub-rotations
one after another, each seeing the coordinates updated by the previous ones.
"""

import math

import numpy as np

from hyperview.config import PLANE_AXES, PLANES


def plane_rotation(i, j, theta):
    M = np.eye(4)
    c, s = math.cos(theta), math.sin(theta)
    M[i, i] = c
    M[j, j] = c
    M[i, j] = -s
    M[j, i] = s
    return M


def rotation_matrix_4d(angles):
    """Compose the six plane rotations for ``angles`` into one 4x4 matrix."""
    R = np.eye(4)
    for plane, theta in zip(PLANES, angles):
        if theta == 0:
            continue
        i, j = PLANE_AXES[plane]
        R = plane_rotation(i, j, theta) @ R
    return R


def rotate(point, angles):
    return rotation_matrix_4d(angles) @ np.asarray(point, dtype=np.float64)


def rotate_many(vertices, angles):
    """Rotate an ``(n, 4)`` array of points; returns a new array."""
    vertices = np.asarray(vertices, dtype=np.float64)
    return vertices @ rotation_matrix_4d(angles).T


def inverse_rotate(point, angles):
    """Undo ``rotate``: negated angles, planes in reverse order."""
    p = np.asarray(point, dtype=np.float64)
    for plane, theta in reversed(list(zip(PLANES, angles.negated()))):
        if theta == 0:
            continue
        i, j = PLANE_AXES[plane]
        p = plane_rotation(i, j, theta) @ p
    return p
