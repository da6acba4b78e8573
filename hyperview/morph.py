"""
Morph Buffer
------------
A growable arena of working vertex slots that eases toward the current
target polytope every frame.

Slots beyond the target's vertex count are ghosts: they ease toward the
origin instead of being removed, and stay allocated for later shapes.
New slots are spawned at the origin, so vertices grow out of the center.
"""

import logging

import numpy as np

from hyperview.config import GHOST_COLLAPSE_EPSILON, MORPH_EASE

logger = logging.getLogger(__name__)


class MorphBuffer:

    def __init__(self, initial=None, ease=MORPH_EASE):
        if initial is None:
            self._vertices = np.zeros((0, 4))
        else:
            self._vertices = np.array(initial, dtype=np.float64).reshape(-1, 4)
        self.ease = ease

    @property
    def vertices(self):
        """Read-only view of the working set."""
        view = self._vertices.view()
        view.setflags(write=False)
        return view

    def __len__(self):
        return self._vertices.shape[0]

    def grow(self, count):
        """Append origin slots until the buffer holds at least ``count``."""
        missing = count - len(self)
        if missing > 0:
            logger.debug("Growing morph buffer from %d to %d slots", len(self), count)
            self._vertices = np.vstack([self._vertices, np.zeros((missing, 4))])

    def step(self, target_vertices):
        """Move every slot ``ease`` of the way to its target and return the working set."""
        target_vertices = np.asarray(target_vertices, dtype=np.float64).reshape(-1, 4)
        count = target_vertices.shape[0]
        self.grow(count)

        # Ghost slots target the origin.
        targets = np.zeros_like(self._vertices)
        targets[:count] = target_vertices
        self._vertices += (targets - self._vertices) * self.ease
        return self.vertices

    def ghost_mask(self, target_count):
        return np.arange(len(self)) >= target_count

    def collapsed_mask(self, target_count):
        dist_sq = np.einsum("ij,ij->i", self._vertices, self._vertices)
        return self.ghost_mask(target_count) & (dist_sq < GHOST_COLLAPSE_EPSILON)
