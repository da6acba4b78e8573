"""
Frame Configuration
-------------------
Named constants for the projection and morph pipeline, the six-plane
rotation value types, speed presets, and the immutable ``FrameConfig``
read by the frame scheduler at the start of every frame.

All validation happens here so the frame loop only ever sees valid input.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass

from hyperview.errors import ConfigurationError
from hyperview.polytopes import Polytope, get_polytope

# -------------------------------
# Pipeline Constants
# -------------------------------
DISTANCE_4D = 2.0  # camera distance along w
DISTANCE_3D = 3.0  # camera distance along z, after the 4D stage
SCREEN_FACTOR = 0.4  # fraction of the viewport width spanned by unit projected size

MORPH_EASE = 0.08
GHOST_COLLAPSE_EPSILON = 0.001  # squared 4D norm below which a ghost is hidden

POINT_BASE_RADIUS = 3.0
POINT_MIN_RADIUS = 1.0

# rawW range mapped onto the cyan -> purple edge gradient
W_COLOR_RANGE = (-1.5, 1.5)
EDGE_GREEN = 200
EDGE_ALPHA = 0.6
TARGET_POINT_COLOR = (255, 255, 255, 1.0)
GHOST_POINT_COLOR = (255, 255, 255, 0.3)

SCALE_RANGE = (0.5, 3.0)

PLANES = ("xy", "xz", "xw", "yz", "yw", "zw")

# Coordinate indices of each rotation plane.
PLANE_AXES = {
    "xy": (0, 1),
    "xz": (0, 2),
    "xw": (0, 3),
    "yz": (1, 2),
    "yw": (1, 3),
    "zw": (2, 3),
}


def _check_real(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class PlaneValues:
    """One signed scalar per rotation plane."""

    xy: float = 0.0
    xz: float = 0.0
    xw: float = 0.0
    yz: float = 0.0
    yw: float = 0.0
    zw: float = 0.0

    def __post_init__(self):
        for plane in PLANES:
            object.__setattr__(self, plane, _check_real(plane, getattr(self, plane)))

    @classmethod
    def uniform(cls, value):
        return cls(**{plane: value for plane in PLANES})

    @classmethod
    def from_mapping(cls, mapping):
        unknown = set(mapping) - set(PLANES)
        if unknown:
            raise ConfigurationError(f"Unknown rotation plane(s): {', '.join(sorted(unknown))}")
        return cls(**mapping)

    def as_dict(self):
        return {plane: getattr(self, plane) for plane in PLANES}

    def __iter__(self):
        return (getattr(self, plane) for plane in PLANES)


class RotationSpeeds(PlaneValues):
    """Per-frame angle increments, in radians."""


class RotationAngles(PlaneValues):
    """Accumulated rotation angles, in radians. Not wrapped."""

    def advanced(self, speeds: RotationSpeeds) -> RotationAngles:
        return RotationAngles(*(a + s for a, s in zip(self, speeds)))

    def negated(self) -> RotationAngles:
        return RotationAngles(*(-a for a in self))


# -------------------------------
# Speed Presets
# -------------------------------
DEFAULT_SPEEDS = RotationSpeeds.uniform(0.005)

PRESETS = {
    "normal": ("Normal Rotation", DEFAULT_SPEEDS),
    "slow": ("Slow & Hypnotic", RotationSpeeds.uniform(0.002)),
    "fast": ("Fast", RotationSpeeds.uniform(0.02)),
    "chaotic": ("Chaotic", RotationSpeeds(0.03, -0.02, 0.04, -0.03, 0.01, -0.04)),
    "focus3d": ("3D Focus (No 4D)", RotationSpeeds(xy=0.01, xz=0.01, yz=0.01)),
    "focus4d": ("4D Focus (Only W)", RotationSpeeds(xw=0.01, yw=0.01, zw=0.01)),
}


def get_preset(name) -> RotationSpeeds:
    try:
        return PRESETS[name][1]
    except KeyError:
        raise ConfigurationError(
            f"Unknown preset: {name!r} (expected one of: {', '.join(PRESETS)})"
        ) from None


def random_speeds(rng, limit=0.03) -> RotationSpeeds:
    """Uniform speeds in [-limit, limit) per plane, drawn from a numpy Generator."""
    values = rng.uniform(-limit, limit, size=len(PLANES))
    return RotationSpeeds(*(float(v) for v in values))


def clamp_scale(scale):
    low, high = SCALE_RANGE
    return min(high, max(low, scale))


# -------------------------------
# Frame Configuration
# -------------------------------
@dataclass(frozen=True)
class FrameConfig:
    """Everything the scheduler reads from outside on a given frame."""

    shape: Polytope
    speeds: RotationSpeeds = DEFAULT_SPEEDS
    playing: bool = True
    scale: float = 1.0

    def __post_init__(self):
        if not isinstance(self.shape, Polytope):
            raise ConfigurationError(f"shape must be a Polytope, got {self.shape!r}")
        if not isinstance(self.speeds, RotationSpeeds):
            raise ConfigurationError(f"speeds must be RotationSpeeds, got {self.speeds!r}")
        scale = _check_real("scale", self.scale)
        if scale <= 0:
            raise ConfigurationError(f"scale must be positive, got {scale!r}")
        object.__setattr__(self, "scale", scale)
        if not isinstance(self.playing, bool):
            raise ConfigurationError(f"playing must be a bool, got {self.playing!r}")

    @classmethod
    def create(cls, shape_id, speeds=None, playing=True, scale=1.0) -> FrameConfig:
        if speeds is None:
            speeds = DEFAULT_SPEEDS
        elif not isinstance(speeds, RotationSpeeds):
            speeds = RotationSpeeds.from_mapping(speeds)
        return cls(get_polytope(shape_id), speeds, playing, scale)

    def replace(self, **changes) -> FrameConfig:
        if "shape" in changes and not isinstance(changes["shape"], Polytope):
            changes["shape"] = get_polytope(changes["shape"])
        if "speeds" in changes and not isinstance(changes["speeds"], RotationSpeeds):
            changes["speeds"] = RotationSpeeds.from_mapping(changes["speeds"])
        return dataclasses.replace(self, **changes)
