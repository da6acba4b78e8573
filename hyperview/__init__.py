"""Continuously rotating, morphing wireframe projections of 4D polytopes."""

from hyperview.config import FrameConfig, RotationAngles, RotationSpeeds
from hyperview.errors import ConfigurationError, UnknownShapeError
from hyperview.polytopes import Polytope, get_polytope
from hyperview.scheduler import DrawList, FrameScheduler

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DrawList",
    "FrameConfig",
    "FrameScheduler",
    "Polytope",
    "RotationAngles",
    "RotationSpeeds",
    "UnknownShapeError",
    "get_polytope",
]
