"""Simulation systems, one responsibility each, run by UpdatePhase."""

from lasso.systems.base import BaseSystem, SystemResult
from lasso.systems.capture import CaptureSystem
from lasso.systems.capture_animation import CaptureAnimationSystem
from lasso.systems.path_systems import PathClosureSystem, PathRecordingSystem
from lasso.systems.pen_input import PenInputSystem
from lasso.systems.physics import PhysicsSystem
from lasso.systems.wave_spawning import WaveSpawningSystem

__all__ = [
    "BaseSystem",
    "CaptureAnimationSystem",
    "CaptureSystem",
    "PathClosureSystem",
    "PathRecordingSystem",
    "PenInputSystem",
    "PhysicsSystem",
    "SystemResult",
    "WaveSpawningSystem",
]
