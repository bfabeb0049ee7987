"""Events module for domain event dispatch.

This module provides the EventBus for decoupling capture logic from
spawning, scoring and logging, plus typed domain event definitions.
"""

from lasso.events.domain_events import (
    CaptureResolvedEvent,
    PathClosedEvent,
    PathDestroyedEvent,
    ShapeDespawnedEvent,
    ShapesEjectedEvent,
    ShapesFusedEvent,
    ShapeSpawnedEvent,
    WaveRequestedEvent,
)
from lasso.events.event_bus import EventBus

__all__ = [
    "CaptureResolvedEvent",
    "EventBus",
    "PathClosedEvent",
    "PathDestroyedEvent",
    "ShapeDespawnedEvent",
    "ShapesEjectedEvent",
    "ShapesFusedEvent",
    "ShapeSpawnedEvent",
    "WaveRequestedEvent",
]
