"""Domain event definitions for the capture game.

These events represent significant occurrences on the field. They are
data-only (frozen dataclasses) and carry all context needed for handlers
to process them.

Design principles:
- Immutable: Events are facts that happened, don't mutate them
- Complete: Include all data handlers need (no callbacks to domain)
- Typed: Use strong types for type-safe dispatch and IDE support
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PathClosedEvent:
    """A trail crossed itself and became a closed loop.

    Attributes:
        path_id: ID of the closed path
        pen_id: Pen that drew it
        loop_size: Number of vertices in the loop
        kept_remainder: Whether the outer trail was retained for later
        frame: Simulation frame when this occurred
    """

    path_id: int
    pen_id: int
    loop_size: int
    kept_remainder: bool
    frame: int


@dataclass(frozen=True)
class PathDestroyedEvent:
    """A path stopped existing.

    Attributes:
        path_id: ID of the destroyed path
        reason: "evicted", "abandoned", "cancelled", "cleared", "absorbed" or "session_end"
        frame: Simulation frame when this occurred
    """

    path_id: int
    reason: str
    frame: int


@dataclass(frozen=True)
class CaptureResolvedEvent:
    """A loop caught two or more shapes and an animation session started.

    Attributes:
        path_id: Loop that made the capture
        captured_ids: Every captured shape ID
        group_kinds: Resulting kind of each combine group (enum values)
        exploded_ids: Shapes that will be ejected
        frame: Simulation frame when this occurred
    """

    path_id: int
    captured_ids: tuple[int, ...]
    group_kinds: tuple[str, ...]
    exploded_ids: tuple[int, ...]
    frame: int


@dataclass(frozen=True)
class ShapesEjectedEvent:
    """Unpaired shapes were scattered from a capture.

    Attributes:
        shape_ids: IDs of the ejected shapes
        paths_cleared: Number of paths removed as a consequence
        frame: Simulation frame when this occurred
    """

    shape_ids: tuple[int, ...]
    paths_cleared: int
    frame: int


@dataclass(frozen=True)
class ShapesFusedEvent:
    """A combine group fused into one new shape.

    Attributes:
        source_ids: IDs of the shapes consumed
        result_id: ID of the shape produced
        result_kind: Kind of the produced shape (enum value)
        frame: Simulation frame when this occurred
    """

    source_ids: tuple[int, ...]
    result_id: int
    result_kind: str
    frame: int


@dataclass(frozen=True)
class ShapeSpawnedEvent:
    """A shape entered the field.

    Attributes:
        shape_id: ID of the new shape
        kind: Kind of the shape (enum value)
        frame: Simulation frame when this occurred
    """

    shape_id: int
    kind: str
    frame: int


@dataclass(frozen=True)
class ShapeDespawnedEvent:
    """A shape left the field.

    Attributes:
        shape_id: ID of the removed shape
        kind: Kind of the shape (enum value)
        frame: Simulation frame when this occurred
    """

    shape_id: int
    kind: str
    frame: int


@dataclass(frozen=True)
class WaveRequestedEvent:
    """The field should be repopulated with a fresh wave of shapes.

    Attributes:
        reason: "initial", "terminal_fusion" or "depleted"
        frame: Simulation frame when this occurred
    """

    reason: str
    frame: int
