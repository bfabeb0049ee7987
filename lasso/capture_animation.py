"""Capture animation state machine.

Every capture of two or more shapes gets its own ``CaptureSession``, which
walks a strictly linear sequence of phases, one phase per tick:

    Initialize -> MoveToCenter -> Eject -> Done

Each phase is a frozen dataclass that owns exactly the data it needs. A
transition consumes the current phase and returns the next one; nothing is
mutated in place across phases, and the only fields a handler can reach are
the ones its phase carries. Dispatch happens in ``CaptureSession.advance``;
an object that is not one of the four phases is a programming error and
raises ``StateTransitionError``.

Phase effects:
    Initialize   hold every involved shape (collision off, velocity zeroed),
                 compute the centroid and a target slot per shape on a small
                 circle around it
    MoveToCenter ease shapes towards their slots until the timeout expires
    Eject        release the explode set with random fast velocities; if any
                 shape exploded, clear every path on the field
    Done         despawn each group's members and spawn the fused shape at
                 the centroid; request a wave on terminal fusion or when the
                 field runs low

A session always runs to Done, so no shape is left held with collision
disabled. The only way to drop one early is an engine reset, which clears
every shape with it.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from lasso.config.simulation_config import CaptureConfig
from lasso.events import EventBus, ShapesEjectedEvent, ShapesFusedEvent, WaveRequestedEvent
from lasso.exceptions import StateTransitionError
from lasso.fusion import FusionResult
from lasso.math_utils import Vector2, mean_vector
from lasso.path_lifecycle import PathLifecycleManager
from lasso.protocols import EntityRegistry

logger = logging.getLogger(__name__)


@dataclass
class AnimationContext:
    """Collaborators and timing handed to a session for one tick."""

    registry: EntityRegistry
    paths: PathLifecycleManager
    event_bus: EventBus
    rng: random.Random
    config: CaptureConfig
    frame: int
    dt: float


@dataclass(frozen=True)
class Initialize:
    fusion: FusionResult


@dataclass(frozen=True)
class MoveToCenter:
    fusion: FusionResult
    centroid: Vector2
    targets: Tuple[Tuple[int, Vector2], ...]
    time_left: float


@dataclass(frozen=True)
class Eject:
    fusion: FusionResult
    centroid: Vector2


@dataclass(frozen=True)
class Done:
    fusion: FusionResult
    centroid: Vector2


CapturePhase = Union[Initialize, MoveToCenter, Eject, Done]


def convergence_fraction(rate: float, dt: float) -> float:
    """Share of the remaining distance covered in one step of length ``dt``."""
    return 1.0 - math.exp(-rate * dt)


def _slot_targets(shape_ids: Tuple[int, ...], centroid: Vector2, radius: float) -> Tuple[Tuple[int, Vector2], ...]:
    total = len(shape_ids)
    return tuple(
        (shape_id, centroid + Vector2.from_angle(2.0 * math.pi * index / total, radius))
        for index, shape_id in enumerate(shape_ids)
    )


def initialize(phase: Initialize, ctx: AnimationContext) -> MoveToCenter:
    """Hold every involved shape and assign convergence slots."""
    involved = phase.fusion.involved
    positions = []
    for captured in involved:
        shape = ctx.registry.get(captured.shape_id)
        if shape is None:
            positions.append(captured.position)
            continue
        ctx.registry.set_collidable(captured.shape_id, False)
        shape.velocity = Vector2()
        positions.append(shape.position)

    centroid = mean_vector(positions)
    targets = _slot_targets(
        tuple(captured.shape_id for captured in involved), centroid, ctx.config.converge_radius
    )
    return MoveToCenter(
        fusion=phase.fusion,
        centroid=centroid,
        targets=targets,
        time_left=ctx.config.converge_timeout,
    )


def move_to_center(phase: MoveToCenter, ctx: AnimationContext) -> Union[MoveToCenter, Eject]:
    """Ease shapes towards their slots; the timeout, not arrival, ends the phase."""
    fraction = convergence_fraction(ctx.config.converge_rate, ctx.dt)
    for shape_id, target in phase.targets:
        shape = ctx.registry.get(shape_id)
        if shape is not None:
            shape.position = shape.position.lerp(target, fraction)

    time_left = phase.time_left - ctx.dt
    if time_left > 0.0:
        return MoveToCenter(
            fusion=phase.fusion,
            centroid=phase.centroid,
            targets=phase.targets,
            time_left=time_left,
        )
    return Eject(fusion=phase.fusion, centroid=phase.centroid)


def eject(phase: Eject, ctx: AnimationContext) -> Done:
    """Release the explode set in random directions."""
    ejected = []
    for captured in phase.fusion.explode:
        shape = ctx.registry.get(captured.shape_id)
        if shape is None:
            continue
        ctx.registry.set_collidable(captured.shape_id, True)
        angle = ctx.rng.uniform(0.0, 2.0 * math.pi)
        shape.velocity = Vector2.from_angle(angle, ctx.config.eject_speed)
        ejected.append(captured.shape_id)

    if phase.fusion.explode:
        cleared = ctx.paths.clear_all(reason="cleared")
        logger.debug("Ejected %d shapes, cleared %d paths", len(ejected), cleared)
        ctx.event_bus.emit(
            ShapesEjectedEvent(shape_ids=tuple(ejected), paths_cleared=cleared, frame=ctx.frame)
        )
    return Done(fusion=phase.fusion, centroid=phase.centroid)


def finish(phase: Done, ctx: AnimationContext, path_id: Optional[int] = None) -> None:
    """Commit the fusion: despawn members, spawn results, request waves."""
    wave_requested = False
    for group in phase.fusion.groups:
        removed = [ctx.registry.despawn(shape_id) for shape_id in group.member_ids]
        if not all(removed):
            logger.warning(
                "Group %s lost members before fusing; no %s spawned",
                group.member_ids,
                group.result_kind.value,
            )
            continue
        fused = ctx.registry.spawn(group.result_kind, phase.centroid, group.velocity)
        ctx.event_bus.emit(
            ShapesFusedEvent(
                source_ids=group.member_ids,
                result_id=fused.shape_id,
                result_kind=group.result_kind.value,
                frame=ctx.frame,
            )
        )
        if group.is_terminal and not wave_requested:
            ctx.event_bus.emit(WaveRequestedEvent(reason="terminal_fusion", frame=ctx.frame))
            wave_requested = True

    if path_id is not None:
        ctx.paths.destroy_path(path_id, reason="absorbed")

    alive = sum(1 for _ in ctx.registry.alive_shapes())
    if not wave_requested and alive < ctx.config.depletion_threshold:
        ctx.event_bus.emit(WaveRequestedEvent(reason="depleted", frame=ctx.frame))


class CaptureSession:
    """One running capture animation.

    Attributes:
        session_id: Identity for logging
        path_id: Loop that made the capture; destroyed when the session ends
        phase: Current phase object
    """

    def __init__(self, session_id: int, fusion: FusionResult, path_id: Optional[int] = None) -> None:
        self.session_id = session_id
        self.path_id = path_id
        self.phase: Optional[CapturePhase] = Initialize(fusion=fusion)

    @property
    def finished(self) -> bool:
        return self.phase is None

    def advance(self, ctx: AnimationContext) -> bool:
        """Run the current phase for one tick.

        Returns:
            True once the session has completed

        Raises:
            StateTransitionError: If advanced after completion or holding an
                object that is not a capture phase
        """
        phase = self.phase
        if isinstance(phase, Initialize):
            self.phase = initialize(phase, ctx)
        elif isinstance(phase, MoveToCenter):
            self.phase = move_to_center(phase, ctx)
        elif isinstance(phase, Eject):
            self.phase = eject(phase, ctx)
        elif isinstance(phase, Done):
            finish(phase, ctx, self.path_id)
            self.phase = None
            logger.info(
                "Capture session #%d complete: %d fused group(s), %d ejected",
                self.session_id,
                len(phase.fusion.groups),
                len(phase.fusion.explode),
            )
            return True
        elif phase is None:
            raise StateTransitionError(f"Capture session #{self.session_id} already finished")
        else:
            raise StateTransitionError(
                f"Capture session #{self.session_id} holds unknown phase {phase!r}"
            )
        return False

    def phase_name(self) -> str:
        return type(self.phase).__name__ if self.phase is not None else "Finished"

    def __repr__(self) -> str:
        return f"CaptureSession(id={self.session_id}, phase={self.phase_name()})"
