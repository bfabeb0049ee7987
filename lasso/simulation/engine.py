"""The fixed-step capture engine - the slim orchestrator.

The engine is a COORDINATOR, not a DOER. It owns the session-scoped state
(shape registry, path lifecycle manager, pens, event bus, RNG) and the
systems, and runs the systems in UpdatePhase order once per tick. All game
logic lives in the systems and the capture core modules.

Tick order:
    INPUT -> PATH_RECORD -> PATH_CLOSE -> CAPTURE -> ANIMATION -> SPAWN -> PHYSICS

Example:
    engine = CaptureEngine(seed=7)
    engine.setup()
    pen = engine.add_pen()
    engine.set_pen_input(pen.pen_id, Vector2(0, 0), drawing=True)
    engine.update()
"""

import logging
import random
from typing import Dict, Optional

from lasso.config.simulation_config import SimulationConfig
from lasso.entities import Pen
from lasso.events import EventBus, WaveRequestedEvent
from lasso.kinds import ShapeKind
from lasso.math_utils import Vector2
from lasso.path_lifecycle import PathLifecycleManager
from lasso.score import ScoreBoard, tally
from lasso.shape_registry import ShapeRegistry
from lasso.simulation.snapshot import PathView, PenView, RenderSnapshot, ShapeView
from lasso.systems import (
    CaptureAnimationSystem,
    CaptureSystem,
    PathClosureSystem,
    PathRecordingSystem,
    PenInputSystem,
    PhysicsSystem,
    WaveSpawningSystem,
)
from lasso.update_phases import PhaseRunner

logger = logging.getLogger(__name__)


class CaptureEngine:
    """A headless engine for the lasso capture game.

    Attributes:
        config: Simulation configuration
        registry: Shapes and trail obstacles
        paths: Path lifecycle manager (owns LivePaths)
        pens: Pens by ID
        event_bus: Synchronous domain event bus
        rng: Seeded RNG shared by every random choice
        frame_count: Ticks elapsed
        delta_time: Length of the current tick in seconds
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()

        # RNG handling: prefer explicit rng, then seed, then fresh RNG
        if rng is not None:
            self.rng: random.Random = rng
            self.seed = None
        else:
            self.rng = random.Random(seed)
            self.seed = seed

        self.frame_count = 0
        self.delta_time = 1.0 / self.config.display.frame_rate
        self.paused = False

        self.event_bus = EventBus()
        half_w, half_h = self.config.display.half_extents
        self.registry = ShapeRegistry(
            half_w,
            half_h,
            shape_radius=self.config.spawning.shape_radius,
            restitution=self.config.spawning.restitution,
            event_bus=self.event_bus,
            frame_source=lambda: self.frame_count,
        )
        self.paths = PathLifecycleManager(
            self.registry,
            max_live_paths=self.config.capture.max_live_paths,
            event_bus=self.event_bus,
            frame_source=lambda: self.frame_count,
        )
        self.pens: Dict[int, Pen] = {}
        self._next_pen_id = 1

        self.score = ScoreBoard()
        self.score.subscribe(self.event_bus)

        # Systems, registered in the phases they declare
        self.input_system = PenInputSystem(self)
        self.recording_system = PathRecordingSystem(self)
        self.closure_system = PathClosureSystem(self)
        self.capture_system = CaptureSystem(self)
        self.animation_system = CaptureAnimationSystem(self)
        self.wave_system = WaveSpawningSystem(self)
        self.physics_system = PhysicsSystem(self)

        self._runner = PhaseRunner()
        for system in (
            self.input_system,
            self.recording_system,
            self.closure_system,
            self.capture_system,
            self.animation_system,
            self.wave_system,
            self.physics_system,
        ):
            self._runner.register(system)

        logger.info("CaptureEngine initialized (seed=%s)", self.seed)

    # ------------------------------------------------------------------
    # Setup and control
    # ------------------------------------------------------------------

    def setup(self) -> None:
        """Populate the field with the first wave."""
        if self.config.spawn_initial_wave:
            self.event_bus.emit(WaveRequestedEvent(reason="initial", frame=self.frame_count))

    def add_pen(self, position: Optional[Vector2] = None) -> Pen:
        pen = Pen(pen_id=self._next_pen_id, position=position.copy() if position else Vector2())
        self._next_pen_id += 1
        self.pens[pen.pen_id] = pen
        self.paths.bind_pen(pen)
        return pen

    def set_pen_input(self, pen_id: int, position: Vector2, drawing: bool) -> None:
        """Feed one input sample; applied in the next tick's INPUT phase."""
        self.input_system.submit(pen_id, position, drawing)

    def spawn_shape(
        self, kind: ShapeKind, position: Vector2, velocity: Optional[Vector2] = None
    ):
        """Place a shape directly (scripted levels and tests)."""
        return self.registry.spawn(kind, position, velocity or Vector2())

    def update(self, dt: Optional[float] = None) -> None:
        """Advance the simulation by one fixed step."""
        if self.paused:
            return
        self.delta_time = dt if dt is not None else 1.0 / self.config.display.frame_rate
        self.frame_count += 1
        self._runner.run_all(frame=self.frame_count)

    def reset(self) -> None:
        """End the session: drop every path, shape, capture and pending input."""
        self.animation_system.reset()
        self.wave_system.reset()
        self.paths.clear_all(reason="session_end")
        self.registry.clear()
        for pen in self.pens.values():
            pen.deactivate()
            pen.input_held = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def final_score(self) -> Dict[ShapeKind, int]:
        """Shapes left on the field per kind."""
        return tally(self.registry.alive_shapes())

    def render_state(self) -> RenderSnapshot:
        """Immutable snapshot of paths, shapes and pens for rendering."""
        active_ids = {pen.path_id for pen in self.pens.values() if pen.active and pen.path_id}
        live = self.paths.live
        paths = tuple(
            PathView(
                path_id=path.path_id,
                points=tuple(path.points),
                closed=path.closed,
                active=path.path_id in active_ids,
                age_rank=live.age_rank(path.path_id) or 0,
                opacity=live.opacity(path.path_id),
            )
            for path in self.paths.all_paths()
        )
        shapes = tuple(
            ShapeView(
                shape_id=shape.shape_id,
                kind=shape.kind.value,
                position=shape.position.as_tuple(),
                radius=shape.radius,
                held=not shape.collidable,
            )
            for shape in self.registry.alive_shapes()
        )
        pens = tuple(
            PenView(pen_id=pen.pen_id, position=pen.position.as_tuple(), active=pen.active)
            for pen in self.pens.values()
        )
        return RenderSnapshot(frame=self.frame_count, paths=paths, shapes=shapes, pens=pens)

    def get_debug_info(self) -> dict:
        return {
            "frame": self.frame_count,
            "shapes": len(self.registry),
            "paths": len(self.paths),
            "systems": [system.get_debug_info() for system in (
                self.closure_system,
                self.capture_system,
                self.animation_system,
            )],
            "phases": self._runner.get_debug_info(),
            "score": self.score.summary(),
        }
