"""Spawns waves of primary shapes when the field needs repopulating."""

import logging
from typing import TYPE_CHECKING, Optional

from lasso.events import WaveRequestedEvent
from lasso.kinds import ShapeKind
from lasso.math_utils import Vector2
from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase
from lasso.util.rng import ShuffleBag

if TYPE_CHECKING:
    from lasso.simulation.engine import CaptureEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.SPAWN)
class WaveSpawningSystem(BaseSystem):
    """Turns WaveRequestedEvents into shapes.

    One wave per request. A wave is small when fewer than ``small_wave_size``
    shapes are alive, otherwise large. Kinds come from a shuffle bag of the
    three primaries.
    """

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "WaveSpawning")
        self._pending_waves = 0
        self._waves_spawned = 0
        self._bag = ShuffleBag([ShapeKind.RED, ShapeKind.BLUE, ShapeKind.GREEN], engine.rng)
        engine.event_bus.subscribe(WaveRequestedEvent, self._on_wave_requested)

    @property
    def pending_waves(self) -> int:
        return self._pending_waves

    def _on_wave_requested(self, event: WaveRequestedEvent) -> None:
        logger.debug("Wave requested (%s) at frame %d", event.reason, event.frame)
        self._pending_waves += 1

    def reset(self) -> None:
        """Forget waves requested before the reset."""
        self._pending_waves = 0

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        if self._pending_waves == 0:
            return SystemResult.empty()

        spawned = 0
        while self._pending_waves > 0:
            self._pending_waves -= 1
            spawned += self._spawn_wave()
            self._waves_spawned += 1
        logger.info("Spawned %d shapes (waves so far: %d)", spawned, self._waves_spawned)
        return SystemResult(entities_spawned=spawned)

    def _spawn_wave(self) -> int:
        engine = self.engine
        spawning = engine.config.spawning
        alive = len(list(engine.registry.alive_shapes()))
        count = spawning.large_wave_size if alive >= spawning.small_wave_size else spawning.small_wave_size

        half_w, half_h = engine.config.display.half_extents
        max_x = half_w - spawning.spawn_margin
        max_y = half_h - spawning.spawn_margin
        rng = engine.rng
        for _ in range(count):
            engine.registry.spawn(
                self._bag.draw(),
                Vector2(rng.uniform(-max_x, max_x), rng.uniform(-max_y, max_y)),
                Vector2(
                    rng.uniform(-spawning.max_spawn_velocity, spawning.max_spawn_velocity),
                    rng.uniform(-spawning.max_spawn_velocity, spawning.max_spawn_velocity),
                ),
            )
        return count
