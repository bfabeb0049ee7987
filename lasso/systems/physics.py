"""Moves free shapes and bounces them off walls and trails."""

from typing import TYPE_CHECKING, Optional

from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from lasso.simulation.engine import CaptureEngine


@runs_in_phase(UpdatePhase.PHYSICS)
class PhysicsSystem(BaseSystem):
    """Delegates integration to the shape registry."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "Physics")

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        bounces = self.engine.registry.step(self.engine.delta_time)
        return SystemResult(details={"bounces": bounces})
