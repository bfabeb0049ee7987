"""Update phase definitions for explicit execution ordering.

This module defines the phases of a simulation tick and a runner that
executes systems in phase order.

Why Explicit Phases?
--------------------
The capture core depends on a fixed order inside every tick:

- a loop closed by the closure detector must be visible to the containment
  query in the same tick (PATH_CLOSE runs before CAPTURE);
- a capture session created in CAPTURE is first advanced on the next tick,
  so it always starts from a complete snapshot of its groups;
- only one phase mutates shapes at a time (ANIMATION moves held shapes,
  PHYSICS moves free ones, SPAWN adds new ones).

Usage:
------
    runner = PhaseRunner()
    runner.register(capture_system)
    runner.register(recording_system)
    runner.run_all(frame=1)  # PATH_RECORD before CAPTURE
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, List

# Explicit public API
__all__ = [
    "UpdatePhase",
    "PhaseRunner",
    "runs_in_phase",
]

if TYPE_CHECKING:
    from lasso.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a simulation tick.

    Systems execute in phase order. Within a phase, systems execute
    in registration order.
    """

    INPUT = auto()  # Apply pen positions and drawing flags
    PATH_RECORD = auto()  # Append pen positions to trails
    PATH_CLOSE = auto()  # Detect self-intersections, close loops
    CAPTURE = auto()  # Containment query and fusion resolution
    ANIMATION = auto()  # Advance capture sessions one phase
    SPAWN = auto()  # Spawn requested waves
    PHYSICS = auto()  # Integrate free shapes, bounce off walls and trails


@dataclass
class PhaseRunner:
    """Executes systems in their declared phases."""

    _systems_by_phase: Dict[UpdatePhase, List["BaseSystem"]] = field(
        default_factory=lambda: {phase: [] for phase in UpdatePhase}
    )

    def register(self, system: "BaseSystem") -> None:
        """Register a system under the phase it declares.

        Raises:
            ValueError: If the system declares no phase
        """
        phase = getattr(system, "_phase", None)
        if phase is None:
            raise ValueError(f"{system!r} declares no phase; decorate it with @runs_in_phase")
        self._systems_by_phase[phase].append(system)

    def run_all(self, frame: int) -> None:
        """Run every system, phase by phase; disabled systems skip themselves."""
        for phase in UpdatePhase:
            for system in self._systems_by_phase[phase]:
                system.update(frame)

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "systems_per_phase": {
                phase.name: [s.name for s in systems]
                for phase, systems in self._systems_by_phase.items()
                if systems
            },
        }


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.CAPTURE)
        class CaptureSystem(BaseSystem):
            def _do_update(self, frame: int) -> None:
                ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator
