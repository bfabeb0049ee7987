"""Capture system: containment query plus count-based dispatch.

Runs once per tick on every closed loop whose membership must be
(re)evaluated, after the closure detector so freshly closed loops are seen
in the same tick. Outcomes by number of shapes caught:

- 0: an active stroke reopens from its saved remainder and keeps drawing;
  without a remainder the pen stops and the loop is dropped. A background
  loop is dropped.
- 1: not a valid capture. The owning pen stops and the loop is dropped.
- 2 or more: fusion is resolved and a capture session is queued on the
  animation system and the captured shapes are held at once; the loop
  stays until the session absorbs it.
"""

import logging
from typing import TYPE_CHECKING, Optional

from lasso.containment import find_contained
from lasso.events import CaptureResolvedEvent
from lasso.fusion import CaptureVerdict, classify_capture, resolve_fusion
from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from lasso.paths import Path
    from lasso.simulation.engine import CaptureEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.CAPTURE)
class CaptureSystem(BaseSystem):
    """Evaluates closed loops and hands captures to the animation system."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "Capture")
        self._captures = 0
        self._abandoned = 0
        self._resumed = 0

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        result = SystemResult.empty()
        for path in list(self.engine.paths.changed_loops()):
            result = result + self._evaluate(path, frame)
        return result

    def _evaluate(self, path: "Path", frame: int) -> SystemResult:
        engine = self.engine
        path.changed = False
        captured = find_contained(path.points, engine.registry.alive_shapes())
        verdict = classify_capture(len(captured))

        pen = engine.pens.get(path.pen_id)
        owns_path = pen is not None and pen.path_id == path.path_id

        if verdict is CaptureVerdict.EMPTY:
            if owns_path and pen.active and engine.paths.restore_remainder(path):
                self._resumed += 1
                return SystemResult(entities_affected=1, details={"resumed": 1})
            if owns_path:
                pen.deactivate()
            engine.paths.destroy_path(path.path_id, reason="abandoned")
            self._abandoned += 1
            return SystemResult(entities_removed=1, details={"abandoned": 1})

        if verdict is CaptureVerdict.SINGLE:
            if pen is not None:
                pen.deactivate()
            engine.paths.destroy_path(path.path_id, reason="abandoned")
            self._abandoned += 1
            return SystemResult(entities_removed=1, details={"abandoned": 1})

        fusion = resolve_fusion(captured)
        # Held from now on so no other loop can claim them before Initialize runs
        for entity in captured:
            engine.registry.set_collidable(entity.shape_id, False)
        if owns_path:
            pen.deactivate()
        session = engine.animation_system.start_session(fusion, path.path_id)
        self._captures += 1
        logger.debug(
            "Loop #%d caught %d shapes -> session #%d (%d groups, %d to explode)",
            path.path_id,
            len(captured),
            session.session_id,
            len(fusion.groups),
            len(fusion.explode),
        )
        engine.event_bus.emit(
            CaptureResolvedEvent(
                path_id=path.path_id,
                captured_ids=tuple(entity.shape_id for entity in captured),
                group_kinds=tuple(group.result_kind.value for group in fusion.groups),
                exploded_ids=tuple(entity.shape_id for entity in fusion.explode),
                frame=frame,
            )
        )
        return SystemResult(
            entities_affected=len(captured), events_emitted=1, details={"captures": 1}
        )

    def get_debug_info(self):
        info = super().get_debug_info()
        info.update(
            {"captures": self._captures, "abandoned": self._abandoned, "resumed": self._resumed}
        )
        return info
