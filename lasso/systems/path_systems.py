"""Trail recording and closure detection systems."""

import logging
from typing import TYPE_CHECKING, Optional

from lasso.events import PathClosedEvent
from lasso.path_tracker import record_point
from lasso.paths import ClosureOutcome, try_close
from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from lasso.simulation.engine import CaptureEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.PATH_RECORD)
class PathRecordingSystem(BaseSystem):
    """Appends every active pen's position to its trail."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "PathRecording")

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        recorded = 0
        for pen in self.engine.pens.values():
            if record_point(pen, self.engine.paths):
                recorded += 1
        return SystemResult(entities_affected=recorded)


@runs_in_phase(UpdatePhase.PATH_CLOSE)
class PathClosureSystem(BaseSystem):
    """Closes open trails at their first self-intersection."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "PathClosure")
        self._loops_closed = 0

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        closed = 0
        for path in list(self.engine.paths.open_paths()):
            outcome = try_close(path)
            if outcome is ClosureOutcome.OPEN:
                continue
            self.engine.paths.mark_closed(path)
            closed += 1
            self.engine.event_bus.emit(
                PathClosedEvent(
                    path_id=path.path_id,
                    pen_id=path.pen_id,
                    loop_size=len(path.points),
                    kept_remainder=outcome is ClosureOutcome.CLOSED_WITH_REMAINDER,
                    frame=frame,
                )
            )
        self._loops_closed += closed
        return SystemResult(
            entities_affected=closed, events_emitted=closed, details={"loops_closed": closed}
        )

    def get_debug_info(self):
        info = super().get_debug_info()
        info["loops_closed"] = self._loops_closed
        return info
