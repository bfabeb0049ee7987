"""Runs every capture session one phase per tick.

Sessions started during a tick are parked until the end of this system's
update, so a session's first phase always runs on the tick after the
capture that created it.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from lasso.capture_animation import AnimationContext, CaptureSession
from lasso.fusion import FusionResult
from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from lasso.simulation.engine import CaptureEngine

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.ANIMATION)
class CaptureAnimationSystem(BaseSystem):
    """Owns running capture sessions."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "CaptureAnimation")
        self._sessions: Dict[int, CaptureSession] = {}
        self._starting: List[CaptureSession] = []
        self._next_id = 1
        self._completed = 0

    @property
    def sessions(self) -> List[CaptureSession]:
        """Running sessions (including ones waiting for their first tick)."""
        return list(self._sessions.values()) + list(self._starting)

    def start_session(self, fusion: FusionResult, path_id: Optional[int] = None) -> CaptureSession:
        session = CaptureSession(self._next_id, fusion, path_id)
        self._next_id += 1
        self._starting.append(session)
        return session

    def reset(self) -> None:
        """Drop running and queued sessions without committing them."""
        dropped = len(self._sessions) + len(self._starting)
        self._sessions = {}
        self._starting = []
        if dropped:
            logger.info("Dropped %d capture session(s) on reset", dropped)

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        engine = self.engine
        ctx = AnimationContext(
            registry=engine.registry,
            paths=engine.paths,
            event_bus=engine.event_bus,
            rng=engine.rng,
            config=engine.config.capture,
            frame=frame,
            dt=engine.delta_time,
        )

        finished = []
        for session_id, session in self._sessions.items():
            if session.advance(ctx):
                finished.append(session_id)
        for session_id in finished:
            del self._sessions[session_id]
        self._completed += len(finished)

        for session in self._starting:
            self._sessions[session.session_id] = session
        self._starting = []

        return SystemResult(
            entities_affected=len(self._sessions),
            details={"sessions_completed": len(finished)},
        )

    def get_debug_info(self):
        info = super().get_debug_info()
        info["sessions"] = {sid: s.phase_name() for sid, s in self._sessions.items()}
        info["completed"] = self._completed
        return info
