"""Applies per-tick pen input: position and the drawing flag.

Activation is edge triggered. Pressing (flag False -> True) activates the
pen; releasing (True -> False) cancels drawing and discards the open path.
When the capture core deactivates a pen itself, the pen stays inactive
until the flag is released and pressed again.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

from lasso.math_utils import Vector2
from lasso.systems.base import BaseSystem, SystemResult
from lasso.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from lasso.entities import Pen
    from lasso.simulation.engine import CaptureEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PenInput:
    """Input sample for one pen."""

    position: Vector2
    drawing: bool


@runs_in_phase(UpdatePhase.INPUT)
class PenInputSystem(BaseSystem):
    """Moves pens and turns drawing on and off."""

    def __init__(self, engine: "CaptureEngine") -> None:
        super().__init__(engine, "PenInput")
        self._pending: Dict[int, PenInput] = {}

    def submit(self, pen_id: int, position: Vector2, drawing: bool) -> None:
        """Queue input for ``pen_id``; the latest sample per tick wins."""
        self._pending[pen_id] = PenInput(position=position.copy(), drawing=drawing)

    def _do_update(self, frame: int) -> Optional[SystemResult]:
        pending, self._pending = self._pending, {}
        cancelled = 0
        for pen_id, sample in pending.items():
            pen = self.engine.pens.get(pen_id)
            if pen is None:
                logger.debug("Input for unknown pen #%d ignored", pen_id)
                continue
            pen.position = sample.position
            if sample.drawing and not pen.input_held:
                pen.activate()
            elif not sample.drawing and pen.input_held:
                cancelled += self._cancel(pen)
            pen.input_held = sample.drawing
        return SystemResult(entities_affected=len(pending), entities_removed=cancelled)

    def _cancel(self, pen: "Pen") -> int:
        """Stop drawing and discard the in-progress open path."""
        removed = 0
        path = self.engine.paths.get(pen.path_id)
        if path is not None and not path.closed:
            self.engine.paths.destroy_path(path.path_id, reason="cancelled")
            removed = 1
        pen.deactivate()
        return removed
