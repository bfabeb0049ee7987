"""Score keeping.

The end-of-game score is a tally of the shapes left on the field per kind.
``ScoreBoard`` also counts capture activity from domain events so a run can
be summarised in headless mode.
"""

import logging
from collections import Counter
from typing import Dict, Iterable

from lasso.entities import Shape
from lasso.events import CaptureResolvedEvent, EventBus, ShapesEjectedEvent, ShapesFusedEvent
from lasso.kinds import ShapeKind

logger = logging.getLogger(__name__)


def tally(shapes: Iterable[Shape]) -> Dict[ShapeKind, int]:
    """Count shapes per kind; every kind is present, zero if absent."""
    counts = Counter(shape.kind for shape in shapes)
    return {kind: counts.get(kind, 0) for kind in ShapeKind}


class ScoreBoard:
    """Accumulates capture statistics for one session."""

    def __init__(self) -> None:
        self.captures = 0
        self.shapes_ejected = 0
        self.fusions: Counter = Counter()

    def subscribe(self, event_bus: EventBus) -> None:
        event_bus.subscribe(CaptureResolvedEvent, self._on_capture)
        event_bus.subscribe(ShapesFusedEvent, self._on_fused)
        event_bus.subscribe(ShapesEjectedEvent, self._on_ejected)

    def _on_capture(self, event: CaptureResolvedEvent) -> None:
        self.captures += 1

    def _on_fused(self, event: ShapesFusedEvent) -> None:
        self.fusions[event.result_kind] += 1

    def _on_ejected(self, event: ShapesEjectedEvent) -> None:
        self.shapes_ejected += len(event.shape_ids)

    def summary(self) -> Dict[str, object]:
        return {
            "captures": self.captures,
            "shapes_ejected": self.shapes_ejected,
            "fusions": dict(self.fusions),
        }
